# Copyright 2025 Berkan Tali
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""File I/O utilities for loading YAML segment jobs and exporting JSON reports."""

import json
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path

import yaml

from .segment_pair import SegmentPair

logger = logging.getLogger(__name__)

DEFAULT_PARAMETERS = {
    'check_only_segments': True,
    'ignore_coincident_lines': False,
}


def load_segment_job(yaml_path):
    """
    Load a segment job configuration from a YAML file.

    Parameters
    ----------
    yaml_path : str
        Path to the YAML configuration file.

    Returns
    -------
    tuple
        A tuple containing the following elements:
        - pairs : list
            List of SegmentPair objects.
        - parameters : dict
            Dictionary of job parameters, with defaults filled in.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML structure is invalid.

    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError("Job file must contain a mapping")

    required_keys = ['pairs', 'parameters']
    for key in required_keys:
        if key not in config:
            raise ValueError(f"Missing required key in YAML: '{key}'")

    required_params = ['dtype', 'tolerance']
    for param in required_params:
        if param not in config['parameters']:
            raise ValueError(f"Missing required parameter: '{param}'")

    if not config['pairs']:
        raise ValueError("No segment pairs defined in configuration")

    parameters = {**DEFAULT_PARAMETERS, **config['parameters']}

    pairs = []
    for i, pair_dict in enumerate(config['pairs']):
        for key in ('first', 'second'):
            segment = pair_dict.get(key) if isinstance(pair_dict, dict) else None
            if not isinstance(segment, dict) or 'start' not in segment or 'end' not in segment:
                raise ValueError(f"Pair {i} missing '{key}' segment with 'start' and 'end'")

        pairs.append(SegmentPair(pair_dict, name=f"pair_{i}"))

    names = Counter(pair.name for pair in pairs)
    duplicates = sorted(str(name) for name, count in names.items() if count > 1)
    if duplicates:
        raise ValueError(f"Duplicate pair names: {', '.join(duplicates)}")

    logger.debug("Loaded %d pair(s) from %s", len(pairs), yaml_path)
    return pairs, parameters


def export_to_json(pairs, output_path, metadata=None):
    """
    Export classified segment pairs to a JSON file.

    Parameters
    ----------
    pairs : list
        List of SegmentPair objects. Pairs must be classified before export.
    output_path : str
        Path where the JSON file will be written.
    metadata : dict, optional
        Optional metadata to include in the output file.

    Raises
    ------
    RuntimeError
        If any pair has not been classified yet.

    """
    output_path = Path(output_path)

    for i, pair in enumerate(pairs):
        if not pair.is_classified:
            raise RuntimeError(f"Pair {i} has not been classified yet - cannot export")

    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        'metadata': {
            'generated_at': datetime.now().isoformat(),
            'num_pairs': len(pairs),
            'relations': dict(Counter(pair.result['relation'] for pair in pairs)),
        },
        'pairs': {}
    }

    if metadata:
        data['metadata'].update(metadata)

    for pair in pairs:
        data['pairs'][pair.name] = pair.to_dict()

    with open(output_path, 'w') as f:
        json.dump(data, f, indent=2)

    logger.debug("Wrote %d pair(s) to %s", len(pairs), output_path)


def auto_generate_output_path(input_path):
    """
    Generate an output path with a timestamp next to the job file.

    The output directory will be:
    <job file directory>/generated/
    """
    input_path = Path(input_path)
    job_name = input_path.stem
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    output_dir = input_path.parent / "generated"
    output_dir.mkdir(parents=True, exist_ok=True)

    output_filename = f"{job_name}_{timestamp}.json"
    return output_dir / output_filename
