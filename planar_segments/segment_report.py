#!/usr/bin/env python3

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

"""Main user entry point - orchestrates loading, classifying, and exporting."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

if __name__ == '__main__':
    sys.path.insert(0, str(Path(__file__).parent.parent))

from planar_segments import io_utils
from planar_segments.classifier import PairClassifier


DEFAULT_JOB = Path(__file__).parent.parent / "config" / "segment_job.yaml"

JOB_HELP = """
Job file layout:
  parameters:
    dtype: float64                  # int32 | int64 | float32 | float64
    tolerance: 1.0e-6               # zero test of intersect(), coincidence distance
    check_only_segments: true       # false intersects the infinite lines
    ignore_coincident_lines: false  # true reports no point for overlaps
  pairs:
    - name: diagonal_cross          # optional, defaults to pair_<i>
      first: {start: [0, 0], end: [4, 4]}
      second: {start: [0, 4], end: [4, 0]}

Examples:
  %(prog)s -i config/segment_job.yaml
  %(prog)s -i grid_int32.yaml -o reports/grid.json -v
"""


def parse_arguments(argv=None):
    """Parse command line arguments; the bundled sample job is the default input."""
    parser = argparse.ArgumentParser(
        description="Classify pairs of 2D segments and report their intersections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=JOB_HELP,
    )
    parser.add_argument(
        '--input', '-i',
        default=str(DEFAULT_JOB) if DEFAULT_JOB.exists() else None,
        help='segment job YAML (default: bundled config/segment_job.yaml)',
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='JSON report path (default: <job dir>/generated/<job>_<timestamp>.json)',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='print job parameters and each pair\'s relation; log at DEBUG level',
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Orchestrate loading, classifying, and exporting of segment pairs."""
    args = parse_arguments(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    if args.input is None:
        print("ERROR: No input file specified and default job not found")
        print("Use --input to specify a YAML job file")
        return 1

    try:
        # Load Job
        if args.verbose:
            print(f"Loading job from: {args.input}")

        pairs, parameters = io_utils.load_segment_job(args.input)

        if args.verbose:
            print(f"  Job: {Path(args.input).stem}")
            print(f"  Scalar type: {parameters['dtype']}")
            print(f"  Tolerance: {parameters['tolerance']}")
            print(f"  Only segments: {parameters['check_only_segments']}")
            print(f"  Ignore coincident lines: {parameters['ignore_coincident_lines']}")
            print(f"  Number of pairs: {len(pairs)}")
            print()

        # Create Classifier
        classifier = PairClassifier(parameters)

        # Classify Each Pair
        if args.verbose:
            print(f"Classifying {len(pairs)} pair(s)...")

        for pair in pairs:
            if args.verbose:
                print(f"  Processing {pair.name}:")
                print(f"    First:  {pair.first.start.tolist()} -> {pair.first.end.tolist()}")
                print(f"    Second: {pair.second.start.tolist()} -> {pair.second.end.tolist()}")

            success = classifier.classify_pair(pair)

            if not success:
                print(f"✗ Failed to classify {pair.name}")
                return 1

            if args.verbose:
                print(f"    Relation: {pair.result['relation']}")
                print(f"    Intersection: {pair.result['intersection']}")

        print(f"Classified {len(pairs)} pair(s)")

        # Export to JSON
        if args.output is None:
            output_path = io_utils.auto_generate_output_path(args.input)
            if args.verbose:
                print(f"Auto-generated output path: {output_path}")
        else:
            output_path = Path(args.output)

        metadata = {
            'input_file': str(Path(args.input).resolve()),
            'dtype': parameters['dtype'],
            'tolerance': parameters['tolerance'],
            'check_only_segments': parameters['check_only_segments'],
            'ignore_coincident_lines': parameters['ignore_coincident_lines'],
        }

        io_utils.export_to_json(pairs, output_path, metadata)
        print(f"Report written to {output_path}")

        return 0

    except FileNotFoundError as e:
        print(f"ERROR: {e}")
        return 1
    except (ValueError, yaml.YAMLError) as e:
        print(f"ERROR: Invalid configuration - {e}")
        return 1
    except Exception as e:
        print(f"ERROR: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
