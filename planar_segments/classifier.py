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


"""Pair classifier - runs every segment/segment query of a job on one pair."""

import logging
import math

from .numeric import resolve_dtype
from .relation import classify_relation

logger = logging.getLogger(__name__)


class PairClassifier:
    """
    Classify segment pairs according to the job parameters.

    Modifies pair objects in-place following the Mutable State pattern.
    """

    SUPPORTED_DTYPES = ['int32', 'int64', 'float32', 'float64']

    def __init__(self, parameters):
        """
        Initialize classifier with job parameters.

        Args:
            parameters : dict
                Dictionary with keys:
                - dtype: Scalar type the segments are converted to
                - tolerance: Zero-test tolerance of the intersection queries
                - check_only_segments: Bound intersections to the segments (default True)
                - ignore_coincident_lines: Never intersect coincident lines (default False)

        """
        self.dtype_name = str(parameters['dtype']).lower()
        self.tolerance = parameters['tolerance']
        self.check_only_segments = parameters.get('check_only_segments', True)
        self.ignore_coincident_lines = parameters.get('ignore_coincident_lines', False)

        if self.dtype_name not in self.SUPPORTED_DTYPES:
            raise ValueError(f"Unsupported dtype: {self.dtype_name}")
        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, (int, float)):
            raise ValueError(f"tolerance must be a number, got {self.tolerance!r}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")
        for flag in ('check_only_segments', 'ignore_coincident_lines'):
            if not isinstance(getattr(self, flag), bool):
                raise ValueError(f"{flag} must be true or false, got {getattr(self, flag)!r}")

        self.dtype = resolve_dtype(self.dtype_name)

    def classify_pair(self, pair):
        """
        Classify a segment pair.

        Modifies pair object in-place: converts both segments to the job's
        scalar type and sets pair.result and pair.is_classified.

        Args:
            pair : SegmentPair
                Pair object to process

        Returns
        -------
        bool
            True if successful, False otherwise

        """
        try:
            self._validate_pair(pair)

            first = pair.first.astype(self.dtype)
            second = pair.second.astype(self.dtype)

            relation = classify_relation(first, second, self.tolerance)
            intersection = first.intersect(
                second,
                check_only_segments=self.check_only_segments,
                ignore_coincident_lines=self.ignore_coincident_lines,
                tolerance=self.tolerance,
            )
            overlap = first.overlap(second, self.tolerance)

            pair.first = first
            pair.second = second
            pair.result = {
                'relation': relation.value,
                'intersection': None if intersection is None else intersection.tolist(),
                'overlap': None if overlap is None else [overlap.start.tolist(), overlap.end.tolist()],
                'crosses': first.crosses(second),
                'crosses_exactly_once': first.crosses_exactly_once(second),
                'nearly_parallel': first.nearly_parallel(second),
                'angle_deg': first.angle_with(second),
                'first_length': first.length().item(),
                'second_length': second.length().item(),
            }
            pair.is_classified = True

            logger.debug("Classified %s as %s", pair.name, relation.value)
            return True

        except ValueError as e:
            logger.error("Error classifying pair %s: %s", pair.name, e)
            pair.is_classified = False
            return False

    def _validate_pair(self, pair):
        """Validate that pair geometry is usable."""
        for label, segment in (('first', pair.first), ('second', pair.second)):
            coords = segment.start.tolist() + segment.end.tolist()
            if not all(math.isfinite(c) for c in coords):
                raise ValueError(f"{label} segment has non-finite coordinates: {segment!r}")
