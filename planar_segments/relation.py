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

"""Classification of the geometric relationship between two segments."""

from enum import Enum

from .numeric import ROUNDING_ERROR_F32


class SegmentRelation(Enum):
    """Qualitatively different ways two segments can relate."""

    DISJOINT = 'disjoint'
    CROSSING = 'crossing'
    TOUCHING = 'touching'
    PARALLEL = 'parallel'
    COLLINEAR_OVERLAP = 'collinear_overlap'
    IDENTICAL = 'identical'


def classify_relation(a, b, tolerance=ROUNDING_ERROR_F32):
    """
    Classify how segment `a` relates to segment `b`.

    Args:
        a : Segment2D
            First segment
        b : Segment2D
            Second segment
        tolerance : float, optional
            Largest distance between a segment endpoint and the other
            segment's line for the two to count as coincident

    Returns
    -------
    SegmentRelation
        IDENTICAL for equal segments (in either direction), CROSSING for a
        proper crossing, TOUCHING when the segments meet in a single point
        that is an endpoint of one of them, COLLINEAR_OVERLAP when they share
        an interval, PARALLEL for distinct parallel lines and DISJOINT
        otherwise

    """
    if a == b:
        return SegmentRelation.IDENTICAL

    if a.nearly_parallel(b):
        if a.is_coincident(b, tolerance):
            shared = a.overlap(b, tolerance)
            if shared is None:
                return SegmentRelation.DISJOINT
            if shared.length_sq() == 0:
                return SegmentRelation.TOUCHING
            return SegmentRelation.COLLINEAR_OVERLAP
        # A single point off the other line is not a parallel line.
        if a.length_sq() == 0 or b.length_sq() == 0:
            return SegmentRelation.DISJOINT
        return SegmentRelation.PARALLEL

    if a.crosses_exactly_once(b):
        return SegmentRelation.CROSSING
    if a.crosses(b):
        return SegmentRelation.TOUCHING
    return SegmentRelation.DISJOINT
