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

import pytest

from planar_segments import Segment2D, SegmentRelation, classify_relation


CASES = [
    ('crossing', Segment2D((0, 0), (4, 4)), Segment2D((0, 4), (4, 0)), SegmentRelation.CROSSING),
    ('shared_endpoint', Segment2D((0, 0), (2, 0)), Segment2D((2, 0), (2, 2)), SegmentRelation.TOUCHING),
    ('t_junction', Segment2D((0, 0), (4, 0)), Segment2D((2, 0), (2, 3)), SegmentRelation.TOUCHING),
    ('end_to_end', Segment2D((0, 0), (2, 0)), Segment2D((2, 0), (4, 0)), SegmentRelation.TOUCHING),
    ('rails', Segment2D((0, 0), (1, 0)), Segment2D((0, 1), (1, 1)), SegmentRelation.PARALLEL),
    ('overlap', Segment2D((0, 0), (4, 0)), Segment2D((2, 0), (6, 0)), SegmentRelation.COLLINEAR_OVERLAP),
    ('contained', Segment2D((0, 0), (10, 0)), Segment2D((2, 0), (5, 0)), SegmentRelation.COLLINEAR_OVERLAP),
    ('reversed', Segment2D((1, 1), (3, 2)), Segment2D((3, 2), (1, 1)), SegmentRelation.IDENTICAL),
    ('apart', Segment2D((0, 0), (1, 1)), Segment2D((3, 0), (5, -4)), SegmentRelation.DISJOINT),
    ('collinear_gap', Segment2D((0, 0), (1, 0)), Segment2D((2, 0), (3, 0)), SegmentRelation.DISJOINT),
    ('point_on_segment', Segment2D((2, 0), (2, 0)), Segment2D((0, 0), (4, 0)), SegmentRelation.TOUCHING),
    ('point_off_segment', Segment2D((5, 5), (5, 5)), Segment2D((0, 0), (1, 0)), SegmentRelation.DISJOINT),
]


@pytest.mark.parametrize('a, b, expected', [case[1:] for case in CASES], ids=[case[0] for case in CASES])
def test_classify_relation(a, b, expected):
    assert classify_relation(a, b) == expected


@pytest.mark.parametrize('a, b, expected', [case[1:] for case in CASES], ids=[case[0] for case in CASES])
def test_classify_relation_is_symmetric(a, b, expected):
    assert classify_relation(b, a) == expected


def test_classify_relation_with_floats():
    a = Segment2D((0.0, 0.0), (1.0, 1.0))
    b = Segment2D((0.0, 1.0), (1.0, 0.0))
    assert classify_relation(a, b) == SegmentRelation.CROSSING
    assert classify_relation(a, Segment2D((0.5, 0.5), (3.0, 3.0))) == SegmentRelation.COLLINEAR_OVERLAP


def test_relation_values_are_names():
    assert SegmentRelation.COLLINEAR_OVERLAP.value == 'collinear_overlap'
    assert {relation.value for relation in SegmentRelation} == {
        'disjoint', 'crossing', 'touching', 'parallel', 'collinear_overlap', 'identical',
    }


@pytest.mark.parametrize('scale', [1e-4, 1e-2, 1.0, 1e4])
def test_crossing_is_independent_of_scale(scale):
    a = Segment2D((0.0, 0.0), (4.0 * scale, 4.0 * scale))
    b = Segment2D((0.0, 4.0 * scale), (4.0 * scale, 0.0))
    assert classify_relation(a, b) == SegmentRelation.CROSSING
    assert classify_relation(b, a) == SegmentRelation.CROSSING


def test_small_perpendicular_segments_cross():
    a = Segment2D((0.0, 0.0), (0.001, 0.0))
    b = Segment2D((0.0005, -0.0005), (0.0005, 0.0005))
    assert classify_relation(a, b) == SegmentRelation.CROSSING


def test_small_rails_are_parallel_not_overlapping():
    a = Segment2D((0.0, 0.0), (1e-3, 0.0))
    b = Segment2D((0.0, 1e-3), (1e-3, 1e-3))
    assert classify_relation(a, b) == SegmentRelation.PARALLEL


def test_offset_within_tolerance_without_shared_extent_is_disjoint():
    a = Segment2D((0.0, 0.0), (4.0, 0.0))
    b = Segment2D((2.0, 1e-8), (6.0, 1e-8))
    assert classify_relation(a, b) == SegmentRelation.DISJOINT
    assert a.overlap(b) is None
    assert a.intersect(b) is None
    assert not a.crosses(b)


def test_diagonal_offset_within_tolerance_overlaps():
    a = Segment2D((0.0, 0.0), (4.0, 4.0))
    b = Segment2D((2.0, 2.0 + 1e-9), (6.0, 6.0 + 1e-9))
    assert classify_relation(a, b) == SegmentRelation.COLLINEAR_OVERLAP
