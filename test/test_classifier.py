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

import logging
import math

import numpy as np
import pytest

from planar_segments.classifier import PairClassifier
from planar_segments.segment_pair import SegmentPair


def make_parameters(**overrides):
    parameters = {
        'dtype': 'float64',
        'tolerance': 1e-6,
        'check_only_segments': True,
        'ignore_coincident_lines': False,
    }
    parameters.update(overrides)
    return parameters


def make_pair(first, second, name='pair'):
    return SegmentPair({
        'name': name,
        'first': {'start': first[0], 'end': first[1]},
        'second': {'start': second[0], 'end': second[1]},
    })


@pytest.mark.parametrize('overrides', [
    {'dtype': 'float16'},
    {'dtype': 'complex'},
    {'tolerance': 'small'},
    {'tolerance': True},
    {'tolerance': -1e-3},
    {'check_only_segments': 'yes'},
    {'ignore_coincident_lines': 0},
])
def test_invalid_parameters_raise(overrides):
    with pytest.raises(ValueError):
        PairClassifier(make_parameters(**overrides))


def test_optional_flags_default():
    classifier = PairClassifier({'dtype': 'Float32', 'tolerance': 0})
    assert classifier.dtype == np.float32
    assert classifier.check_only_segments is True
    assert classifier.ignore_coincident_lines is False


def test_classify_crossing_pair():
    pair = make_pair(([0, 0], [4, 4]), ([0, 4], [4, 0]), name='cross')
    assert PairClassifier(make_parameters()).classify_pair(pair)

    assert pair.is_classified
    assert pair.first.dtype == np.float64
    result = pair.result
    assert result['relation'] == 'crossing'
    assert result['intersection'] == [2.0, 2.0]
    assert result['overlap'] is None
    assert result['crosses'] is True
    assert result['crosses_exactly_once'] is True
    assert result['nearly_parallel'] is False
    assert result['angle_deg'] == pytest.approx(90.0)
    assert result['first_length'] == pytest.approx(math.sqrt(32))
    assert result['second_length'] == pytest.approx(math.sqrt(32))


def test_classify_overlapping_pair():
    pair = make_pair(([0, 0], [4, 0]), ([2, 0], [6, 0]))
    assert PairClassifier(make_parameters()).classify_pair(pair)

    assert pair.result['relation'] == 'collinear_overlap'
    assert pair.result['overlap'] == [[2.0, 0.0], [4.0, 0.0]]
    assert pair.result['intersection'] == [3.0, 0.0]
    assert pair.result['crosses'] is True
    assert pair.result['crosses_exactly_once'] is False
    assert pair.result['nearly_parallel'] is True


def test_ignore_coincident_lines():
    pair = make_pair(([0, 0], [4, 0]), ([2, 0], [6, 0]))
    classifier = PairClassifier(make_parameters(ignore_coincident_lines=True))
    assert classifier.classify_pair(pair)
    assert pair.result['intersection'] is None
    assert pair.result['overlap'] == [[2.0, 0.0], [4.0, 0.0]]


def test_lines_instead_of_segments():
    pair = make_pair(([0, 0], [1, 1]), ([3, 0], [5, -4]))
    assert PairClassifier(make_parameters()).classify_pair(pair)
    assert pair.result['intersection'] is None

    assert PairClassifier(make_parameters(check_only_segments=False)).classify_pair(pair)
    assert pair.result['intersection'] == [2.0, 2.0]
    assert pair.result['relation'] == 'disjoint'


def test_segments_are_converted_to_job_dtype():
    pair = make_pair(([0.6, 0.2], [4.9, 4.1]), ([0, 4], [4, 0]))
    assert PairClassifier(make_parameters(dtype='int32')).classify_pair(pair)

    assert pair.first.dtype == np.int32
    assert pair.second.dtype == np.int32
    assert pair.first.start.tolist() == [0, 0]
    assert pair.first.end.tolist() == [4, 4]
    assert pair.result['intersection'] == [2, 2]
    assert pair.result['first_length'] == 5


def test_non_finite_pair_fails(caplog):
    pair = make_pair(([float('nan'), 0.0], [1.0, 1.0]), ([0.0, 1.0], [1.0, 0.0]), name='broken')
    with caplog.at_level(logging.ERROR):
        assert not PairClassifier(make_parameters()).classify_pair(pair)

    assert not pair.is_classified
    assert pair.result is None
    assert 'broken' in caplog.text


def test_pair_export_requires_classification():
    pair = make_pair(([0, 0], [1, 0]), ([0, 1], [1, 1]), name='rails')
    with pytest.raises(RuntimeError):
        pair.to_dict()
    assert 'not classified' in repr(pair)

    PairClassifier(make_parameters()).classify_pair(pair)
    exported = pair.to_dict()
    assert exported['name'] == 'rails'
    assert exported['first'] == {'start': [0.0, 0.0], 'end': [1.0, 0.0]}
    assert exported['relation'] == 'parallel'
    assert repr(pair) == "SegmentPair('rails', parallel)"


def test_near_coincident_pair_reports_consistent_row():
    pair = make_pair(([0.0, 0.0], [4.0, 0.0]), ([2.0, 1e-8], [6.0, 1e-8]))
    assert PairClassifier(make_parameters()).classify_pair(pair)

    assert pair.result['relation'] == 'disjoint'
    assert pair.result['overlap'] is None
    assert pair.result['intersection'] is None
    assert pair.result['crosses'] is False


def test_small_crossing_pair_is_not_parallel():
    pair = make_pair(([0.0, 0.0], [4e-4, 4e-4]), ([0.0, 4e-4], [4e-4, 0.0]))
    assert PairClassifier(make_parameters()).classify_pair(pair)

    assert pair.result['relation'] == 'crossing'
    assert pair.result['overlap'] is None
