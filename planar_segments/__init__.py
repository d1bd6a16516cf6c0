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

"""2D point and segment primitives with robust intersection queries."""

from .point2d import Point2D, is_between, nearly_parallel, orientation
from .relation import SegmentRelation, classify_relation
from .segment2d import Segment2D

__all__ = [
    'Point2D',
    'Segment2D',
    'SegmentRelation',
    'classify_relation',
    'is_between',
    'nearly_parallel',
    'orientation',
]
