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

"""SegmentPair - Two segments from a job file and their classification result."""

from .segment2d import Segment2D


class SegmentPair:
    """
    Represent a pair of segments to be classified.

    Wraps two Segment2D objects and holds the classification state (result).
    """

    def __init__(self, pair_dict, name=None):
        """
        Initialize pair from YAML dictionary.

        Args:
            pair_dict : dict
                Dictionary with 'first' and 'second' keys, each holding
                'start' and 'end' points
            name : str, optional
                Fallback name when the dictionary has no 'name' key

        """
        self.name = pair_dict.get('name', name)
        self.first = Segment2D(pair_dict['first']['start'], pair_dict['first']['end'])
        self.second = Segment2D(pair_dict['second']['start'], pair_dict['second']['end'])
        self.result = None
        self.is_classified = False

    def to_dict(self):
        """
        Convert pair to dictionary for JSON export.

        Returns
        -------
        dict
            Dictionary with both segments and the classification result

        Raises
        ------
        RuntimeError
            If the pair has not been classified yet

        """
        if not self.is_classified:
            raise RuntimeError(f"Cannot export pair '{self.name}' - not classified yet")

        return {
            'name': self.name,
            'first': _segment_dict(self.first),
            'second': _segment_dict(self.second),
            **self.result,
        }

    def __repr__(self):
        """Return string representation of the pair."""
        status = self.result['relation'] if self.is_classified else "not classified"
        return f"SegmentPair({self.name!r}, {status})"


def _segment_dict(segment):
    return {'start': segment.start.tolist(), 'end': segment.end.tolist()}
