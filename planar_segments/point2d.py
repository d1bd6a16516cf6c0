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

"""Point2D - 2D point/vector value type and the predicates segment logic relies on."""

import math

import numpy as np
from scipy.spatial.transform import Rotation

from .numeric import (
    EXTENDED_DTYPE,
    ROUNDING_ERROR_F32,
    equals_relative,
    is_integer_dtype,
    narrow,
    nearly_equal,
    resolve_dtype,
)


class Point2D:
    """
    Represent a 2D point or vector with coordinates of one scalar type.

    Instances are immutable values: they compare by coordinates and are
    hashable. The scalar type is a numpy dtype (int32, int64, float32 or
    float64) inferred from the coordinates unless given explicitly.
    """

    __slots__ = ('_xy',)

    def __init__(self, x=0, y=0, dtype=None):
        """
        Initialize point from its coordinates.

        Args:
            x: X coordinate
            y: Y coordinate
            dtype: Scalar type; coordinates are converted to it

        Raises
        ------
        ValueError
            If coordinates are not scalars or the scalar type is unsupported

        """
        if dtype is not None:
            dtype = resolve_dtype(dtype)
        xy = np.array((x, y), dtype=dtype)

        if xy.shape != (2,):
            raise ValueError("Point coordinates must be scalars [x, y]")
        if dtype is None:
            resolve_dtype(xy.dtype)

        xy.setflags(write=False)
        self._xy = xy

    @classmethod
    def from_array(cls, values, dtype=None):
        """
        Build a point from an array-like [x, y].

        Raises
        ------
        ValueError
            If values is not a 2D point

        """
        arr = np.asarray(values)
        if arr.shape != (2,):
            raise ValueError(f"Point must be 2D [x, y], got shape {arr.shape}")
        return cls(arr[0], arr[1], dtype=arr.dtype if dtype is None else dtype)

    @property
    def x(self):
        return self._xy[0]

    @property
    def y(self):
        return self._xy[1]

    @property
    def dtype(self):
        return self._xy.dtype

    def astype(self, dtype):
        """Return this point converted to another scalar type."""
        dtype = resolve_dtype(dtype)
        if dtype == self.dtype:
            return self
        return Point2D(self._xy[0], self._xy[1], dtype=dtype)

    def tolist(self):
        """Return coordinates as Python numbers."""
        return self._xy.tolist()

    def to_array(self):
        """Return a writable copy of the coordinates."""
        return self._xy.copy()

    def __iter__(self):
        yield self.x
        yield self.y

    # Arithmetic

    def __add__(self, other):
        if not isinstance(other, Point2D):
            return NotImplemented
        return Point2D.from_array(self._xy + other._xy)

    def __sub__(self, other):
        if not isinstance(other, Point2D):
            return NotImplemented
        return Point2D.from_array(self._xy - other._xy)

    def __neg__(self):
        return Point2D.from_array(-self._xy)

    def __mul__(self, scalar):
        if not isinstance(scalar, (int, float, np.number)):
            return NotImplemented
        x, y = self.tolist()
        return Point2D(x * scalar, y * scalar, dtype=self.dtype)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if not isinstance(scalar, (int, float, np.number)):
            return NotImplemented
        if scalar == 0:
            raise ZeroDivisionError(f"Cannot divide {self!r} by zero")
        x, y = self.tolist()
        return Point2D(x / scalar, y / scalar, dtype=self.dtype)

    def __eq__(self, other):
        if not isinstance(other, Point2D):
            return NotImplemented
        return bool(np.array_equal(self._xy, other._xy))

    def __hash__(self):
        return hash(tuple(self.tolist()))

    def nearly_equals(self, other, tolerance=ROUNDING_ERROR_F32):
        """Tolerant counterpart of ==, comparing each coordinate within `tolerance`."""
        ax, ay = self.tolist()
        bx, by = other.tolist()
        return nearly_equal(ax, bx, tolerance) and nearly_equal(ay, by, tolerance)

    # Products and metrics. Computed on Python numbers: exact for integer
    # coordinates, double precision for floating ones.

    def dot(self, other):
        """Dot product."""
        ax, ay = self.tolist()
        bx, by = other.tolist()
        return ax * bx + ay * by

    def cross(self, other):
        """Z component of the cross product (signed parallelogram area)."""
        ax, ay = self.tolist()
        bx, by = other.tolist()
        return ax * by - ay * bx

    def magnitude_sq(self):
        return narrow(self.dot(self), self.dtype)

    def magnitude(self):
        return narrow(math.hypot(*self.tolist()), self.dtype)

    def distance_sq(self, other):
        """Squared distance to another point."""
        ax, ay = self.tolist()
        bx, by = other.tolist()
        return narrow((ax - bx) ** 2 + (ay - by) ** 2, self.dtype)

    def distance(self, other):
        """Distance to another point."""
        ax, ay = self.tolist()
        bx, by = other.tolist()
        return narrow(math.hypot(ax - bx, ay - by), self.dtype)

    def angle_with(self, other):
        """
        Calculate the unsigned angle between this vector and another.

        Opposite directions give 180 degrees; the angle is not folded into
        [0, 90] the way Irrlicht's vector2d::getAngleWith folds it.

        Returns
        -------
        float
            Angle in degrees in [0, 180]. 90.0 if either vector is zero.

        """
        len_a = math.hypot(*self.tolist())
        len_b = math.hypot(*other.tolist())
        if len_a == 0 or len_b == 0:
            return 90.0

        cos_angle = self.dot(other) / (len_a * len_b)
        cos_angle = min(1.0, max(-1.0, cos_angle))
        return math.degrees(math.acos(cos_angle))

    def rotated(self, degrees, center=None):
        """
        Rotate counter-clockwise about `center` (the origin by default).

        Integer points are rounded to the nearest lattice point.
        """
        center = Point2D() if center is None else as_point(center)
        xy = rotate_about(np.array([self.tolist()], dtype=EXTENDED_DTYPE), degrees, center)[0]
        if is_integer_dtype(self.dtype):
            xy = np.rint(xy)
        return Point2D(xy[0], xy[1], dtype=self.dtype)

    def __repr__(self):
        x, y = self.tolist()
        return f"Point2D({x!r}, {y!r}, dtype={self.dtype})"


def as_point(value, dtype=None):
    """Coerce a Point2D or array-like [x, y] to a Point2D, optionally of `dtype`."""
    if isinstance(value, Point2D):
        return value if dtype is None else value.astype(dtype)
    return Point2D.from_array(value, dtype=dtype)


def rotate_about(points_xy, degrees, center):
    """
    Rotate an (N, 2) array of points counter-clockwise about `center`.

    Args:
        points_xy : np.ndarray
            Points as rows, in extended precision
        degrees : float
            Rotation angle in degrees
        center : Point2D
            Center of rotation

    Returns
    -------
    np.ndarray
        Rotated points as an (N, 2) array

    """
    center_xy = np.asarray(center.tolist(), dtype=EXTENDED_DTYPE)
    offsets = np.zeros((len(points_xy), 3))
    offsets[:, :2] = points_xy - center_xy

    rotated = Rotation.from_euler('z', degrees, degrees=True).apply(offsets)
    return rotated[:, :2] + center_xy


def orientation(a, b, c):
    """
    Classify point c against the directed line a -> b.

    Returns
    -------
    int
        +1 if c is to the left (counter-clockwise turn), -1 if to the
        right, 0 if the three points are collinear

    """
    ax, ay = a.tolist()
    bx, by = b.tolist()
    cx, cy = c.tolist()
    area = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)
    return (area > 0) - (area < 0)


def is_between(p, a, b):
    """
    Check whether p lies within the closed extent of segment a-b.

    Only meaningful once p is known to be collinear with a and b. The
    extent is taken along x, or along y for a vertical segment; a
    degenerate segment contains only its own point.
    """
    px, py = p.tolist()
    ax, ay = a.tolist()
    bx, by = b.tolist()
    if ax != bx:
        return ax <= px <= bx or bx <= px <= ax
    if ay != by:
        return ay <= py <= by or by <= py <= ay
    return px == ax and py == ay


def nearly_parallel(v1, v2, factor=None):
    """
    Check whether two direction vectors are parallel within a relative tolerance.

    Compares v1.x * v2.y against v1.y * v2.x, so the tolerance scales with
    the magnitude of the components. Integer vectors compare exactly. A zero
    vector is parallel to every vector.
    """
    x1, y1 = v1.tolist()
    x2, y2 = v2.tolist()
    dtype = np.result_type(v1.dtype, v2.dtype)
    return equals_relative(x1 * y2, y1 * x2, factor=factor, dtype=dtype)
