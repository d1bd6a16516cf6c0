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

"""Segment2D - Pure geometry primitive for 2D line segments."""

import math

import numpy as np

from .numeric import EXTENDED_DTYPE, ROUNDING_ERROR_F32, is_integer_dtype, narrow, nearly_equal, resolve_dtype
from .point2d import Point2D, as_point, is_between, nearly_parallel, orientation, rotate_about


class Segment2D:
    """
    Represent a directed 2D line segment defined by start and end points.

    Pure geometry class - no application-specific logic.
    Depending on the query, the segment is treated either as a bounded
    segment or as the infinite line through its endpoints.

    Equality is undirected: a segment equals its reverse.
    Metric results (length, midpoint, intersection points, ...) are computed
    in double precision and converted back to the segment's scalar type.
    """

    def __init__(self, start=(0, 0), end=(1, 1), dtype=None):
        """
        Initialize line segment from start and end points.

        Args:
            start: Start point, Point2D or [x, y] (default (0, 0))
            end: End point, Point2D or [x, y] (default (1, 1))
            dtype: Scalar type (default: common type of both endpoints)

        Raises
        ------
        ValueError
            If points are not 2D

        """
        start = as_point(start, dtype)
        end = as_point(end, dtype)
        common = resolve_dtype(np.result_type(start.dtype, end.dtype))
        self.start = start.astype(common)
        self.end = end.astype(common)

    @classmethod
    def from_coords(cls, xa, ya, xb, yb, dtype=None):
        """Build a segment from (xa, ya) to (xb, yb)."""
        return cls(Point2D(xa, ya, dtype), Point2D(xb, yb, dtype), dtype)

    def copy(self):
        return Segment2D(self.start, self.end)

    __copy__ = copy

    @property
    def dtype(self):
        return self.start.dtype

    def astype(self, dtype):
        """Return a copy of this segment converted to another scalar type."""
        return Segment2D(self.start, self.end, dtype)

    def __iter__(self):
        yield self.start
        yield self.end

    # Setters

    def set_line(self, start, end):
        """Move both endpoints in place, keeping the segment's scalar type."""
        self.start = as_point(start, self.dtype)
        self.end = as_point(end, self.dtype)

    def set_coords(self, xa, ya, xb, yb):
        """Move both endpoints in place to (xa, ya) and (xb, yb)."""
        self.set_line(Point2D(xa, ya, self.dtype), Point2D(xb, yb, self.dtype))

    # Translation

    def __add__(self, offset):
        offset = as_point(offset)
        return Segment2D(self.start + offset, self.end + offset, self.dtype)

    def __iadd__(self, offset):
        offset = as_point(offset)
        self.set_line(self.start + offset, self.end + offset)
        return self

    def __sub__(self, offset):
        offset = as_point(offset)
        return Segment2D(self.start - offset, self.end - offset, self.dtype)

    def __isub__(self, offset):
        offset = as_point(offset)
        self.set_line(self.start - offset, self.end - offset)
        return self

    def __eq__(self, other):
        if not isinstance(other, Segment2D):
            return NotImplemented
        return ((self.start == other.start and self.end == other.end)
                or (self.start == other.end and self.end == other.start))

    # Mutable, hence unhashable.
    __hash__ = None

    # Metrics

    def length(self):
        """Calculate segment length."""
        return self.start.distance(self.end)

    def length_sq(self):
        """Calculate squared segment length."""
        return self.start.distance_sq(self.end)

    def midpoint(self):
        """Calculate midpoint of the segment."""
        sx, sy, ex, ey = self._coords()
        return Point2D((sx + ex) / 2, (sy + ey) / 2, self.dtype)

    def direction(self):
        """Return the unnormalized direction vector end - start."""
        return self.end - self.start

    def unit_direction(self):
        """
        Calculate normalized direction vector along the segment.

        Integer segments truncate the components, so convert with
        astype(np.float64) first to get a usable unit vector.

        Returns
        -------
        Point2D
            Normalized direction vector from start to end

        Raises
        ------
        ValueError
            If segment is degenerate (zero length)

        """
        sx, sy, ex, ey = self._coords()
        length = math.hypot(ex - sx, ey - sy)
        if not length > 0:
            raise ValueError("Segment is degenerate (zero length)")
        return Point2D((ex - sx) / length, (ey - sy) / length, self.dtype)

    def angle_with(self, other):
        """Angle in degrees in [0, 180] between the directions of two segments."""
        return self.direction().angle_with(other.direction())

    def point_at(self, t):
        """
        Get point along segment at parameter t.

        Args:
            t: Parameter value (0 = start, 1 = end)

        Returns
        -------
        Point2D
            Point at parameter t

        """
        sx, sy, ex, ey = self._coords()
        return Point2D(sx + t * (ex - sx), sy + t * (ey - sy), self.dtype)

    # Point classification

    def point_orientation(self, point):
        """
        Tell on which side of the directed line the point lies.

        Returns
        -------
        number
            0 if the point is on the line, > 0 if it is to the left,
            < 0 if it is to the right

        """
        sx, sy, ex, ey = self._coords()
        px, py = as_point(point).tolist()
        return (ex - sx) * (py - sy) - (px - sx) * (ey - sy)

    def contains_point(self, point):
        """Check exactly whether the point lies on the segment."""
        point = as_point(point)
        return self.point_orientation(point) == 0 and is_between(point, self.start, self.end)

    def is_point_between_endpoints(self, point):
        """Check whether a point already known to be on the line lies between start and end."""
        return is_between(as_point(point), self.start, self.end)

    # Segment/segment predicates

    def _orientations(self, other):
        return (
            orientation(self.start, self.end, other.start),
            orientation(self.start, self.end, other.end),
            orientation(other.start, other.end, self.start),
            orientation(other.start, other.end, self.end),
        )

    def crosses(self, other):
        """
        Check if this segment intersects another segment anywhere.

        Touching endpoints and collinear overlap count as intersecting.
        """
        o1, o2, o3, o4 = self._orientations(other)

        if o1 != o2 and o3 != o4:
            return True

        # Collinear special cases
        if o1 == 0 and is_between(other.start, self.start, self.end):
            return True
        if o2 == 0 and is_between(other.end, self.start, self.end):
            return True
        if o3 == 0 and is_between(self.start, other.start, other.end):
            return True
        if o4 == 0 and is_between(self.end, other.start, other.end):
            return True

        return False

    def crosses_exactly_once(self, other):
        """
        Check if the segments properly cross in a single interior point.

        Any collinear configuration, including a shared endpoint or an
        endpoint touching the other segment, is excluded.
        """
        o1, o2, o3, o4 = self._orientations(other)
        return o1 * o2 < 0 and o3 * o4 < 0

    def nearly_parallel(self, other, factor=None):
        """Check if the two lines are parallel within a relative tolerance."""
        return nearly_parallel(self.direction(), other.direction(), factor)

    # Intersections

    def _line_system(self, other):
        """Common denominator and both numerators of the line intersection system."""
        sx, sy, ex, ey = self._coords()
        osx, osy, oex, oey = other._coords()

        denominator = (oey - osy) * (ex - sx) - (oex - osx) * (ey - sy)
        numerator_a = (oex - osx) * (sy - osy) - (oey - osy) * (sx - osx)
        numerator_b = (ex - sx) * (sy - osy) - (ey - sy) * (sx - osx)
        return denominator, numerator_a, numerator_b

    def fast_intersection(self, other):
        """
        Intersect the infinite lines through both segments, without any checks.

        Segment bounds are ignored and no tolerance is applied. Callers must
        exclude parallel lines first (see nearly_parallel); for exactly
        parallel or coincident lines the result is None.

        Returns
        -------
        Point2D or None
            Intersection point of the two lines

        """
        denominator, numerator_a, _ = self._line_system(other)
        if denominator == 0:
            return None
        return self._point_from_parameter(numerator_a / denominator)

    def intersect(self, other, check_only_segments=True, ignore_coincident_lines=False,
                  tolerance=ROUNDING_ERROR_F32):
        """
        Intersect this line or segment with another one.

        Args:
            other : Segment2D
                Line to intersect with
            check_only_segments : bool, optional
                When True (default) the intersection must lie on both
                segments; when False both are treated as infinite lines
            ignore_coincident_lines : bool, optional
                When True, coincident lines never intersect. When False
                (default) a representative point of the overlap is returned
            tolerance : float, optional
                Tolerance of the parallel and coincidence tests

        Returns
        -------
        Point2D or None
            The intersection point, or None if there is none.
            For coincident overlapping segments this is the average of the
            two endpoints that bound the overlap, a single point standing
            in for the whole shared interval; use overlap() for the interval.

        """
        denominator, numerator_a, numerator_b = self._line_system(other)

        if nearly_equal(denominator, 0, tolerance):
            # Parallel or coincident; coincident lines have both numerators at zero.
            if (ignore_coincident_lines
                    or not nearly_equal(numerator_a, 0, tolerance)
                    or not nearly_equal(numerator_b, 0, tolerance)):
                return None
            return self._coincident_intersection(other)

        u_a = numerator_a / denominator
        if check_only_segments:
            if u_a < 0 or u_a > 1:
                return None
            u_b = numerator_b / denominator
            if u_b < 0 or u_b > 1:
                return None

        return self._point_from_parameter(u_a)

    def _coincident_intersection(self, other):
        """Representative intersection point of two segments on the same line."""
        for shared in (self.start, self.end):
            if shared == other.start or shared == other.end:
                return shared

        points = (self.start, self.end, other.start, other.end)
        if self._projections_disjoint(other):
            return None

        # Drop the two extreme points; the remaining two bound the overlap.
        max_point = _extreme_point(points, _exceeds)
        min_point = _extreme_point(points, _undercuts, exclude=max_point)
        inner = [p for p in points if p != max_point and p != min_point]
        if not inner:
            inner = [max_point, min_point]

        x = sum(p.tolist()[0] for p in inner) / len(inner)
        y = sum(p.tolist()[1] for p in inner) / len(inner)
        return Point2D(x, y, self.dtype)

    def _projections_disjoint(self, other):
        """Check if the other segment lies entirely beyond this one on either axis."""
        sx, sy, ex, ey = self._coords()
        osx, osy, oex, oey = other._coords()
        return (
            min(osx, oex) > max(sx, ex)
            or min(osy, oey) > max(sy, ey)
            or max(osx, oex) < min(sx, ex)
            or max(osy, oey) < min(sy, ey)
        )

    def is_coincident(self, other, tolerance=ROUNDING_ERROR_F32):
        """
        Check if both segments lie on the same infinite line.

        Every endpoint must be within `tolerance` distance of the other
        segment's line, so the test scales with the coordinates rather than
        with the segments' areas. A degenerate segment has no line of its
        own and only its point is tested.
        """
        for line, segment in ((self, other), (other, self)):
            for point in segment:
                distance = line._line_distance(point)
                if distance is not None and distance > tolerance:
                    return False
        return True

    def overlap(self, other, tolerance=ROUNDING_ERROR_F32):
        """
        Calculate the shared interval of two coincident segments.

        Endpoints taken from `other` are projected onto this segment's line,
        so the result is collinear with this segment.

        Returns
        -------
        Segment2D or None
            The overlapping part, zero-length if the segments only touch.
            None if the segments are not on the same line or do not overlap
            on both axes.

        """
        if not self.is_coincident(other, tolerance) or self._projections_disjoint(other):
            return None

        points = (self.start, self.end, other.start, other.end)
        xs = [p.tolist()[0] for p in points]
        ys = [p.tolist()[1] for p in points]
        axis = 0 if max(xs) - min(xs) >= max(ys) - min(ys) else 1

        def key(p):
            return p.tolist()[axis]

        low_a, high_a = sorted((self.start, self.end), key=key)
        low_b, high_b = sorted((other.start, other.end), key=key)
        low = max(low_a, low_b, key=key)
        high = min(high_a, high_b, key=key)
        if key(low) > key(high):
            return None
        return Segment2D(self._onto_line(low), self._onto_line(high), self.dtype)

    def _line_distance(self, point):
        """Distance from `point` to the infinite line; None for a degenerate segment."""
        sx, sy, ex, ey = self._coords()
        px, py = point.tolist()
        length = math.hypot(ex - sx, ey - sy)
        if length == 0:
            return None
        return abs((ex - sx) * (py - sy) - (ey - sy) * (px - sx)) / length

    def _onto_line(self, point):
        if self.point_orientation(point) == 0:
            return point
        return self.closest_point(point, clamp_to_segment=False)

    def intersect_line_with_segment(self, segment):
        """
        Intersect this infinite line with a bounded segment.

        Nearly parallel inputs are rejected up front instead of producing an
        unstable intersection point.

        Returns
        -------
        Point2D or None
            Intersection point if it lies on `segment`

        """
        if self.nearly_parallel(segment):
            return None

        point = self.fast_intersection(segment)
        if point is None or not is_between(point, segment.start, segment.end):
            return None
        return point

    # Projection

    def _closest_coords(self, point, clamp_to_segment):
        """Closest point on the segment or line, in extended precision."""
        sx, sy, ex, ey = self._coords()
        px, py = as_point(point).tolist()

        vx, vy = ex - sx, ey - sy
        length = math.hypot(vx, vy)
        if length == 0:
            return sx, sy

        vx, vy = vx / length, vy / length
        t = vx * (px - sx) + vy * (py - sy)

        if clamp_to_segment:
            if t < 0:
                return sx, sy
            if t > length:
                return ex, ey

        return sx + vx * t, sy + vy * t

    def closest_point(self, point, clamp_to_segment=True):
        """
        Get the point on this segment closest to `point`.

        Args:
            point : Point2D
                Query point
            clamp_to_segment : bool, optional
                When True (default) the result lies between start and end;
                when False it is the projection onto the infinite line

        Returns
        -------
        Point2D
            Closest point; start for a degenerate segment

        """
        x, y = self._closest_coords(point, clamp_to_segment)
        return Point2D(x, y, self.dtype)

    def distance_to(self, point, clamp_to_segment=True):
        """Distance from `point` to the segment (or to the line if not clamped)."""
        px, py = as_point(point).tolist()
        x, y = self._closest_coords(point, clamp_to_segment)
        return narrow(math.hypot(px - x, py - y), self.dtype)

    # Transforms

    def rotated(self, degrees, center=None):
        """
        Rotate the segment counter-clockwise about `center`.

        Args:
            degrees : float
                Rotation angle in degrees
            center : Point2D, optional
                Center of rotation (default: midpoint of the segment)

        Returns
        -------
        Segment2D
            Rotated copy; integer endpoints round to the nearest lattice point

        """
        center = self.midpoint() if center is None else as_point(center)
        coords = np.array([self.start.tolist(), self.end.tolist()], dtype=EXTENDED_DTYPE)
        rotated = rotate_about(coords, degrees, center)
        if is_integer_dtype(self.dtype):
            rotated = np.rint(rotated)
        return Segment2D(rotated[0], rotated[1], self.dtype)

    # Helpers

    def _coords(self):
        return (*self.start.tolist(), *self.end.tolist())

    def _point_from_parameter(self, u):
        sx, sy, ex, ey = self._coords()
        return Point2D(sx + u * (ex - sx), sy + u * (ey - sy), self.dtype)

    def __repr__(self):
        """Return string representation of line segment."""
        return f"Segment2D(start={self.start.tolist()}, end={self.end.tolist()}, dtype={self.dtype})"


def _exceeds(p, others):
    """True if p is strictly greater than all others on x or on y."""
    px, py = p.tolist()
    return (all(px > q.tolist()[0] for q in others)
            or all(py > q.tolist()[1] for q in others))


def _undercuts(p, others):
    """True if p is strictly smaller than all others on x or on y."""
    px, py = p.tolist()
    return (all(px < q.tolist()[0] for q in others)
            or all(py < q.tolist()[1] for q in others))


def _extreme_point(points, dominates, exclude=None):
    """First of `points` dominating the others; the last point if none does."""
    for i, p in enumerate(points[:-1]):
        if p == exclude:
            continue
        if dominates(p, points[:i] + points[i + 1:]):
            return p
    return points[-1]
