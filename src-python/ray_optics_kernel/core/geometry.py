"""
Copyright 2026 ray-optics-kernel authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from shapely.geometry import Point as ShapelyPoint, LineString, Polygon

if __name__ == "__main__":
    from ray_optics_kernel.core.constants import TWO_PI, CIRCLE_CENTER_THRESHOLD_SQUARED
else:
    from .constants import TWO_PI, CIRCLE_CENTER_THRESHOLD_SQUARED


def fix_angle(angle: float) -> float:
    """
    Normalize an angle into [0, 2*pi).

    Args:
        angle: Angle in radians, any range.

    Returns:
        The equivalent angle in [0, 2*pi).
    """
    result = math.fmod(angle, TWO_PI)
    if result < 0:
        result += TWO_PI
    # fmod of a tiny negative number can round up to exactly 2*pi
    if result >= TWO_PI:
        result = 0.0
    return result


class Vector2:
    """
    An immutable 2D vector, also used for points.

    Supports the usual arithmetic (``+``, ``-``, ``*`` and ``/`` by a scalar,
    unary ``-``) and unpacks like a tuple: ``x, y = v``.
    """

    __slots__ = ('x', 'y')

    def __init__(self, x: float, y: float):
        object.__setattr__(self, 'x', float(x))
        object.__setattr__(self, 'y', float(y))

    def __setattr__(self, name, value):
        raise AttributeError("Vector2 is immutable")

    def __reduce__(self):
        return (Vector2, (self.x, self.y))

    @classmethod
    def of(cls, value: Union['Vector2', Sequence[float], dict]) -> 'Vector2':
        """
        Coerce a Vector2, an (x, y) pair or an {'x', 'y'} dict to a Vector2.

        Raises:
            ValueError: If the value cannot be read as a 2D point.
        """
        if isinstance(value, Vector2):
            return value
        if isinstance(value, dict):
            try:
                return cls(value['x'], value['y'])
            except KeyError as err:
                raise ValueError(f"Point dict needs 'x' and 'y' keys, got {value!r}") from err
        try:
            x, y = value
        except (TypeError, ValueError) as err:
            raise ValueError(f"Cannot interpret {value!r} as a 2D point") from err
        return cls(x, y)

    @classmethod
    def from_angle(cls, angle: float, length: float = 1.0) -> 'Vector2':
        """Create a vector with the given heading and length."""
        return cls(math.cos(angle) * length, math.sin(angle) * length)

    def __add__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2') -> 'Vector2':
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> 'Vector2':
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __truediv__(self, k: float) -> 'Vector2':
        return Vector2(self.x / k, self.y / k)

    def __neg__(self) -> 'Vector2':
        return Vector2(-self.x, -self.y)

    def __iter__(self):
        yield self.x
        yield self.y

    def __eq__(self, other) -> bool:
        if not isinstance(other, Vector2):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return hash((self.x, self.y))

    def __repr__(self) -> str:
        return f"Vector2(x={self.x}, y={self.y})"

    def dot(self, other: 'Vector2') -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Vector2') -> float:
        """z component of the 3D cross product."""
        return self.x * other.y - self.y * other.x

    def mag_sq(self) -> float:
        return self.x * self.x + self.y * self.y

    def mag(self) -> float:
        return math.sqrt(self.mag_sq())

    def normalize(self) -> 'Vector2':
        """
        Return the unit vector with the same heading.

        A zero vector has no heading and is returned unchanged.
        """
        m = self.mag()
        if m == 0:
            return self
        return Vector2(self.x / m, self.y / m)

    def heading(self) -> float:
        """Angle of the vector, in (-pi, pi]."""
        return math.atan2(self.y, self.x)

    def rotate(self, angle: float) -> 'Vector2':
        """Rotate counter-clockwise by ``angle`` radians."""
        c = math.cos(angle)
        s = math.sin(angle)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def perpendicular(self) -> 'Vector2':
        """The vector rotated by +pi/2."""
        return Vector2(-self.y, self.x)

    def angle_between(self, other: 'Vector2') -> float:
        """Unsigned angle between two vectors, in [0, pi]."""
        denom = self.mag() * other.mag()
        if denom == 0:
            return 0.0
        return math.acos(max(-1.0, min(1.0, self.dot(other) / denom)))

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_shapely(self) -> ShapelyPoint:
        """Convert to Shapely Point."""
        return ShapelyPoint(self.x, self.y)

    @classmethod
    def from_shapely(cls, sp: ShapelyPoint) -> 'Vector2':
        """Create Vector2 from Shapely Point."""
        return cls(sp.x, sp.y)


class Segment:
    """
    A line segment defined by an origin point and a displacement vector.

    The boundary of mirrors, voids, filters and lenses, and one edge of a
    polygonal block.
    """

    __slots__ = ('origin', 'displacement')

    def __init__(self, origin: Vector2, displacement: Vector2):
        self.origin = Vector2.of(origin)
        self.displacement = Vector2.of(displacement)

    @classmethod
    def from_points(cls, p1, p2) -> 'Segment':
        p1 = Vector2.of(p1)
        return cls(p1, Vector2.of(p2) - p1)

    @property
    def p1(self) -> Vector2:
        return self.origin

    @property
    def p2(self) -> Vector2:
        return self.origin + self.displacement

    @property
    def direction(self) -> Vector2:
        """Unit direction from p1 to p2."""
        return self.displacement.normalize()

    @property
    def length(self) -> float:
        return self.displacement.mag()

    @property
    def midpoint(self) -> Vector2:
        return self.origin + self.displacement * 0.5

    @property
    def normal(self) -> Vector2:
        """Unit normal (direction rotated by +pi/2)."""
        return self.direction.perpendicular()

    def to_shapely(self) -> LineString:
        """Convert to Shapely LineString."""
        return LineString([self.p1.to_tuple(), self.p2.to_tuple()])

    def __repr__(self) -> str:
        return f"Segment(p1={self.p1}, p2={self.p2})"


class Circle:
    """A circle defined by its center and radius."""

    __slots__ = ('center', 'radius')

    def __init__(self, center: Vector2, radius: float):
        self.center = Vector2.of(center)
        self.radius = float(radius)

    def contains(self, point: Vector2) -> bool:
        """Whether the point lies inside or on the circle."""
        return (point - self.center).mag_sq() <= self.radius * self.radius

    def to_shapely(self, resolution: int = 64):
        """Convert to a Shapely polygon (buffered point approximation)."""
        return self.center.to_shapely().buffer(self.radius, resolution)

    def __repr__(self) -> str:
        return f"Circle(center={self.center}, radius={self.radius})"


class ArcSpan:
    """
    A bounded range of headings on a circle.

    Attributes:
        start (float): Start heading, normalized into [0, 2*pi).
        span (float): Angular extent counter-clockwise from ``start``, in (0, 2*pi].
    """

    __slots__ = ('start', 'span')

    def __init__(self, start: float, span: float):
        if span <= 0:
            raise ValueError(f"Arc span must be positive, got {span}")
        self.start = fix_angle(start)
        self.span = min(float(span), TWO_PI)

    @property
    def end(self) -> float:
        return fix_angle(self.start + self.span)

    def contains_angle(self, angle: float) -> bool:
        """Whether a heading lies within the span (wraps through 0)."""
        if self.span >= TWO_PI:
            return True
        return fix_angle(angle - self.start) <= self.span

    def __repr__(self) -> str:
        return f"ArcSpan(start={self.start}, span={self.span})"


class Geometry:
    """
    Intersection and containment predicates used by the collision resolver.

    All methods are static; use the module level ``geometry`` instance.
    """

    @staticmethod
    def point(x: float, y: float) -> Vector2:
        return Vector2(x, y)

    @staticmethod
    def segment(p1, p2) -> Segment:
        """Create a segment from its two endpoints."""
        return Segment.from_points(p1, p2)

    @staticmethod
    def distance_squared(p1: Vector2, p2: Vector2) -> float:
        return (p1 - p2).mag_sq()

    @staticmethod
    def distance(p1: Vector2, p2: Vector2) -> float:
        return (p1 - p2).mag()

    @staticmethod
    def midpoint(p1: Vector2, p2: Vector2) -> Vector2:
        return Vector2((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)

    @staticmethod
    def within_segment(point: Vector2, origin: Vector2, direction: Vector2) -> bool:
        """
        Test whether a point on the line of a ray lies forward of its origin.

        Args:
            point: Candidate point (assumed on the ray's line).
            origin: Ray origin.
            direction: Ray direction.

        Returns:
            True if the point is strictly ahead of the origin.
        """
        return (point - origin).dot(direction) > 0

    @staticmethod
    def ray_segment_intersection(
        origin: Vector2,
        direction: Vector2,
        segment: Segment
    ) -> Optional[Vector2]:
        """
        Intersect a ray with a segment.

        Solves the 2x2 system for the segment parameter t and the ray
        parameter u. Parallel lines (determinant exactly zero) do not
        intersect.

        Args:
            origin: Ray origin.
            direction: Ray direction (need not be unit length).
            segment: The segment.

        Returns:
            The intersection point with 0 < t < 1 and u > 0, or None.
        """
        x1, y1 = segment.p1
        x2, y2 = segment.p2
        x3, y3 = origin
        x4 = origin.x + direction.x
        y4 = origin.y + direction.y

        den = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
        if den == 0:
            return None

        t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / den
        u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / den

        if 0 < t < 1 and u > 0:
            return Vector2(x1 + t * (x2 - x1), y1 + t * (y2 - y1))
        return None

    @staticmethod
    def ray_circle_intersections(
        origin: Vector2,
        direction: Vector2,
        circle: Circle,
        arc: Optional[ArcSpan] = None
    ) -> List[Vector2]:
        """
        Intersect a ray with a circle, optionally restricted to an arc.

        The circle center is projected onto the ray's line to get the
        perpendicular foot. When the foot is (almost) the center the
        chord is a diameter along the ray direction.

        Args:
            origin: Ray origin.
            direction: Unit ray direction.
            circle: The circle.
            arc: If given, only points whose heading from the center lies
                in this span are kept.

        Returns:
            Forward intersection points (0, 1 or 2), nearest first.
        """
        direction = direction.normalize()
        if direction.mag_sq() == 0:
            return []

        center = circle.center
        r = circle.radius
        foot = origin + direction * (center - origin).dot(direction)
        d_sq = (foot - center).mag_sq()
        r_sq = r * r
        if d_sq > r_sq:
            return []

        if d_sq <= CIRCLE_CENTER_THRESHOLD_SQUARED:
            candidates = [center - direction * r, center + direction * r]
        else:
            half_chord = math.sqrt(r_sq - d_sq)
            candidates = [foot - direction * half_chord, foot + direction * half_chord]

        points = []
        for pt in candidates:
            if not Geometry.within_segment(pt, origin, direction):
                continue
            if arc is not None and not arc.contains_angle((pt - center).heading()):
                continue
            points.append(pt)
        return points

    @staticmethod
    def point_in_polygon(point: Vector2, segments: Iterable[Segment]) -> bool:
        """
        Even-odd containment test.

        Casts a ray from the point in direction (1, 0) and counts the
        boundary edges it crosses. Each edge is treated as half-open in y so
        that a crossing exactly through a vertex is counted once.

        Args:
            point: The point to classify.
            segments: Closed boundary of the polygon.

        Returns:
            True if the crossing count is odd.
        """
        px, py = point
        inside = False
        for seg in segments:
            x1, y1 = seg.p1
            x2, y2 = seg.p2
            if (y1 > py) == (y2 > py):
                continue
            x_cross = x1 + (py - y1) * (x2 - x1) / (y2 - y1)
            if x_cross > px:
                inside = not inside
        return inside

    @staticmethod
    def reflect(direction: Vector2, axis: Vector2) -> Vector2:
        """
        Reflect a direction about an axis: d' = 2(d.a)a - d.

        Args:
            direction: Incoming direction.
            axis: Reflecting axis (the surface's direction); normalized here.

        Returns:
            The reflected direction, same length as ``direction``.
        """
        a = axis.normalize()
        return a * (2 * direction.dot(a)) - direction

    @staticmethod
    def polygon_centroid(vertices: Sequence[Vector2]) -> Vector2:
        """
        Area centroid of a polygon, computed by Shapely.

        Falls back to the vertex average when the polygon has no area.
        """
        poly = Polygon([v.to_tuple() for v in vertices])
        if poly.area == 0:
            n = len(vertices)
            return Vector2(sum(v.x for v in vertices) / n, sum(v.y for v in vertices) / n)
        return Vector2.from_shapely(poly.centroid)

    @staticmethod
    def polygon_to_shapely(vertices: Sequence[Vector2]) -> Polygon:
        """Convert a vertex list to a Shapely Polygon."""
        return Polygon([v.to_tuple() for v in vertices])


# Module-level instance, same usage as the other core modules:
#   from .geometry import geometry
#   geometry.ray_segment_intersection(...)
geometry = Geometry()


if __name__ == "__main__":
    seg = geometry.segment((10, -10), (10, 10))
    hit = geometry.ray_segment_intersection(Vector2(0, 0), Vector2(1, 0), seg)
    print(f"Ray/segment hit: {hit}")

    circle = Circle(Vector2(50, 0), 10)
    print(f"Ray/circle hits: {geometry.ray_circle_intersections(Vector2(0, 0), Vector2(1, 0), circle)}")

    square = [geometry.segment(a, b) for a, b in [((0, 0), (1, 0)), ((1, 0), (1, 1)),
                                                  ((1, 1), (0, 1)), ((0, 1), (0, 0))]]
    print(f"(0.5, 0.5) inside square: {geometry.point_in_polygon(Vector2(0.5, 0.5), square)}")
    print(f"fix_angle(-pi/2) = {fix_angle(-math.pi / 2)}")
