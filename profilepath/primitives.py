"""
Resolved 2D path elements.

These are the concrete building blocks of a profile: straight lines and
circular arcs with fully determined geometry. Every element exposes its start
and end point and the heading at both ends, and can be reversed.
"""

import math
from typing import Optional, Union

from .cad_types import Angle, Point, PointLike
from .constants import NEAR_VERTICAL_SLOPE, POINT_TOLERANCE, VERTICAL_TOLERANCE

_QUARTER_TURN = Angle(degrees=90.0)


def angle_of(point: Point, center: Point) -> Angle:
    """Return the angle of `point` seen from `center`.

    A point sitting on the center has no direction; it is reported at 0.
    """
    dx = point.x - center.x
    dy = point.y - center.y
    if dx == 0 and dy == 0:
        return Angle(degrees=0.0)
    return Angle.from_delta(dx, dy)


class LineElement:
    """A straight line from `start` to `end`.

    `is_end_valid_end_point` is False for provisional rays: long lines that
    emulate an infinite line until a later element fixes their end. A
    reversed ray keeps its phantom point as `start`, marked by
    `is_start_valid_start_point`.
    """

    def __init__(
        self,
        start: PointLike,
        end: PointLike,
        is_end_valid_end_point: bool = True,
        is_start_valid_start_point: bool = True,
    ):
        self.start = Point.of(start)
        self.end = Point.of(end)
        self.is_end_valid_end_point = is_end_valid_end_point
        self.is_start_valid_start_point = is_start_valid_start_point

    @classmethod
    def ray(cls, start: PointLike, heading: Angle, length: float) -> "LineElement":
        """A provisional ray leaving `start` along `heading`."""
        start = Point.of(start)
        end = Point(
            start.x + math.cos(heading.rad) * length,
            start.y + math.sin(heading.rad) * length,
        )
        return cls(start, end, is_end_valid_end_point=False)

    @classmethod
    def ending_at(cls, heading: Angle, length: float, end: PointLike) -> "LineElement":
        """A line of `length` arriving at `end` along `heading`."""
        end = Point.of(end)
        start = Point(
            end.x - math.cos(heading.rad) * length,
            end.y - math.sin(heading.rad) * length,
        )
        return cls(start, end)

    # ========== Path element interface ==========

    @property
    def start_point(self) -> Point:
        return self.start

    @property
    def start_heading(self) -> Angle:
        return self.heading

    @property
    def end_point(self) -> Optional[Point]:
        if not self.is_end_valid_end_point:
            return None
        return self.end

    @property
    def end_heading(self) -> Angle:
        return self.heading

    @property
    def reversed(self) -> "LineElement":
        return LineElement(
            self.end,
            self.start,
            is_end_valid_end_point=self.is_start_valid_start_point,
            is_start_valid_start_point=self.is_end_valid_end_point,
        )

    # ========== Line equation ==========

    @property
    def dx(self) -> float:
        return self.end.x - self.start.x

    @property
    def dy(self) -> float:
        return self.end.y - self.start.y

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dy)

    @property
    def is_vertical(self) -> bool:
        dx = abs(self.dx)
        return dx < VERTICAL_TOLERANCE or abs(self.dy) > NEAR_VERTICAL_SLOPE * dx

    @property
    def is_horizontal(self) -> bool:
        return self.start.y == self.end.y

    @property
    def m(self) -> float:
        """Slope; only meaningful for non-vertical lines."""
        return self.dy / self.dx

    @property
    def b(self) -> float:
        """Intercept with the y-axis; only meaningful for non-vertical lines."""
        return self.start.y - self.m * self.start.x

    def y_at(self, x: float) -> float:
        return self.m * x + self.b

    @property
    def heading(self) -> Angle:
        """Direction from start to end; 0 along x, turning left is positive."""
        return angle_of(self.end, self.start)

    def isclose(self, other: object, abs_tol: float = POINT_TOLERANCE) -> bool:
        if not isinstance(other, LineElement):
            return False
        return self.start.isclose(other.start, abs_tol) and self.end.isclose(
            other.end, abs_tol
        )

    def __eq__(self, other):
        if not isinstance(other, LineElement):
            return NotImplemented
        return self.isclose(other)

    __hash__ = None

    def __repr__(self) -> str:
        return f"LineElement(start=({self.start.x}, {self.start.y}), end=({self.end.x}, {self.end.y}))"


# The intersection engine works on the same type
LineSegment = LineElement


class ArcElement:
    """An arc of `radius` around `center` from `start_angle` to `end_angle`.

    `negative_direction` means the arc is swept clockwise. Start and end
    points are derived from the angles.
    """

    def __init__(
        self,
        center: PointLike,
        radius: float,
        start_angle: Angle,
        end_angle: Angle,
        negative_direction: bool = False,
    ):
        if radius <= 0:
            raise ValueError(f"Arc radius must be positive, got {radius}")
        self.center = Point.of(center)
        self.radius = float(radius)
        self.start_angle = start_angle
        self.end_angle = end_angle
        self.negative_direction = negative_direction

    @classmethod
    def from_points(
        cls,
        center: PointLike,
        radius: float,
        start: PointLike,
        end: PointLike,
        negative_direction: bool = False,
    ) -> "ArcElement":
        """Create an arc whose angles are given by `start` and `end`.

        The points only define the angles; they need not lie on the circle.
        """
        center = Point.of(center)
        return cls(
            center,
            radius,
            angle_of(Point.of(start), center),
            angle_of(Point.of(end), center),
            negative_direction,
        )

    @property
    def start(self) -> Point:
        return self._point_at(self.start_angle)

    @property
    def end(self) -> Point:
        return self._point_at(self.end_angle)

    def _point_at(self, angle: Angle) -> Point:
        return Point(
            self.center.x + math.cos(angle.rad) * self.radius,
            self.center.y + math.sin(angle.rad) * self.radius,
        )

    # ========== Path element interface ==========

    @property
    def start_point(self) -> Point:
        return self.start

    @property
    def start_heading(self) -> Angle:
        return self._tangent(self.start_angle)

    @property
    def end_point(self) -> Optional[Point]:
        return self.end

    @property
    def end_heading(self) -> Angle:
        return self._tangent(self.end_angle)

    @property
    def reversed(self) -> "ArcElement":
        """The same arc traversed from end to start."""
        return ArcElement(
            self.center,
            self.radius,
            self.end_angle,
            self.start_angle,
            not self.negative_direction,
        )

    def _tangent(self, angle: Angle) -> Angle:
        if self.negative_direction:
            return angle - _QUARTER_TURN
        return angle + _QUARTER_TURN

    def heading_at(self, point: Point) -> Angle:
        """Tangent heading in travel direction at the circle point nearest `point`."""
        return self._tangent(angle_of(point, self.center))

    def angular_length(self, to: Point) -> Angle:
        """Angle swept from the start, in travel direction, to reach `to`."""
        target = angle_of(to, self.center)
        factor = -1.0 if self.negative_direction else 1.0
        return Angle(radians=factor * (target.rad - self.start_angle.rad))

    @property
    def sweep(self) -> Angle:
        return self.angular_length(self.end)

    def isclose(self, other: object, abs_tol: float = POINT_TOLERANCE) -> bool:
        if not isinstance(other, ArcElement):
            return False
        return (
            self.negative_direction == other.negative_direction
            and self.center.isclose(other.center, abs_tol)
            and math.isclose(self.radius, other.radius, abs_tol=abs_tol)
            and self.start.isclose(other.start, abs_tol)
            and self.end.isclose(other.end, abs_tol)
        )

    def __eq__(self, other):
        if not isinstance(other, ArcElement):
            return NotImplemented
        return self.isclose(other)

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"ArcElement(center=({self.center.x}, {self.center.y}), radius={self.radius}, "
            f"start_angle={self.start_angle.degrees}, end_angle={self.end_angle.degrees}, "
            f"negative_direction={self.negative_direction})"
        )


class Circle:
    """A full circle, used as a helper when intersecting arcs."""

    def __init__(self, center: PointLike, radius: float):
        self.center = Point.of(center)
        self.radius = radius

    @classmethod
    def of(cls, arc: ArcElement) -> "Circle":
        return cls(arc.center, arc.radius)


PathElement = Union[LineElement, ArcElement]
