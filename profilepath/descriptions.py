"""
Segment descriptions: the possibly incomplete input of a profile path.

A description only states what the caller knows about a segment. Whether it
is enough to draw the segment depends on the descriptions around it; the
path builder resolves them into concrete path elements.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from .cad_types import Angle, Direction, Point, PointLike
from .errors import NoIntersectionError
from .geometry import angle_of, circle_point

_QUARTER_TURN = Angle(degrees=90.0)
_HALF_TURN = Angle(degrees=180.0)


def _optional_point(value: Optional[PointLike]) -> Optional[Point]:
    return None if value is None else Point.of(value)


class Line:
    """
    A straight line description.

    A line is uniquely described by its start and end point. Less may be
    enough in context, e.g. only the end point when the previous element
    ends at a known point, or a heading to be intersected with neighbours.
    """

    def __init__(
        self,
        start: Optional[PointLike] = None,
        end: Optional[PointLike] = None,
        heading: Optional[Angle] = None,
    ):
        self.start = _optional_point(start)
        self.end = _optional_point(end)
        self.heading = heading

    @property
    def is_completely_defined(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def reversed(self) -> "Line":
        heading = None if self.heading is None else self.heading + _HALF_TURN
        return Line(start=self.end, end=self.start, heading=heading)

    def __repr__(self) -> str:
        return f"Line(start={self.start}, end={self.end}, heading={self.heading})"


class Arc:
    """
    A circular arc description.

    Radius and direction are always known (the radius can be derived from
    `center` together with `start` or `end`). Everything else is optional:
    an arc giving only its radius attaches tangentially to the previous
    element and needs a later element to find its end.

    Args:
        radius: Radius of the arc
        direction: Sense of sweep, clockwise or counterclockwise
        center: Center of the arc
        start: Start point
        end: End point
        start_angle: Angle of the start point seen from the center
        end_angle: Angle of the end point seen from the center
        from_x: X coordinate of the start point
        to_x: X coordinate of the end point
        center_y: Y coordinate of the center
        from_heading: Tangent heading at the start, sets `start_angle`
        to_heading: Tangent heading at the end, sets `end_angle`
    """

    def __init__(
        self,
        radius: Optional[float] = None,
        direction: Union[Direction, str] = Direction.COUNTERCLOCKWISE,
        *,
        center: Optional[PointLike] = None,
        start: Optional[PointLike] = None,
        end: Optional[PointLike] = None,
        start_angle: Optional[Angle] = None,
        end_angle: Optional[Angle] = None,
        from_x: Optional[float] = None,
        to_x: Optional[float] = None,
        center_y: Optional[float] = None,
        from_heading: Optional[Angle] = None,
        to_heading: Optional[Angle] = None,
    ):
        self.negative_direction = Direction(direction).is_negative
        self.center = _optional_point(center)
        self.start = _optional_point(start)
        self.end = _optional_point(end)
        self.from_x = from_x
        self.to_x = to_x
        self.center_y = center_y

        if radius is None and self.center is not None:
            known = self.start if self.start is not None else self.end
            if known is not None:
                radius = self.center.distance_to(known)
        if radius is None:
            raise ValueError("An arc needs a radius, or a center with a start or end point")
        if radius <= 0:
            raise ValueError(f"Arc radius must be positive, got {radius}")
        self.radius = float(radius)

        if from_heading is not None:
            start_angle = self._radius_angle(from_heading)
        if to_heading is not None:
            end_angle = self._radius_angle(to_heading)
        self.start_angle = start_angle
        self.end_angle = end_angle

    def _radius_angle(self, heading: Angle) -> Angle:
        if self.negative_direction:
            return heading + _QUARTER_TURN
        return heading - _QUARTER_TURN

    @property
    def direction(self) -> Direction:
        return Direction.CLOCKWISE if self.negative_direction else Direction.COUNTERCLOCKWISE

    @property
    def is_completely_defined(self) -> bool:
        # radius and direction are always given
        return self.center is not None

    @property
    def reversed(self) -> "Arc":
        opposite = (
            Direction.COUNTERCLOCKWISE if self.negative_direction else Direction.CLOCKWISE
        )
        return Arc(
            self.radius,
            opposite,
            center=self.center,
            start=self.end,
            end=self.start,
            start_angle=self.end_angle,
            end_angle=self.start_angle,
            from_x=self.to_x,
            to_x=self.from_x,
            center_y=self.center_y,
        )

    @staticmethod
    def end_point(
        center: Point,
        radius: float,
        start: Point,
        to_x: float,
        negative_direction: bool,
    ) -> Point:
        """
        Return the point at `to_x` reached first when sweeping from `start`.

        Raises:
            NoIntersectionError: If the circle never reaches `to_x`
        """
        ratio = (to_x - center.x) / radius
        if abs(ratio) > 1.0 + 1e-12:
            raise NoIntersectionError(f"The arc never reaches x = {to_x}")
        target = math.acos(max(-1.0, min(1.0, ratio)))
        start_angle = angle_of(start, center).rad
        factor = -1.0 if negative_direction else 1.0
        best = min(
            (target, -target),
            key=lambda angle: (factor * (angle - start_angle)) % (2 * math.pi),
        )
        return circle_point(center, radius, best)

    def __repr__(self) -> str:
        fields = {
            "center": self.center,
            "start": self.start,
            "end": self.end,
            "start_angle": self.start_angle,
            "end_angle": self.end_angle,
            "from_x": self.from_x,
            "to_x": self.to_x,
            "center_y": self.center_y,
        }
        given = ", ".join(f"{key}={value}" for key, value in fields.items() if value is not None)
        return f"Arc(radius={self.radius}, direction={self.direction.value}" + (
            f", {given})" if given else ")"
        )


class Connector:
    """A description joining two neighbouring segments (fillet, chamfer, ...)."""

    @property
    def is_completely_defined(self) -> bool:
        return False

    @property
    def reversed(self) -> "Connector":
        return self


@dataclass(frozen=True)
class Fillet(Connector):
    """Rounds the corner between two segments with `radius`."""

    radius: float

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f"Fillet radius must be positive, got {self.radius}")


SegmentDescription = Union[Line, Arc, Fillet]
