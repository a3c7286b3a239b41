"""
Intersection engine.

Stateless helpers computing intersections, offsets and fillets between
resolved path elements. Failures are reported by raising
`NoIntersectionError` or `IdenticalLinesError`.
"""

import math
from dataclasses import dataclass
from typing import List, Set

from .cad_types import Angle, Point
from .constants import DISCRIMINANT_TOLERANCE, POINT_TOLERANCE, VERTICAL_TOLERANCE
from .errors import IdenticalLinesError, NoIntersectionError
from .primitives import ArcElement, Circle, LineElement, PathElement, angle_of

# Relative tolerance below which two line directions count as parallel
_PARALLEL_TOLERANCE = 1e-12

__all__ = [
    "Intersection",
    "angle_between",
    "angle_of",
    "arc_center",
    "circle_point",
    "fillet_arc_line",
    "fillet_lines",
    "intersection",
    "intersection_points",
    "intersections",
    "parallel",
    "perpendicular",
]


@dataclass
class Intersection:
    """A point where two path elements meet.

    `angle0` and `angle1` are the headings of both elements at `point`; the
    change between them tells in which way the path turns.
    """

    point: Point
    element0: PathElement
    element1: PathElement
    angle0: Angle
    angle1: Angle

    @property
    def direction_change(self) -> float:
        """Signed change of heading in radians, from -pi (excluded) to pi."""
        change = self.angle1.rad - self.angle0.rad
        if change > math.pi:
            change -= 2 * math.pi
        elif change <= -math.pi:
            change += 2 * math.pi
        return change


def intersection(line0: LineElement, line1: LineElement) -> Intersection:
    """
    Intersect two lines, both taken as infinite.

    Args:
        line0: The first line
        line1: The second line

    Returns:
        Intersection: The intersection, with the headings of both lines

    Raises:
        IdenticalLinesError: If both lines are coincident
        NoIntersectionError: If the lines are parallel but distinct
    """
    if line0.is_vertical and line1.is_vertical:
        if abs(line0.start.x - line1.start.x) < VERTICAL_TOLERANCE:
            raise IdenticalLinesError()
        raise NoIntersectionError("Parallel vertical lines do not intersect")
    elif line0.is_vertical:
        x = line0.start.x
        point = Point(x, line1.y_at(x))
    elif line1.is_vertical:
        x = line1.start.x
        point = Point(x, line0.y_at(x))
    else:
        # 2x2 system start0 + t * d0 = start1 + s * d1, solved for t
        det = line0.dx * line1.dy - line0.dy * line1.dx
        offset_x = line1.start.x - line0.start.x
        offset_y = line1.start.y - line0.start.y
        if abs(det) <= _PARALLEL_TOLERANCE * line0.length * line1.length:
            cross = offset_x * line0.dy - offset_y * line0.dx
            if abs(cross) <= _PARALLEL_TOLERANCE * max(line0.length, 1.0) ** 2:
                raise IdenticalLinesError()
            raise NoIntersectionError("Parallel lines do not intersect")
        t = (offset_x * line1.dy - offset_y * line1.dx) / det
        point = Point(line0.start.x + t * line0.dx, line0.start.y + t * line0.dy)

    return Intersection(
        point=point,
        element0=line0,
        element1=line1,
        angle0=line0.end_heading,
        angle1=line1.end_heading,
    )


def intersection_points(circle: Circle, line: LineElement) -> Set[Point]:
    """
    Return the points where an infinite line crosses a circle.

    A tangent line yields a single point.

    Raises:
        NoIntersectionError: If the line misses the circle
    """
    r = circle.radius
    c = circle.center
    if r <= 0:
        raise NoIntersectionError("A circle without positive radius has no points")

    if line.is_vertical:
        x_line = line.start.x
        if x_line < c.x - r or x_line > c.x + r:
            raise NoIntersectionError()
        root = math.sqrt(max(0.0, r * r - (x_line - c.x) * (x_line - c.x)))
        return {Point(x_line, c.y + root), Point(x_line, c.y - root)}

    m = line.m
    b = line.b
    # circle and line reduced to x in normalized form x^2 + px + q = 0
    p = (2 * m * b - 2 * c.x - 2 * c.y * m) / (1 + m * m)
    q = (b * b + c.x * c.x - 2 * c.y * b + c.y * c.y - r * r) / (1 + m * m)
    x_values = _pq_formula(p, q)
    if not x_values:
        raise NoIntersectionError()
    return {Point(x, m * x + b) for x in x_values}


def _pq_formula(p: float, q: float) -> Set[float]:
    """Solutions of x^2 + px + q = 0."""
    radix = (p / 2.0) * (p / 2.0) - q
    if radix < -DISCRIMINANT_TOLERANCE:
        return set()
    root = math.sqrt(max(radix, 0.0))
    return {-p / 2.0 + root, -p / 2.0 - root}


def intersections(arc: ArcElement, line: LineElement) -> List[Intersection]:
    """Intersections of an arc's circle with a line, ordered by coordinates."""
    points = sorted(intersection_points(Circle.of(arc), line), key=lambda p: (p.x, p.y))
    return [
        Intersection(
            point=point,
            element0=arc,
            element1=line,
            angle0=arc.heading_at(point),
            angle1=line.end_heading,
        )
        for point in points
    ]


def _direction_length(line: LineElement) -> float:
    length = line.length
    if length < POINT_TOLERANCE:
        raise NoIntersectionError(f"{line!r} has no direction")
    return length


def parallel(line: LineElement, distance: float) -> LineElement:
    """Offset `line` by `distance`; negative distances lie left of the travel direction.

    Raises:
        NoIntersectionError: If `line` has zero length
    """
    length = _direction_length(line)
    shift = Point(line.dy / length * distance, -line.dx / length * distance)
    return LineElement(line.start + shift, line.end + shift)


def perpendicular(line: LineElement, point: Point) -> LineElement:
    """A line through `point` orthogonal to `line`. Its direction is arbitrary."""
    length = _direction_length(line)
    normal = Point(-line.dy / length, line.dx / length)
    return LineElement(point, point + normal * length)


def angle_between(line0: LineElement, line1: LineElement) -> Angle:
    """Change of heading when travelling along `line0` and then `line1`."""
    return line1.heading - line0.heading


def circle_point(center: Point, radius: float, angle: float) -> Point:
    """Point on the circle at `angle` (radians)."""
    return Point(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle))


def arc_center(
    start: Point, heading: Angle, radius: float, negative_direction: bool
) -> Point:
    """Center of an arc leaving `start` tangentially along `heading`."""
    quarter = -math.pi / 2 if negative_direction else math.pi / 2
    return circle_point(start, radius, heading.rad + quarter)


def fillet_lines(line0: LineElement, line1: LineElement, radius: float) -> ArcElement:
    """
    Return the fillet arc rounding the corner between two lines.

    The arc bulges to the inside of the turn: a left turn (heading change up
    to 180 degrees) gives a counterclockwise arc, a right turn a clockwise one.

    Args:
        line0: The incoming line
        line1: The outgoing line
        radius: Radius of the fillet

    Returns:
        ArcElement: The fillet, starting on `line0` and ending on `line1`

    Raises:
        NoIntersectionError: If the offset lines do not meet
        IdenticalLinesError: If the offset lines coincide
    """
    if angle_between(line0, line1).degrees <= 180:
        distance = -radius
        negative_direction = False
    else:
        distance = radius
        negative_direction = True

    center = intersection(parallel(line0, distance), parallel(line1, distance)).point
    start = intersection(line0, perpendicular(line0, center)).point
    end = intersection(line1, perpendicular(line1, center)).point
    return ArcElement.from_points(center, radius, start, end, negative_direction)


def fillet_arc_line(arc: ArcElement, line: LineElement, radius: float) -> ArcElement:
    """
    Return the fillet arc connecting `arc` to the following `line`.

    Fillet centers lie on the circle shrunk by `radius` and on one of the two
    offsets of `line`. The candidate reached first when travelling along
    `arc` wins.

    Raises:
        NoIntersectionError: If no fillet center exists
    """
    offset_circle = Circle(arc.center, arc.radius - radius)
    candidates = []
    for distance in (radius, -radius):
        try:
            candidates.extend(intersection_points(offset_circle, parallel(line, distance)))
        except NoIntersectionError:
            continue
    if not candidates:
        raise NoIntersectionError("No fillet center between arc and line")

    center = min(
        candidates, key=lambda point: (arc.angular_length(point).rad, point.x, point.y)
    )
    start = circle_point(center, radius, angle_of(center, arc.center).rad)
    end = intersection(line, perpendicular(line, center)).point
    return ArcElement.from_points(center, radius, start, end, arc.negative_direction)
