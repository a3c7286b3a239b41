"""
Path builder - resolves segment descriptions into a continuous chain.

The builder consumes descriptions strictly in order. Each description is
resolved against the last resolved element. A description lacking context
is put on a deferred stack; as soon as a completely defined description
arrives, the stacked run is resolved backwards from it and spliced onto the
chain. A pending connector (a fillet) is consumed by the next element that
gets appended.

Geometric failures never abort a build. They are absorbed, the affected
elements are left as they are, and a `Diagnostic` records what happened.
"""

import logging
import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from .cad_types import Angle, Point
from .constants import POINT_TOLERANCE, RAY_LENGTH
from .descriptions import Arc, Connector, Fillet, Line, SegmentDescription
from .errors import (
    ElementNotAppendedError,
    GeometricCalculationError,
    ProfilePathError,
    ProfilePathWarning,
)
from .geometry import (
    angle_of,
    arc_center,
    fillet_arc_line,
    fillet_lines,
    intersection,
    intersection_points,
    intersections,
    parallel,
    perpendicular,
)
from .primitives import ArcElement, Circle, LineElement, PathElement

logger = logging.getLogger(__name__)

_QUARTER_TURN = Angle(degrees=90.0)


class BuilderState(Enum):
    EMPTY = "empty"
    HAS_CONTEXT = "has_context"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class Diagnostic:
    """Something the builder had to give up on while resolving."""

    code: str
    message: str


@dataclass
class BuildResult:
    elements: List[PathElement] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)


def reversed_chain(elements: Iterable[PathElement]) -> List[PathElement]:
    """The same chain traversed from its end to its start."""
    return [element.reversed for element in reversed(list(elements))]


def build(
    descriptions: Iterable[SegmentDescription],
    *,
    reverse: bool = False,
    strict: bool = False,
    ray_length: float = RAY_LENGTH,
) -> BuildResult:
    """
    Resolve segment descriptions into path elements.

    Args:
        descriptions: The segment descriptions, in path order
        reverse: Resolve the run from its last description backwards and
            return the chain in the original direction
        strict: Raise instead of returning a partial chain with diagnostics
        ray_length: Length of provisional rays emulating infinite lines

    Returns:
        BuildResult: The resolved elements and the diagnostics of the pass

    Raises:
        ProfilePathError: In strict mode, if any geometry had to be dropped
    """
    descriptions = list(descriptions)
    if reverse:
        descriptions = [description.reversed for description in reversed(descriptions)]

    builder = PathBuilder(ray_length=ray_length)
    for description in descriptions:
        builder.append(description)
    result = builder.finish()

    if reverse:
        result = BuildResult(reversed_chain(result.elements), result.diagnostics)
    if strict and result.diagnostics:
        details = "\n".join(f"  {d.code}: {d.message}" for d in result.diagnostics)
        raise ProfilePathError(f"The path could not be resolved completely:\n{details}")
    return result


class PathBuilder:
    """
    Incremental resolver for one pass over a list of segment descriptions.

    Feed descriptions with `append()` and collect the result with `finish()`.
    """

    def __init__(self, ray_length: float = RAY_LENGTH):
        self.ray_length = ray_length
        self.elements: List[PathElement] = []
        self.deferred: List[SegmentDescription] = []
        self.connector: Optional[Connector] = None
        self.diagnostics: List[Diagnostic] = []

    @property
    def state(self) -> BuilderState:
        if self.deferred:
            return BuilderState.DEFERRED
        if self.elements:
            return BuilderState.HAS_CONTEXT
        return BuilderState.EMPTY

    def append(self, description: SegmentDescription) -> "PathBuilder":
        """Consume the next description."""
        if not self.elements:
            self._append_first(description)
        elif self.deferred:
            self.deferred.append(description)
            if description.is_completely_defined:
                self._resolve_deferred()
        else:
            match description:
                case Line() | Arc():
                    try:
                        self.elements = self._appending(description)
                        self.connector = None
                    except ElementNotAppendedError as e:
                        logger.debug(f"Deferring {description!r}: {e}")
                        self.deferred.append(description)
                case Connector():
                    self.connector = description
                case _:
                    raise TypeError(
                        f"Unsupported segment description: {type(description).__name__}"
                    )
        return self

    def finish(self) -> BuildResult:
        """End the pass; unresolved descriptions are reported and dropped."""
        if self.deferred:
            dropped = ", ".join(repr(d) for d in self.deferred)
            message = (
                f"{len(self.deferred)} description(s) could not be resolved "
                f"and were dropped: {dropped}"
            )
            self._report("deferred_dropped", message, logging.WARNING)
            warnings.warn(message, ProfilePathWarning, stacklevel=2)
            self.deferred = []
        if self.connector is not None:
            self._report(
                "connector_dropped",
                f"{self.connector!r} has no following element to connect to",
                logging.WARNING,
            )
            self.connector = None
        if self.elements and self.elements[-1].end_point is None:
            message = f"The path ends in a provisional ray: {self.elements[-1]!r}"
            self._report("open_end", message, logging.WARNING)
            warnings.warn(message, ProfilePathWarning, stacklevel=2)
        return BuildResult(list(self.elements), list(self.diagnostics))

    def _report(self, code: str, message: str, level: int = logging.DEBUG) -> None:
        self.diagnostics.append(Diagnostic(code, message))
        logger.log(level, message)

    # ========== First element ==========

    def _append_first(self, description: SegmentDescription) -> None:
        match description:
            case Line(start=Point() as start, end=Point() as end):
                self.elements = [LineElement(start, end)]
                return
            case Arc():
                try:
                    self.elements = [self._first_arc(description)]
                    return
                except (ElementNotAppendedError, GeometricCalculationError) as e:
                    reason = str(e)
            case Connector():
                reason = "a connector needs a preceding element"
            case _:
                reason = "a first line needs a start and an end point"
        self._report(
            "first_element_unresolved",
            f"{description!r} cannot start the path ({reason}); it was dropped",
            logging.WARNING,
        )

    def _first_arc(self, arc: Arc) -> ArcElement:
        center = arc.center
        if center is None:
            raise ElementNotAppendedError("a first arc needs a center")
        if arc.start is not None and arc.to_x is not None:
            end = Arc.end_point(center, arc.radius, arc.start, arc.to_x, arc.negative_direction)
            return ArcElement.from_points(
                center, arc.radius, arc.start, end, arc.negative_direction
            )
        if arc.start is not None and arc.end is not None:
            return ArcElement.from_points(
                center, arc.radius, arc.start, arc.end, arc.negative_direction
            )
        if arc.start_angle is not None and arc.end_angle is not None:
            return ArcElement(
                center, arc.radius, arc.start_angle, arc.end_angle, arc.negative_direction
            )
        # placeholder, its end is found by the elements that follow
        return ArcElement(
            center, arc.radius, Angle(degrees=0.0), Angle(degrees=0.0), arc.negative_direction
        )

    # ========== Following elements ==========

    def _appending(self, description: SegmentDescription) -> List[PathElement]:
        match description:
            case Line():
                return self._appending_line(description)
            case Arc():
                return self._appending_arc(description)
        raise ElementNotAppendedError(f"{description!r} is not a segment")

    def _appending_line(self, line: Line) -> List[PathElement]:
        elements = self.elements
        last = elements[-1]
        current = last.end_point

        if line.start is not None and line.end is not None:
            return self._joined(LineElement(line.start, line.end))
        if line.end is not None and line.heading is not None:
            return self._joined(LineElement.ending_at(line.heading, self.ray_length, line.end))
        if line.end is not None and current is not None:
            new_line = LineElement(current, line.end)
            if self.connector is not None or isinstance(last, LineElement):
                return self._joined(new_line)
            return [*elements, new_line]
        if line.start is None and line.end is None and line.heading is None and current is not None:
            return [*elements, LineElement.ray(current, last.end_heading, self.ray_length)]
        if line.start is not None and line.heading is not None:
            return self._joined(LineElement.ray(line.start, line.heading, self.ray_length))
        if line.heading is not None and current is not None:
            new_line = LineElement.ray(current, line.heading, self.ray_length)
            if self.connector is not None:
                return self._joined(new_line)
            return [*elements, new_line]
        raise ElementNotAppendedError(f"{line!r} cannot be resolved after {last!r}")

    def _appending_arc(self, arc: Arc) -> List[PathElement]:
        *head, last = self.elements
        current = last.end_point
        radius = arc.radius
        negative = arc.negative_direction

        if arc.to_x is not None and current is not None:
            center = arc_center(current, last.end_heading, radius, negative)
            try:
                end = Arc.end_point(center, radius, current, arc.to_x, negative)
            except GeometricCalculationError as e:
                raise ElementNotAppendedError(str(e)) from e
            return [*self.elements, ArcElement.from_points(center, radius, current, end, negative)]
        if arc.end_angle is not None and current is not None:
            center = arc_center(current, last.end_heading, radius, negative)
            if negative:
                start_angle = last.end_heading + _QUARTER_TURN
            else:
                start_angle = last.end_heading - _QUARTER_TURN
            return [*self.elements, ArcElement(center, radius, start_angle, arc.end_angle, negative)]

        match last:
            case LineElement():
                return [*head, *self._arc_after_line(arc, last)]
            case ArcElement():
                return [*head, *self._arc_after_arc(arc, last)]
        raise ElementNotAppendedError(f"{arc!r} cannot be resolved after {last!r}")

    def _arc_after_line(self, arc: Arc, line: LineElement) -> List[PathElement]:
        if arc.center_y is not None and self.connector is None:
            distance = arc.radius if arc.negative_direction else -arc.radius
            horizontal = LineElement(Point(0.0, arc.center_y), Point(10.0, arc.center_y))
            try:
                center = intersection(parallel(line, distance), horizontal).point
                start = intersection(line, perpendicular(line, center)).point
            except GeometricCalculationError as e:
                self._report(
                    "arc_unresolved",
                    f"No center at y = {arc.center_y} for {arc!r} after {line!r} ({e}); arc dropped",
                    logging.WARNING,
                )
                return [line]
            return [
                LineElement(line.start, start),
                ArcElement.from_points(center, arc.radius, start, start, arc.negative_direction),
            ]

        if arc.center is not None and self.connector is not None:
            # angle markers only; the arc's extent is fixed by what follows
            if arc.negative_direction:
                start_angle, end_angle = Angle(degrees=1.0), Angle(degrees=0.0)
            else:
                start_angle, end_angle = Angle(degrees=0.0), Angle(degrees=1.0)
            probe = ArcElement(arc.center, arc.radius, start_angle, end_angle, arc.negative_direction)
            rounded = self._rounded(line, probe)
            if rounded is None:
                raise ElementNotAppendedError(f"{arc!r} cannot be connected to {line!r}")
            return rounded

        raise ElementNotAppendedError(f"{arc!r} cannot be resolved after {line!r}")

    def _arc_after_arc(self, arc: Arc, last_arc: ArcElement) -> List[PathElement]:
        if arc.center_y is None or self.connector is not None:
            raise ElementNotAppendedError(f"{arc!r} cannot be resolved after {last_arc!r}")

        offset_circle = Circle(last_arc.center, last_arc.radius - arc.radius)
        horizontal = LineElement(Point(0.0, arc.center_y), Point(10.0, arc.center_y))
        try:
            candidates = intersection_points(offset_circle, horizontal)
        except GeometricCalculationError as e:
            raise ElementNotAppendedError(str(e)) from e

        center = min(
            candidates, key=lambda p: (last_arc.angular_length(p).rad, p.x, p.y)
        )
        angle = angle_of(center, last_arc.center)
        return [
            ArcElement(
                last_arc.center,
                last_arc.radius,
                last_arc.start_angle,
                angle,
                last_arc.negative_direction,
            ),
            ArcElement(center, arc.radius, angle, angle, arc.negative_direction),
        ]

    # ========== Joining elements ==========

    def _joined(self, new_line: LineElement) -> List[PathElement]:
        *head, last = self.elements
        return [*head, *self._join(last, new_line)]

    def _join(self, last: PathElement, new_line: LineElement) -> List[PathElement]:
        """Replace `last` by the elements meeting `new_line`, rounded by a pending fillet."""
        match last:
            case LineElement():
                return self._join_lines(last, new_line)
            case ArcElement():
                return self._join_arc_line(last, new_line)
        raise TypeError(f"Unsupported path element: {type(last).__name__}")

    def _join_lines(self, last: LineElement, new_line: LineElement) -> List[PathElement]:
        try:
            crossing = intersection(last, new_line)
        except GeometricCalculationError as e:
            self._report(
                "trim_failed",
                f"{last!r} and {new_line!r} do not intersect ({e}); left unmodified",
            )
            return [last, new_line]

        rounded = self._rounded(last, new_line)
        if rounded is not None:
            return rounded
        return [
            LineElement(last.start, crossing.point),
            LineElement(crossing.point, new_line.end, new_line.is_end_valid_end_point),
        ]

    def _join_arc_line(self, last: ArcElement, new_line: LineElement) -> List[PathElement]:
        rounded = self._rounded(last, new_line)
        if rounded is not None:
            return rounded

        try:
            crossings = intersections(last, new_line)
        except GeometricCalculationError as e:
            self._report(
                "trim_failed",
                f"{new_line!r} does not cross {last!r} ({e}); left unmodified",
            )
            return [last, new_line]

        crossing = min(crossings, key=lambda c: last.angular_length(c.point).rad)
        trimmed = ArcElement(
            last.center,
            last.radius,
            last.start_angle,
            angle_of(crossing.point, last.center),
            last.negative_direction,
        )
        return [
            trimmed,
            LineElement(crossing.point, new_line.end, new_line.is_end_valid_end_point),
        ]

    def _rounded(self, first: PathElement, second: PathElement) -> Optional[List[PathElement]]:
        """Both elements trimmed to a fillet between them, if one is pending and fits."""
        match self.connector:
            case Fillet(radius=radius):
                pass
            case _:
                return None

        try:
            match (first, second):
                case (LineElement(), LineElement()):
                    arc = fillet_lines(first, second, radius)
                    return [
                        LineElement(first.start, arc.start),
                        arc,
                        LineElement(arc.end, second.end, second.is_end_valid_end_point),
                    ]
                case (ArcElement(), LineElement()):
                    arc = fillet_arc_line(first, second, radius)
                    trimmed = ArcElement(
                        first.center,
                        first.radius,
                        first.start_angle,
                        angle_of(arc.start, first.center),
                        first.negative_direction,
                    )
                    return [
                        trimmed,
                        arc,
                        LineElement(arc.end, second.end, second.is_end_valid_end_point),
                    ]
                case (LineElement(), ArcElement()):
                    rounded = self._rounded(second.reversed, first.reversed)
                    return None if rounded is None else reversed_chain(rounded)
        except GeometricCalculationError as e:
            self._report(
                "fillet_failed",
                f"No fillet of radius {radius} between {first!r} and {second!r} ({e})",
            )
            return None

        self._report(
            "fillet_failed",
            f"Fillets between two arcs are not supported: {first!r}, {second!r}",
        )
        return None

    # ========== Deferred resolution ==========

    def _resolve_deferred(self) -> None:
        run = self.deferred
        self.deferred = []
        result = build(run, reverse=True, ray_length=self.ray_length)
        self.diagnostics.extend(result.diagnostics)
        if result.elements:
            self.elements = self._appending_run(result.elements)
        else:
            self._report(
                "deferred_dropped",
                f"The deferred run {run!r} resolved to nothing",
                logging.WARNING,
            )
        self.connector = None

    def _appending_run(self, run: List[PathElement]) -> List[PathElement]:
        *head, last = self.elements
        first, *rest = run
        match first:
            case LineElement():
                joined = self._join(last, first)
            case ArcElement():
                joined = self._rounded(last, first)
                if joined is None:
                    joined = [self._trimmed_to(last, first.start_point), first]
            case _:
                raise TypeError(f"Unsupported path element: {type(first).__name__}")
        return [*head, *joined, *rest]

    def _trimmed_to(self, element: PathElement, point: Point) -> PathElement:
        """`element` ending at `point` if `point` lies on it, else unmodified."""
        match element:
            case LineElement():
                offset = (point.x - element.start.x) * element.dy - (
                    point.y - element.start.y
                ) * element.dx
                if element.length > 0 and abs(offset) / element.length < POINT_TOLERANCE:
                    return LineElement(element.start, point)
            case ArcElement():
                if abs(element.center.distance_to(point) - element.radius) < POINT_TOLERANCE:
                    return ArcElement(
                        element.center,
                        element.radius,
                        element.start_angle,
                        angle_of(point, element.center),
                        element.negative_direction,
                    )
        end = element.end_point
        if end is None or not end.isclose(point):
            self._report(
                "discontinuity",
                f"{element!r} does not reach {point}; the chain has a gap",
                logging.WARNING,
            )
        return element
