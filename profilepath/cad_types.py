import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

from .constants import POINT_TOLERANCE

_FULL_TURN_DEGREES = 360.0
_FULL_TURN_RADIANS = 2.0 * math.pi


def _normalised(value: float, period: float) -> float:
    result = value % period
    # tiny negative values wrap to exactly `period`
    if result >= period:
        result -= period
    return result


class Angle:
    """
    A geometric angle.

    Used as an absolute direction, 0 points along the x-axis and 90 degrees
    along the y-axis. The raw value is stored unbounded in degrees and is
    normalised whenever it is read.
    """

    __slots__ = ("_raw_degrees",)

    def __init__(
        self, degrees: Optional[float] = None, *, radians: Optional[float] = None
    ):
        if degrees is not None and radians is not None:
            raise ValueError("Give an angle either in degrees or in radians, not both")
        if radians is not None:
            self._raw_degrees = float(radians) / math.pi * 180.0
        else:
            self._raw_degrees = float(degrees) if degrees is not None else 0.0

    @classmethod
    def from_delta(cls, dx: float, dy: float) -> "Angle":
        """Heading of the vector (dx, dy)."""
        if dx == 0 and dy == 0:
            raise ValueError("Cannot create an angle from a zero-length vector")
        return cls(radians=math.atan2(dy, dx))

    @property
    def degrees(self) -> float:
        """The angle in degrees, from 0 to 360 (excluded)."""
        return _normalised(self._raw_degrees, _FULL_TURN_DEGREES)

    @property
    def rad(self) -> float:
        """The angle in radians, from 0 to 2*pi (excluded)."""
        return _normalised(self._raw_degrees / 180.0 * math.pi, _FULL_TURN_RADIANS)

    radians = rad

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return self.rad == other.rad

    def __hash__(self) -> int:
        return hash(self.rad)

    def __add__(self, other: "Angle") -> "Angle":
        return Angle(degrees=self.degrees + other.degrees)

    def __sub__(self, other: "Angle") -> "Angle":
        return Angle(degrees=self.degrees - other.degrees)

    def __repr__(self) -> str:
        return f"Angle(degrees={self.degrees})"

    def isclose(self, other: "Angle", abs_tol: float = 1e-9) -> bool:
        """Compare on the circle, so 359.9999999 and 0 are close."""
        diff = abs(self.rad - other.rad)
        return min(diff, _FULL_TURN_RADIANS - diff) <= abs_tol


@dataclass(frozen=True)
class Point:
    """An immutable point in the profile plane."""

    x: float
    y: float

    @staticmethod
    def of(value: "PointLike") -> "Point":
        if isinstance(value, Point):
            return value
        x, y = value
        return Point(float(x), float(y))

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> "Point":
        return self * (1.0 / divisor)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def distance_to(self, other: "Point") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def isclose(self, other: "PointLike", abs_tol: float = POINT_TOLERANCE) -> bool:
        return self.distance_to(Point.of(other)) < abs_tol

    def to_json(self):
        return {"x": float(self.x), "y": float(self.y)}

    @staticmethod
    def from_json(json_data):
        return Point(json_data["x"], json_data["y"])


PointLike = Union[Tuple[float, float], Point]


class Direction(str, Enum):
    """The sense in which an arc is swept."""

    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    @property
    def is_negative(self) -> bool:
        return self is Direction.CLOCKWISE
