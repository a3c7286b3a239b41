"""
Discretization of path elements into point sequences.

Every function returns the points *after* the start point up to and
including the end point, so the samples of consecutive elements can simply
be concatenated. No two neighbouring points are further apart than
`resolution`.
"""

import math
from typing import List, Sequence

import numpy as np

from .cad_types import Point
from .constants import DEFAULT_RESOLUTION, SAMPLE_TOLERANCE
from .geometry import angle_of


def _check_resolution(resolution: float) -> None:
    if not resolution > 0:
        raise ValueError(f"Resolution must be positive, got {resolution}")


def _to_points(xs: np.ndarray, ys: np.ndarray) -> List[Point]:
    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def sample_line(start: Point, end: Point, resolution: float) -> List[Point]:
    """
    Sample the straight line from `start` to `end`.

    Points are placed every `resolution` stepping back from `end`, so the
    gap next to `start` is the only shorter one.

    Args:
        start: The starting point, not part of the result
        end: The end point, the last point of the result
        resolution: The maximum distance between neighbouring points

    Returns:
        List of points along the line
    """
    _check_resolution(resolution)
    length = start.distance_to(end)
    if length < SAMPLE_TOLERANCE:
        return []

    number_of_points = int(length / resolution) + 1
    steps_back = np.arange(number_of_points - 1, -1, -1, dtype=float) * resolution
    xs = end.x - steps_back * (end.x - start.x) / length
    ys = end.y - steps_back * (end.y - start.y) / length
    points = _to_points(xs, ys)
    points[-1] = end

    if points[0].distance_to(start) < SAMPLE_TOLERANCE:
        return points[1:]
    return points


def sample_arc(
    start: Point,
    end: Point,
    center: Point,
    radius: float,
    negative_direction: bool = False,
    resolution: float = DEFAULT_RESOLUTION,
) -> List[Point]:
    """
    Sample the arc around `center` from `start` to `end`.

    Only the angles of `start` and `end` seen from `center` matter; `end` is
    returned unchanged as the final point to avoid accumulated error.

    Args:
        start: The starting point, not part of the result
        end: The end point, the last point of the result
        center: The center of the arc
        radius: The radius of the arc
        negative_direction: Whether the arc runs clockwise
        resolution: The maximum distance between neighbouring points

    Returns:
        List of points along the arc
    """
    _check_resolution(resolution)
    start_angle = angle_of(start, center).rad
    end_angle = angle_of(end, center).rad
    circumference = 2 * math.pi * radius

    if negative_direction:
        arc_length = (start_angle - end_angle) * radius
    else:
        arc_length = (end_angle - start_angle) * radius
    if arc_length < 0:
        arc_length += circumference
    arc_length = math.fmod(arc_length, circumference)

    number_of_points = int(arc_length / resolution) + 1
    steps_back = np.arange(number_of_points - 1, -1, -1, dtype=float) * resolution / radius
    angles = end_angle + steps_back if negative_direction else end_angle - steps_back
    points = _to_points(center.x + np.cos(angles) * radius, center.y + np.sin(angles) * radius)
    points[-1] = end

    if points[0].distance_to(start) < SAMPLE_TOLERANCE:
        return points[1:]
    return points


def resample(points: Sequence[Point], resolution: float) -> List[Point]:
    """
    Insert points so no two neighbours are further apart than `resolution`.

    The source points are all kept, nothing is downsampled. Resampling an
    already resampled sequence returns it unchanged.
    """
    _check_resolution(resolution)
    if not points:
        return []

    result = [points[0]]
    for start, end in zip(points, points[1:]):
        if start.distance_to(end) < SAMPLE_TOLERANCE:
            result.append(end)
        else:
            result.extend(sample_line(start, end, resolution))
    return result
