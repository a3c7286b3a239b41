"""
Path module - the public entry point turning segment descriptions into a
resolved profile and sampling it into points.
"""

import logging
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .cad_types import Point
from .constants import DEFAULT_RESOLUTION, POINT_TOLERANCE, RAY_LENGTH
from .descriptions import SegmentDescription
from .builder import Diagnostic, build
from .primitives import ArcElement, LineElement, PathElement
from .sampler import resample, sample_arc, sample_line

logger = logging.getLogger(__name__)


class Path:
    """
    A profile described by a chain of resolved path elements.

    The descriptions are resolved when the path is created. Whatever could
    not be resolved is listed in `diagnostics`.

    Example:
        path = Path(
            Line(start=(10, 10), end=(20, 10)),
            Fillet(radius=5),
            Line(start=(20, 10), end=(20, 20)),
        )
        points = path.profile(resolution=0.5)
    """

    def __init__(
        self,
        *descriptions: SegmentDescription,
        strict: bool = False,
        ray_length: float = RAY_LENGTH,
    ):
        """
        Resolve the given descriptions.

        Args:
            descriptions: The segment descriptions in path order
            strict: Raise a ProfilePathError instead of dropping geometry
            ray_length: Length of provisional rays used while resolving
        """
        result = build(descriptions, strict=strict, ray_length=ray_length)
        self._elements: Tuple[PathElement, ...] = tuple(result.elements)
        self._diagnostics: Tuple[Diagnostic, ...] = tuple(result.diagnostics)
        logger.debug(
            f"Resolved {len(descriptions)} description(s) into {len(self._elements)} element(s)"
        )

    @property
    def elements(self) -> Tuple[PathElement, ...]:
        return self._elements

    @property
    def diagnostics(self) -> Tuple[Diagnostic, ...]:
        return self._diagnostics

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[PathElement]:
        return iter(self._elements)

    def __getitem__(self, index):
        return self._elements[index]

    @property
    def start_point(self) -> Optional[Point]:
        return self._elements[0].start_point if self._elements else None

    @property
    def end_point(self) -> Optional[Point]:
        return self._elements[-1].end_point if self._elements else None

    def is_continuous(self, tolerance: float = POINT_TOLERANCE) -> bool:
        """True if every element ends where the next one starts."""
        for current, following in zip(self._elements, self._elements[1:]):
            end = current.end_point
            if end is None or end.distance_to(following.start_point) >= tolerance:
                return False
        return True

    # ========== Sampling ==========

    def profile(self, resolution: float) -> List[Point]:
        """
        Sample the path into points.

        Args:
            resolution: The maximum distance between neighbouring points

        Returns:
            The start point of the path followed by the samples of every element
        """
        if not resolution > 0:
            raise ValueError(f"Resolution must be positive, got {resolution}")
        if not self._elements:
            return []

        result = [self._elements[0].start_point]
        for element in self._elements:
            match element:
                case LineElement():
                    result += sample_line(element.start, element.end, resolution)
                case ArcElement():
                    result += sample_arc(
                        element.start,
                        element.end,
                        element.center,
                        element.radius,
                        negative_direction=element.negative_direction,
                        resolution=resolution,
                    )
        return result

    def profile_array(self, resolution: float) -> np.ndarray:
        """The sampled profile as an (N, 2) array of x/y coordinates."""
        points = self.profile(resolution)
        return np.array([tuple(p) for p in points], dtype=float).reshape(-1, 2)

    def resample(self, resolution: float) -> List[Point]:
        """Sample the path, then densify it so no gap exceeds `resolution`."""
        return resample(self.profile(resolution), resolution)

    def to_png(
        self,
        file_name: Optional[str] = None,
        resolution: float = DEFAULT_RESOLUTION,
        width: int = 800,
        height: int = 600,
        margin: float = 0.1,
    ) -> None:
        """
        Render the sampled profile to a PNG image.

        Args:
            file_name: Path to save the PNG file. If None, displays in a UI window instead.
            resolution: Sampling resolution of the drawn outline
            width: Image width in pixels (default: 800)
            height: Image height in pixels (default: 600)
            margin: Margin around the profile as a fraction of size (default: 0.1)

        Raises:
            ValueError: If the path has no elements
            ImportError: If matplotlib is not installed
        """
        if not self._elements:
            raise ValueError("No path elements available for rendering")

        try:
            import matplotlib.pyplot as plt
        except ImportError:
            raise ImportError(
                "matplotlib is required for profile rendering. Install with: pip install matplotlib"
            )

        points = self.profile_array(resolution)
        fig, ax = plt.subplots(figsize=(width / 100, height / 100), dpi=100)
        ax.set_aspect("equal")
        ax.plot(points[:, 0], points[:, 1], "k-", linewidth=2)

        min_x, min_y = points.min(axis=0)
        max_x, max_y = points.max(axis=0)
        margin_x = max(max_x - min_x, 1) * margin
        margin_y = max(max_y - min_y, 1) * margin
        ax.set_xlim(min_x - margin_x, max_x + margin_x)
        ax.set_ylim(min_y - margin_y, max_y + margin_y)

        ax.grid(True, alpha=0.3)
        ax.set_xlabel("X")
        ax.set_ylabel("Y")
        ax.set_title("Profile")

        plt.tight_layout()
        if file_name:
            plt.savefig(file_name, dpi=100, bbox_inches="tight", facecolor="white")
            plt.close(fig)
        else:
            plt.show()
