"""
profilepath - A Python library for resolving 2D profile paths.

Turns partially specified segments (lines, arcs, fillets) into a continuous
chain of lines and arcs and samples it into points.
"""

__version__ = "0.1.0"
__author__ = "Your Name"
__email__ = "your.email@example.com"

# Core geometry types
from .cad_types import Angle, Direction, Point

# Resolved path elements
from .primitives import ArcElement, Circle, LineElement, LineSegment

# Segment descriptions
from .descriptions import Arc, Fillet, Line

# Resolution and sampling
from .builder import BuildResult, Diagnostic, PathBuilder, build
from .path import Path
from .sampler import resample, sample_arc, sample_line

from .errors import (
    ElementNotAppendedError,
    GeometricCalculationError,
    IdenticalLinesError,
    NoIntersectionError,
    ProfilePathError,
    ProfilePathWarning,
)

# Define what gets imported with "from profilepath import *"
__all__ = [
    # Geometry types
    "Angle",
    "Direction",
    "Point",
    # Path elements
    "ArcElement",
    "Circle",
    "LineElement",
    "LineSegment",
    # Descriptions
    "Arc",
    "Fillet",
    "Line",
    # Resolution
    "BuildResult",
    "Diagnostic",
    "Path",
    "PathBuilder",
    "build",
    # Sampling
    "resample",
    "sample_arc",
    "sample_line",
    # Errors
    "ElementNotAppendedError",
    "GeometricCalculationError",
    "IdenticalLinesError",
    "NoIntersectionError",
    "ProfilePathError",
    "ProfilePathWarning",
]
