"""
Errors and warnings raised while resolving a profile path.
"""


class ProfilePathError(Exception):
    """Base class for all profile path errors."""


class GeometricCalculationError(ProfilePathError, ValueError):
    """A geometric construction has no (unique) solution."""


class NoIntersectionError(GeometricCalculationError):
    """Two elements do not meet, e.g. parallel lines or a circle missing a line."""

    def __init__(self, message: str = "The elements do not intersect"):
        super().__init__(message)


class IdenticalLinesError(GeometricCalculationError):
    """Two lines are coincident, so their intersection is ambiguous."""

    def __init__(self, message: str = "The lines are identical"):
        super().__init__(message)


class ElementNotAppendedError(ProfilePathError):
    """A segment description cannot be resolved in the current context."""


class ProfilePathWarning(UserWarning):
    """Emitted when geometry is dropped while building a path."""
