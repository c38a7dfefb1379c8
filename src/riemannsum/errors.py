"""Exceptions raised while generating Riemann sum rectangles."""
from __future__ import annotations


class RiemannSumError(Exception):
    """Base class for all errors raised by the package."""


class InvalidArgumentError(RiemannSumError, ValueError):
    """
    Raised for inputs that can never produce rectangles: a zero or negative
    interval count or width, both partition parameters missing, a zero-length
    or sloped baseline, an unknown sampling rule or a malformed curve.
    """


class NoIntersectionError(RiemannSumError):
    """
    Raised when a vertical probe at a required x-coordinate misses the curve.

    Attributes:
        x: The x-coordinate of the failing probe.
    """

    def __init__(self, x: float, message: str | None = None) -> None:
        self.x = x
        super().__init__(message or f"Vertical probe at x={x:g} does not intersect the curve.")
