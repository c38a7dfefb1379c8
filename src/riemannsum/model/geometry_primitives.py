"""
Geometric primitives shared by the curve backends and the rectangle builder.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Vector:
    """
    A vector in 3D space representing direction and magnitude.
    """
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class Point:
    """A simple geometric point in 3D space. Only x and y take part in the planar math."""
    x: float
    y: float
    z: float = 0.0

    def __add__(self, other: Vector) -> Point:
        # Point + Vector = Point (Translation)
        if isinstance(other, Vector):
            return Point(self.x + other.x, self.y + other.y, self.z + other.z)
        raise TypeError("Can only add a Vector to a Point.")

    def __sub__(self, other: Point) -> Vector:
        # Point - Point = Vector (Direction)
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y, self.z - other.z)
        raise TypeError("Can only subtract a Point from a Point.")

    def with_y(self, y: float) -> Point:
        return Point(self.x, y, self.z)

    def distance_to(self, other: Point) -> float:
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class Line:
    """A straight, directed segment between two points. Used for baselines and probes."""
    start: Point
    end: Point

    def to_vector(self) -> Vector:
        return self.end - self.start

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    def point_at(self, t: float) -> Point:
        """Point at parameter t, where t=0 is `start` and t=1 is `end`."""
        return self.start + self.to_vector() * t


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned extents of a curve."""
    min_point: Point
    max_point: Point

    @classmethod
    def from_array(cls, points: npt.NDArray[np.float64]) -> BoundingBox:
        """Build the box of an (N, 3) array of coordinates."""
        lo = points.min(axis=0)
        hi = points.max(axis=0)
        return cls(
            min_point=Point(float(lo[0]), float(lo[1]), float(lo[2])),
            max_point=Point(float(hi[0]), float(hi[1]), float(hi[2])),
        )

    def translated(self, vector: Vector) -> BoundingBox:
        return BoundingBox(self.min_point + vector, self.max_point + vector)


@dataclass(frozen=True, init=False)
class Rectangle:
    """
    One strip of a Riemann sum.

        p2 p3
        p1 p4

    The constructor takes the corners in the order upper-left, upper-right,
    lower-left, lower-right.
    """
    p2: Point
    p3: Point
    p1: Point
    p4: Point

    def __init__(self, upper_left: Point, upper_right: Point, lower_left: Point, lower_right: Point) -> None:
        object.__setattr__(self, "p2", upper_left)
        object.__setattr__(self, "p3", upper_right)
        object.__setattr__(self, "p1", lower_left)
        object.__setattr__(self, "p4", lower_right)

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Corners counter-clockwise from the bottom-left when the height is positive."""
        return self.p1, self.p4, self.p3, self.p2

    @property
    def width(self) -> float:
        return self.p4.x - self.p1.x

    @property
    def height(self) -> float:
        """Signed height; negative where the top edge is below the baseline."""
        return self.p2.y - self.p1.y

    @property
    def area(self) -> float:
        return self.width * self.height

    def translated(self, vector: Vector) -> Rectangle:
        return Rectangle(self.p2 + vector, self.p3 + vector, self.p1 + vector, self.p4 + vector)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Corners as a (4, 3) array in the order p1, p2, p3, p4."""
        return np.array([self.p1.to_array(), self.p2.to_array(), self.p3.to_array(), self.p4.to_array()])


@dataclass(frozen=True)
class Circle:
    """
    Mathematical helper for intersection calculations.
    """
    center: Point
    radius: float
