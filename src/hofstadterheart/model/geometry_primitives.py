"""
Geometric Primitives for the point cloud and its camera framing.
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

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar, self.z * scalar)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


@dataclass(frozen=True)
class Point:
    """A simple geometric point in 3D space."""
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

    def distance_to(self, other: Point) -> float:
        return (self - other).magnitude

    def midpoint(self, other: Point) -> Point:
        return Point((self.x + other.x) / 2.0, (self.y + other.y) / 2.0, (self.z + other.z) / 2.0)

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @classmethod
    def from_array(cls, arr: npt.ArrayLike) -> Point:
        x, y, z = np.asarray(arr, dtype=np.float64).reshape(3)
        return cls(float(x), float(y), float(z))


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box spanned by the min and max corner of a point set."""
    min: Point
    max: Point

    @property
    def center(self) -> Point:
        return self.min.midpoint(self.max)

    @property
    def size(self) -> Vector:
        return self.max - self.min

    @property
    def max_dim(self) -> float:
        """Largest of the three extents."""
        size = self.size
        return max(size.x, size.y, size.z)

    def contains(self, point: Point) -> bool:
        return (self.min.x <= point.x <= self.max.x
                and self.min.y <= point.y <= self.max.y
                and self.min.z <= point.z <= self.max.z)


@dataclass(frozen=True)
class ViewSuggestion:
    """Camera placement handed to the renderer: where to stand and what to look at."""
    position: Point
    target: Point

    @property
    def distance(self) -> float:
        return (self.position - self.target).magnitude
