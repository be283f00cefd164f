"""Immutable 3-component vectors and the vector utilities used by the marcher.

A single ``Vec3`` type is used for positions, directions and RGB colors.
Multiplying two vectors is componentwise (Hadamard product), which is what
color mixing needs; multiplying by a number scales the vector.

Example:
    >>> from sdf_marcher.core.vector import Vec3, length, normalize
    >>> v = Vec3(3.0, 4.0, 0.0)
    >>> length(v)
    5.0
    >>> normalize(Vec3(0.0, 2.0, 0.0))
    Vec3(x=0.0, y=1.0, z=0.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from sdf_marcher.errors import InvalidVectorError


@dataclass(frozen=True)
class Vec3:
    """A 3D vector with float components.

    Attributes:
        x: First component (red when used as a color).
        y: Second component (green when used as a color).
        z: Third component (blue when used as a color).
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __abs__(self) -> Vec3:
        return Vec3(abs(self.x), abs(self.y), abs(self.z))

    def __mul__(self, other: Vec3 | float) -> Vec3:
        """Hadamard product with a vector, or scaling by a number."""
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return scale(other, self)

    def __rmul__(self, other: float) -> Vec3:
        return scale(other, self)

    def __truediv__(self, other: float) -> Vec3:
        return Vec3(self.x / other, self.y / other, self.z / other)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def to_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple."""
        return (self.x, self.y, self.z)


# Unit axes used for finite differences
UNIT_X = Vec3(1.0, 0.0, 0.0)
UNIT_Y = Vec3(0.0, 1.0, 0.0)
UNIT_Z = Vec3(0.0, 0.0, 1.0)
ZERO = Vec3(0.0, 0.0, 0.0)


def vec3_from(value: Vec3 | Sequence[float]) -> Vec3:
    """Coerce a ``Vec3`` or a 3-element sequence into a ``Vec3``.

    Raises:
        ValueError: If the sequence does not have exactly three elements.
    """
    if isinstance(value, Vec3):
        return value
    if len(value) != 3:
        raise ValueError(f"Expected 3 components, got {len(value)}")
    return Vec3(float(value[0]), float(value[1]), float(value[2]))


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def scale(factor: float, v: Vec3) -> Vec3:
    """Scale a vector's magnitude by a number."""
    return Vec3(factor * v.x, factor * v.y, factor * v.z)


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return v.x * v.x + v.y * v.y + v.z * v.z


def length(v: Vec3) -> float:
    """Compute the length (magnitude) of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vec3) -> Vec3:
    """Scale a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.

    Raises:
        InvalidVectorError: If v has zero length.
    """
    magnitude = length(v)
    if magnitude == 0.0:
        raise InvalidVectorError(f"Cannot normalize a vector with magnitude 0: {v}")
    return scale(1.0 / magnitude, v)


def equal_within_error(epsilon: float, a: float, b: float) -> bool:
    """Return True if ``|a - b| < epsilon``."""
    return abs(a - b) < epsilon
