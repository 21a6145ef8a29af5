"""Mutable 3D vector used throughout the tracer.

Vector3 is a small mutable builder: every operation that produces a vector
mutates the receiver and returns it, so expressions can be chained. Call
clone() first whenever the original value is still needed.

Example:
    >>> from src.whitted.core.vector import Vector3
    >>> point = Vector3(0.0, 0.0, 0.0)
    >>> direction = Vector3(0.0, 0.0, -2.0).normalize()
    >>> hit = point.clone().add(direction.clone().multiply(5.0))
    >>> hit.to_tuple()
    (0.0, 0.0, -5.0)
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator


class Vector3:
    """A mutable three-component floating point vector.

    Attributes:
        x: First component.
        y: Second component.
        z: Third component.
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> Vector3:
        """Build a vector from any three-element iterable.

        Raises:
            ValueError: If values does not hold exactly three numbers.
        """
        components = tuple(values)
        if len(components) != 3:
            raise ValueError(f"Expected 3 components, got {len(components)}")
        return cls(components[0], components[1], components[2])

    def set(self, x: float, y: float, z: float) -> Vector3:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        return self

    def add(self, other: Vector3) -> Vector3:
        self.x += other.x
        self.y += other.y
        self.z += other.z
        return self

    def subtract(self, other: Vector3) -> Vector3:
        self.x -= other.x
        self.y -= other.y
        self.z -= other.z
        return self

    def multiply(self, scalar: float) -> Vector3:
        self.x *= scalar
        self.y *= scalar
        self.z *= scalar
        return self

    def product(self, other: Vector3) -> Vector3:
        """Element-wise multiply by another vector (used for color filtering)."""
        self.x *= other.x
        self.y *= other.y
        self.z *= other.z
        return self

    def negate(self) -> Vector3:
        self.x = -self.x
        self.y = -self.y
        self.z = -self.z
        return self

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vector3:
        """Scale the vector to unit length in place.

        A zero-length vector is left untouched (it stays zero) instead of
        raising a division error.

        Returns:
            This vector.
        """
        length_sq = self.length_squared()
        if length_sq > 0.0:
            inverse_length = 1.0 / math.sqrt(length_sq)
            self.x *= inverse_length
            self.y *= inverse_length
            self.z *= inverse_length
        return self

    def clone(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    # Mutable, so not hashable
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector3({self.x!r}, {self.y!r}, {self.z!r})"
