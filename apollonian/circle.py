"""Immutable circle values used throughout the gasket."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, field
from typing import Sequence, Tuple, Union

from .errors import InvalidCurvature

PointLike = Union[complex, float, Sequence[float]]


def as_point(value: PointLike) -> complex:
    """Coerce ``value`` to a complex point.

    Accepts complex numbers, real numbers (taken as points on the real axis)
    and ``(x, y)`` pairs, including length-2 numpy arrays.
    """

    if isinstance(value, complex):
        return value
    if isinstance(value, numbers.Real):
        return complex(float(value), 0.0)
    if isinstance(value, numbers.Complex):
        return complex(value)
    try:
        x, y = value  # type: ignore[misc]
    except (TypeError, ValueError) as exc:
        raise TypeError(f"expected a complex number or an (x, y) pair, got {value!r}") from exc
    return complex(float(x), float(y))


@dataclass(frozen=True)
class Circle:
    """Circle with signed curvature ``k`` and complex center ``z``.

    A negative curvature marks a circle whose interior is the unbounded side,
    such as the outer boundary of the packing. ``r2`` is derived from ``k``.
    """

    k: float
    z: complex
    r2: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        k = float(self.k)
        if k == 0.0 or not math.isfinite(k):
            raise InvalidCurvature(f"circle curvature must be finite and non-zero, got {self.k!r}", k)
        object.__setattr__(self, "k", k)
        object.__setattr__(self, "z", as_point(self.z))
        object.__setattr__(self, "r2", 1.0 / (k * k))

    @property
    def radius(self) -> float:
        return 1.0 / abs(self.k)

    @property
    def signed_radius(self) -> float:
        return 1.0 / self.k

    @property
    def center(self) -> Tuple[float, float]:
        return self.z.real, self.z.imag

    def penetration(self, point: complex) -> float:
        """Squared distance from the center minus ``r2``; negative strictly inside."""

        delta = self.z - point
        return delta.real * delta.real + delta.imag * delta.imag - self.r2

    def contains(self, point: complex) -> bool:
        return self.penetration(point) <= 0.0

    def shade(self, point: complex, shade_max: int = 255, background: int = 0) -> int:
        """Map the normalized penetration depth at ``point`` to ``[0, shade_max]``."""

        depth = self.penetration(point)
        if depth >= 0.0:
            return background
        value = int(-shade_max * depth / self.r2)
        return min(max(value, 0), shade_max)

    def tangency_error(self, other: "Circle") -> float:
        """Return how far ``self`` and ``other`` are from touching.

        With signed radii the center distance of two tangent circles is
        ``|1/k1 + 1/k2|`` for both external and internal contact.
        """

        return abs(abs(self.z - other.z) - abs(self.signed_radius + other.signed_radius))

    def __str__(self) -> str:
        return f"circle({self.z.real:.12g}, {self.z.imag:.12g}, {self.signed_radius:.12g})"


__all__ = ["Circle", "PointLike", "as_point"]
