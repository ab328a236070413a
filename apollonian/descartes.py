"""Descartes circle theorem solver.

Given three mutually tangent circles with curvatures ``k1, k2, k3`` and
centers ``z1, z2, z3`` the fourth tangent circle satisfies::

    k4 = k1 + k2 + k3 +/- 2 sqrt(k1 k2 + k2 k3 + k3 k1)
    k4 z4 = k1 z1 + k2 z2 + k3 z3 +/- 2 sqrt(k1 k2 z1 z2 + k2 k3 z2 z3 + k3 k1 z3 z1)

The complex square root is evaluated on centers shifted by a fixed offset so
that the radicand stays clear of the principal branch cut. The resulting
center is then checked for tangency against its generators and the
conjugate branch is used if the requested one does not touch them.
"""

from __future__ import annotations

import cmath
import logging
import math
from typing import Optional, Tuple

from .circle import Circle
from .config import CENTER_OFFSET, GasketConfig, get_gasket_config
from .errors import DegenerateConfiguration, InvalidCurvature

logger = logging.getLogger(__name__)

PLUS = 1
MINUS = -1


def _check_sign(sign: int) -> None:
    if sign not in (PLUS, MINUS):
        raise ValueError(f"sign must be +1 or -1, got {sign!r}")


def _check_curvatures(*curvatures: float) -> None:
    for k in curvatures:
        if k == 0.0:
            raise InvalidCurvature("Descartes solver requires non-zero curvatures", k)


def curvature_radicand(k1: float, k2: float, k3: float) -> float:
    return k1 * k2 + k2 * k3 + k3 * k1


def fourth_curvature(
    k1: float,
    k2: float,
    k3: float,
    sign: int = PLUS,
    *,
    radicand_tol: float = 1e-12,
) -> float:
    """Return the curvature of the fourth circle tangent to three circles."""

    _check_sign(sign)
    _check_curvatures(k1, k2, k3)
    radicand = curvature_radicand(k1, k2, k3)
    if radicand < 0.0:
        scale = abs(k1 * k2) + abs(k2 * k3) + abs(k3 * k1)
        if radicand < -radicand_tol * scale:
            raise DegenerateConfiguration(
                f"curvatures ({k1:g}, {k2:g}, {k3:g}) admit no real fourth circle",
                radicand,
            )
        radicand = 0.0
    return k1 + k2 + k3 + sign * 2.0 * math.sqrt(radicand)


def fourth_center(
    k1: float,
    z1: complex,
    k2: float,
    z2: complex,
    k3: float,
    z3: complex,
    k4: float,
    sign: int = PLUS,
    *,
    offset: complex = CENTER_OFFSET,
) -> complex:
    """Return the center of the fourth circle for curvature ``k4``."""

    _check_sign(sign)
    if k4 == 0.0:
        raise InvalidCurvature("the fourth circle degenerates into a line", k4)
    w1 = z1 + offset
    w2 = z2 + offset
    w3 = z3 + offset
    root = cmath.sqrt(k1 * k2 * w1 * w2 + k2 * k3 * w2 * w3 + k3 * k1 * w3 * w1)
    return (k1 * w1 + k2 * w2 + k3 * w3 + sign * 2.0 * root) / k4 - offset


def tangency_residual(candidate: Circle, generators: Tuple[Circle, Circle, Circle]) -> float:
    """Largest tangency error of ``candidate`` against ``generators``, relative to scale."""

    worst = 0.0
    for parent in generators:
        scale = candidate.radius + parent.radius
        worst = max(worst, candidate.tangency_error(parent) / scale)
    return worst


def solve_tangent(
    c1: Circle,
    c2: Circle,
    c3: Circle,
    sign: int = PLUS,
    config: Optional[GasketConfig] = None,
    *,
    exclude: Optional[Circle] = None,
) -> Circle:
    """Return the circle tangent to ``c1``, ``c2`` and ``c3`` for the given root.

    A candidate concentric with ``exclude`` is skipped; this separates the
    two inscribed circles when both roots share one curvature.
    """

    cfg = config or get_gasket_config()
    k4 = fourth_curvature(c1.k, c2.k, c3.k, sign, radicand_tol=cfg.radicand_tol)
    if k4 == 0.0:
        raise InvalidCurvature("the fourth circle degenerates into a line", k4)

    generators = (c1, c2, c3)
    best: Optional[Circle] = None
    best_residual = math.inf
    for center_sign in (sign, -sign):
        z4 = fourth_center(
            c1.k, c1.z, c2.k, c2.z, c3.k, c3.z, k4, center_sign, offset=cfg.center_offset
        )
        candidate = Circle(k4, z4)
        if exclude is not None and abs(candidate.z - exclude.z) <= cfg.tangency_tol * candidate.radius:
            continue
        residual = tangency_residual(candidate, generators)
        if residual <= cfg.tangency_tol:
            if center_sign != sign:
                logger.debug("Using conjugate center branch for k=%g (residual %.3g)", k4, residual)
            return candidate
        if residual < best_residual:
            best, best_residual = candidate, residual

    raise DegenerateConfiguration(
        f"no center branch for k={k4:g} is tangent to its generators "
        f"(best residual {best_residual:.3g}, closest {best})"
    )


__all__ = [
    "MINUS",
    "PLUS",
    "curvature_radicand",
    "fourth_center",
    "fourth_curvature",
    "solve_tangent",
    "tangency_residual",
]
