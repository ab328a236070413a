"""Gasket root: base circles, top-level regions and the public query API."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .circle import Circle, PointLike, as_point
from .classify import RootTag, classify_root, point_left_of_line
from .config import GasketConfig, get_gasket_config
from .descartes import MINUS, PLUS, solve_tangent
from .errors import DegenerateConfiguration, InvalidCurvature
from .logging_utils import debug_log_call
from .nodes import InteriorNode, PeripheralNode, RegionNode, SubdivisionBudget

logger = logging.getLogger(__name__)

# Result of ``locate`` for points outside the bounding circle.
OUTSIDE = math.inf

REGION_ORDER: Tuple[RootTag, ...] = ("abd", "adc", "ace", "aeb", "bdc", "ceb")

SeedPair = Tuple[float, PointLike]


@dataclass(frozen=True)
class SeedSpec:
    """Curvatures and centers of the three seed circles ``a``, ``b`` and ``c``.

    ``a`` is the bounding circle and must have negative curvature.
    """

    curvatures: Tuple[float, float, float]
    centers: Tuple[complex, complex, complex]

    @classmethod
    def from_boundary(cls, curvature: float = -1.0, center: PointLike = 0j) -> "SeedSpec":
        """Boundary circle with two equal seeds side by side on its diameter."""

        k = float(curvature)
        if not k < 0.0:
            raise InvalidCurvature(f"boundary curvature must be negative, got {curvature!r}", k)
        z = as_point(center)
        return cls(
            curvatures=(k, -2.0 * k, -2.0 * k),
            centers=(z, z + 0.5 / k, z - 0.5 / k),
        )

    @classmethod
    def from_triples(cls, a: SeedPair, b: SeedPair, c: SeedPair) -> "SeedSpec":
        return cls(
            curvatures=(float(a[0]), float(b[0]), float(c[0])),
            centers=(as_point(a[1]), as_point(b[1]), as_point(c[1])),
        )

    def circles(self) -> Tuple[Circle, Circle, Circle]:
        a, b, c = (Circle(k, z) for k, z in zip(self.curvatures, self.centers))
        return a, b, c


@dataclass
class GasketStats:
    circles: int
    regions: int
    peripheral: int
    interior: int
    leaves: int
    max_generation: int
    max_curvature: float


class Gasket:
    """Apollonian gasket rooted in three mutually tangent seed circles.

    ``d`` and ``e`` are the two circles inscribed between the seeds, on
    opposite sides of the ``b``-``c`` axis. Together with the seeds they
    leave six curvilinear triangles: four touching the boundary ``a`` and two
    enclosed by ``b``, ``c`` and ``d`` or ``e``. Each one is the root of a
    subdivision tree.
    """

    def __init__(self, seeds: Optional[SeedSpec] = None, *, config: Optional[GasketConfig] = None):
        self.config = config or get_gasket_config()
        seeds = seeds or SeedSpec.from_boundary()
        a, b, c = seeds.circles()
        if a.k >= 0.0:
            raise InvalidCurvature("the first seed must be the bounding circle (negative curvature)", a.k)
        self._check_seeds_tangent(a, b, c)
        spread = abs(((b.z - a.z).conjugate() * (c.z - a.z)).imag)
        if spread > self.config.tangency_tol * a.r2:
            # routing splits the disk along the b -> c axis through a's center
            logger.warning("Seed centers are not collinear; point routing may misplace regions")

        d = solve_tangent(a, b, c, PLUS, self.config)
        if not point_left_of_line(d.z, b.z, c.z):
            # keep d on the left of the b -> c axis
            b, c = c, b
        e = solve_tangent(a, b, c, MINUS, self.config, exclude=d)

        self.a, self.b, self.c, self.d, self.e = a, b, c, d, e
        cfg = self.config
        self.regions: Dict[RootTag, RegionNode] = {
            "abd": PeripheralNode((a, b, d), 0, cfg),
            "adc": PeripheralNode((a, d, c), 0, cfg),
            "ace": PeripheralNode((a, c, e), 0, cfg),
            "aeb": PeripheralNode((a, e, b), 0, cfg),
            "bdc": InteriorNode((b, d, c), 0, cfg),
            "ceb": InteriorNode((c, e, b), 0, cfg),
        }
        self._base: Dict[RootTag, Circle] = {"b": b, "c": c, "d": d, "e": e}
        self._node_count = len(self.regions)
        logger.info("Built gasket: boundary %s, d.k=%g, e.k=%g", a, d.k, e.k)

    def _check_seeds_tangent(self, a: Circle, b: Circle, c: Circle) -> None:
        for first, second in ((a, b), (b, c), (c, a)):
            error = first.tangency_error(second) / (first.radius + second.radius)
            if error > self.config.tangency_tol:
                raise DegenerateConfiguration(
                    f"seed circles {first} and {second} are not tangent (relative error {error:.3g})"
                )

    @property
    def base_circles(self) -> Tuple[Circle, Circle, Circle, Circle, Circle]:
        return self.a, self.b, self.c, self.d, self.e

    @property
    def node_count(self) -> int:
        return self._node_count

    # -- growth ---------------------------------------------------------

    def subdivide(
        self,
        depth: Optional[int] = None,
        *,
        ceiling: Optional[float] = None,
        workers: Optional[int] = None,
    ) -> int:
        """Grow all six regions by ``depth`` generations or up to curvature ``ceiling``.

        Returns the number of region nodes created. With ``workers`` the six
        regions are subdivided on a thread pool.
        """

        if (depth is None) == (ceiling is None):
            raise ValueError("subdivide requires exactly one of depth or ceiling")
        if depth is not None and depth < 0:
            raise ValueError("depth must be non-negative")

        budget = SubdivisionBudget.from_config(self.config, existing=self._node_count)

        def grow(region: RegionNode) -> int:
            if depth is not None:
                return region.subdivide(depth, budget)
            return region.subdivide_to_curvature(float(ceiling), budget)  # type: ignore[arg-type]

        try:
            if workers and workers > 1:
                with ThreadPoolExecutor(max_workers=min(workers, len(self.regions))) as pool:
                    futures = [pool.submit(grow, region) for region in self.regions.values()]
                    for future in futures:
                        future.result()
            else:
                for region in self.regions.values():
                    grow(region)
        finally:
            self._node_count = budget.total

        logger.info(
            "Subdivided gasket (depth=%s, ceiling=%s): %d new regions, %d total",
            depth,
            ceiling,
            budget.created,
            self._node_count,
        )
        return budget.created

    # -- queries --------------------------------------------------------

    def classify(self, point: PointLike) -> RootTag:
        return classify_root(as_point(point), self.a, self.b, self.c, self.d, self.e)

    def locate(self, point: PointLike) -> float:
        """Signed penetration of the nearest circle found for ``point``.

        Negative inside a circle of the tree, ``OUTSIDE`` beyond the boundary.
        """

        p = as_point(point)
        tag = classify_root(p, self.a, self.b, self.c, self.d, self.e)
        if tag == "outside":
            return OUTSIDE
        base = self._base.get(tag)
        if base is not None:
            return base.penetration(p)
        return self.regions[tag].locate(p)

    def shade(self, point: PointLike) -> int:
        """Grey value for ``point``; background outside every generated circle."""

        p = as_point(point)
        tag = classify_root(p, self.a, self.b, self.c, self.d, self.e)
        background = self.config.background
        if tag == "outside":
            return background
        base = self._base.get(tag)
        if base is not None:
            return base.shade(p, self.config.shade_max, background)
        value = self.regions[tag].shade(p)
        return background if value is None else value

    def contains(self, point: PointLike) -> bool:
        """Return ``True`` only for points routed to the ``adc`` or ``aeb`` regions.

        This reproduces a legacy diagnostic: despite its name it does not test
        membership in the packing's circles, and nothing else relies on it.
        """

        return self.classify(point) in ("adc", "aeb")

    def shade_points(self, points: Iterable) -> np.ndarray:
        """Shade an array of points.

        ``points`` is either a complex array of any shape or a real array whose
        last axis holds ``(x, y)``. The result has the points' shape.
        """

        arr = np.asarray(points)
        if np.iscomplexobj(arr):
            shape = arr.shape
            flat = arr.ravel()
        else:
            if arr.ndim == 0 or arr.shape[-1] != 2:
                raise ValueError("real point arrays must have a trailing axis of length 2")
            shape = arr.shape[:-1]
            flat = (arr[..., 0] + 1j * arr[..., 1]).ravel()
        dtype = np.uint8 if self.config.shade_max <= 255 else np.uint32
        values = np.fromiter((self.shade(complex(p)) for p in flat), dtype=dtype, count=flat.size)
        return values.reshape(shape)

    # -- traversal ------------------------------------------------------

    def iter_nodes(self) -> Iterator[RegionNode]:
        for tag in REGION_ORDER:
            yield from self.regions[tag].iter_nodes()

    def iter_circles(self) -> Iterator[Circle]:
        """Yield the five base circles, then every region circle in pre-order."""

        yield from self.base_circles
        for node in self.iter_nodes():
            yield node.circle

    def enumerate_circles(self) -> Iterator[Tuple[Tuple[float, float], float]]:
        for circle in self.iter_circles():
            yield circle.center, circle.radius

    def circle_array(self) -> np.ndarray:
        """Return an ``(n, 3)`` array of ``(x, y, radius)`` rows."""

        rows: List[Tuple[float, float, float]] = [
            (center[0], center[1], radius) for center, radius in self.enumerate_circles()
        ]
        return np.asarray(rows, dtype=float).reshape(-1, 3)

    def stats(self) -> GasketStats:
        peripheral = interior = leaves = 0
        max_generation = 0
        max_curvature = max(circle.k for circle in self.base_circles)
        for node in self.iter_nodes():
            if isinstance(node, PeripheralNode):
                peripheral += 1
            else:
                interior += 1
            if node.is_leaf:
                leaves += 1
            max_generation = max(max_generation, node.generation)
            max_curvature = max(max_curvature, node.circle.k)
        return GasketStats(
            circles=len(self.base_circles) + peripheral + interior,
            regions=peripheral + interior,
            peripheral=peripheral,
            interior=interior,
            leaves=leaves,
            max_generation=max_generation,
            max_curvature=max_curvature,
        )

    def __repr__(self) -> str:
        return f"Gasket(a={self.a!r}, nodes={self._node_count})"


@debug_log_call(logger, name="build")
def build(seeds: Optional[SeedSpec] = None, *, config: Optional[GasketConfig] = None) -> Gasket:
    """Construct the five base circles and six top-level regions."""

    return Gasket(seeds, config=config)


@debug_log_call(logger, name="subdivide")
def subdivide(
    gasket: Gasket,
    depth: Optional[int] = None,
    *,
    ceiling: Optional[float] = None,
    workers: Optional[int] = None,
) -> int:
    return gasket.subdivide(depth, ceiling=ceiling, workers=workers)


def shade(gasket: Gasket, point: PointLike) -> int:
    return gasket.shade(point)


def locate(gasket: Gasket, point: PointLike) -> float:
    return gasket.locate(point)


def enumerate_circles(gasket: Gasket) -> Iterator[Tuple[Tuple[float, float], float]]:
    return gasket.enumerate_circles()


def shade_points(gasket: Gasket, points: Iterable) -> np.ndarray:
    return gasket.shade_points(points)


def circle_array(gasket: Gasket) -> np.ndarray:
    return gasket.circle_array()


__all__ = [
    "OUTSIDE",
    "REGION_ORDER",
    "Gasket",
    "GasketStats",
    "SeedSpec",
    "build",
    "circle_array",
    "enumerate_circles",
    "locate",
    "shade",
    "shade_points",
    "subdivide",
]
