"""Subdivision tree nodes of the gasket.

A region is the curvilinear triangle left between three mutually tangent
circles. Each node stores those three generating circles by value together
with the circle inscribed in the region, and owns up to three child regions
created lazily by subdivision.

Peripheral regions touch the outer boundary circle and split into two
peripheral regions and one interior region. Interior regions are enclosed
by generated circles on all sides and split into three interior regions.

Subdivision, queries and enumeration walk the tree with explicit stacks, so
very deep trees never exhaust the interpreter call stack.
"""

from __future__ import annotations

import logging
import math
from threading import Lock
from typing import Callable, Iterator, List, Optional, Tuple, Type

from .circle import Circle
from .classify import SLOT_INDEX, NodeTag, classify_interior, classify_peripheral
from .config import GasketConfig, get_gasket_config
from .descartes import PLUS, solve_tangent
from .errors import DegenerateConfiguration, ResourceLimitExceeded

logger = logging.getLogger(__name__)

ChildSpec = Tuple[Type["RegionNode"], Tuple[Circle, Circle, Circle]]


class SubdivisionBudget:
    """Shared limits for one subdivision pass.

    ``max_depth`` bounds the generation of any created node and
    ``max_nodes`` bounds the total number of region nodes in the tree.
    Safe to share between threads.
    """

    def __init__(self, max_depth: int, max_nodes: Optional[int] = None, existing: int = 0):
        self.max_depth = max_depth
        self.max_nodes = max_nodes
        self.total = existing
        self.created = 0
        self._lock = Lock()

    @classmethod
    def from_config(cls, config: GasketConfig, existing: int = 0) -> "SubdivisionBudget":
        return cls(config.max_depth, config.max_nodes, existing)

    def charge(self, generation: int) -> None:
        if generation > self.max_depth:
            raise ResourceLimitExceeded(
                f"subdivision reached generation {generation} beyond max_depth={self.max_depth}",
                limit=self.max_depth,
                kind="depth",
            )
        with self._lock:
            if self.max_nodes is not None and self.total >= self.max_nodes:
                raise ResourceLimitExceeded(
                    f"subdivision would exceed max_nodes={self.max_nodes}",
                    limit=self.max_nodes,
                    kind="nodes",
                )
            self.total += 1
            self.created += 1


class RegionNode:
    """Common behaviour of peripheral and interior region nodes."""

    kind = "region"

    __slots__ = ("parents", "circle", "generation", "children", "_failed", "_lock", "_config")

    def __init__(
        self,
        parents: Tuple[Circle, Circle, Circle],
        generation: int = 0,
        config: Optional[GasketConfig] = None,
    ):
        self._config = config or get_gasket_config()
        self.parents = parents
        self.generation = generation
        self.circle = solve_tangent(parents[0], parents[1], parents[2], PLUS, self._config)
        self.children: List[Optional[RegionNode]] = [None, None, None]
        self._failed = [False, False, False]
        self._lock = Lock()

    # -- variant hooks -------------------------------------------------

    def child_specs(self) -> Tuple[ChildSpec, ChildSpec, ChildSpec]:
        raise NotImplementedError

    def classify(self, point: complex) -> NodeTag:
        raise NotImplementedError

    def _locate_step(self, point: complex) -> Tuple[float, Optional["RegionNode"]]:
        raise NotImplementedError

    # -- structure -----------------------------------------------------

    @property
    def is_leaf(self) -> bool:
        return all(child is None for child in self.children)

    def existing_children(self) -> List["RegionNode"]:
        return [child for child in self.children if child is not None]

    def child_for(self, tag: NodeTag) -> Optional["RegionNode"]:
        if tag == "own":
            return None
        return self.children[SLOT_INDEX[tag]]

    def ensure_children(self, budget: Optional[SubdivisionBudget] = None) -> int:
        """Create every missing child slot once; return how many were created.

        A slot whose circle cannot be solved is logged, left empty and not
        retried, so the branch behaves as a leaf.
        """

        budget = budget or SubdivisionBudget.from_config(self._config)
        created = 0
        with self._lock:
            for slot, (node_cls, parents) in enumerate(self.child_specs()):
                if self.children[slot] is not None or self._failed[slot]:
                    continue
                budget.charge(self.generation + 1)
                try:
                    self.children[slot] = node_cls(parents, self.generation + 1, self._config)
                except DegenerateConfiguration as exc:
                    self._failed[slot] = True
                    logger.warning(
                        "Skipping %s child %d of %s: %s", node_cls.kind, slot, self.circle, exc
                    )
                    continue
                created += 1
        return created

    def _grow(
        self,
        initial: int,
        expand: Callable[["RegionNode", int], bool],
        budget: Optional[SubdivisionBudget],
    ) -> int:
        budget = budget or SubdivisionBudget.from_config(self._config)
        created = 0
        stack: List[Tuple[RegionNode, int]] = [(self, initial)]
        while stack:
            node, remaining = stack.pop()
            if not expand(node, remaining):
                continue
            created += node.ensure_children(budget)
            for child in reversed(node.existing_children()):
                stack.append((child, remaining - 1))
        return created

    def subdivide(self, depth: int, budget: Optional[SubdivisionBudget] = None) -> int:
        """Grow this region ``depth`` generations below itself."""

        return self._grow(depth, lambda node, remaining: remaining > 0, budget)

    def subdivide_to_curvature(
        self, ceiling: float, budget: Optional[SubdivisionBudget] = None
    ) -> int:
        """Grow every descendant whose circle curvature is still below ``ceiling``."""

        return self._grow(0, lambda node, remaining: node.circle.k < ceiling, budget)

    def iter_nodes(self) -> Iterator["RegionNode"]:
        """Yield this node and its descendants in pre-order, children by slot."""

        stack: List[RegionNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.existing_children()))

    # -- queries -------------------------------------------------------

    def locate(self, point: complex) -> float:
        """Smallest penetration met while descending towards ``point``."""

        best = math.inf
        node: Optional[RegionNode] = self
        while node is not None:
            value, node = node._locate_step(point)
            if value < best:
                best = value
        return best

    def shade(self, point: complex) -> Optional[int]:
        """Shade of the circle containing ``point``, or ``None`` for background."""

        node: Optional[RegionNode] = self
        while node is not None:
            tag = node.classify(point)
            if tag == "own":
                cfg = node._config
                return node.circle.shade(point, cfg.shade_max, cfg.background)
            node = node.child_for(tag)
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(circle={self.circle!r}, generation={self.generation})"


class PeripheralNode(RegionNode):
    """Region whose circle touches the outer boundary circle.

    ``parents`` is ``(boundary, inner1, inner2)``.
    """

    kind = "peripheral"

    __slots__ = ()

    @property
    def boundary(self) -> Circle:
        return self.parents[0]

    def child_specs(self) -> Tuple[ChildSpec, ChildSpec, ChildSpec]:
        boundary, inner1, inner2 = self.parents
        c = self.circle
        return (
            (PeripheralNode, (boundary, inner1, c)),
            (PeripheralNode, (boundary, c, inner2)),
            (InteriorNode, (inner1, inner2, c)),
        )

    def classify(self, point: complex) -> NodeTag:
        boundary, inner1, inner2 = self.parents
        return classify_peripheral(point, self.circle, boundary, inner1, inner2)

    def _locate_step(self, point: complex) -> Tuple[float, Optional[RegionNode]]:
        value = self.circle.penetration(point)
        if value < 0.0:
            return value, None
        return value, self.child_for(self.classify(point))


class InteriorNode(RegionNode):
    """Region enclosed by three generated circles, away from the boundary."""

    kind = "interior"

    __slots__ = ()

    def child_specs(self) -> Tuple[ChildSpec, ChildSpec, ChildSpec]:
        inner1, inner2, inner3 = self.parents
        c = self.circle
        return (
            (InteriorNode, (inner1, inner2, c)),
            (InteriorNode, (inner1, inner3, c)),
            (InteriorNode, (inner2, inner3, c)),
        )

    def classify(self, point: complex) -> NodeTag:
        inner1, inner2, inner3 = self.parents
        return classify_interior(point, self.circle, inner1, inner2, inner3)

    def _locate_step(self, point: complex) -> Tuple[float, Optional[RegionNode]]:
        # Distances are not refined below an interior node.
        return self.circle.penetration(point), None


__all__ = [
    "InteriorNode",
    "PeripheralNode",
    "RegionNode",
    "SubdivisionBudget",
]
