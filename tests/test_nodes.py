import logging
import math

import pytest

from apollonian import (
    Circle,
    GasketConfig,
    InteriorNode,
    PeripheralNode,
    ResourceLimitExceeded,
    SubdivisionBudget,
)


def _base_circles():
    a = Circle(-1.0, 0j)
    b = Circle(2.0, -0.5 + 0j)
    c = Circle(2.0, 0.5 + 0j)
    d = Circle(3.0, complex(0.0, 2.0 / 3.0))
    return a, b, c, d


def _peripheral(config=None):
    a, b, _, d = _base_circles()
    return PeripheralNode((a, b, d), 0, config or GasketConfig())


def _interior(config=None):
    _, b, c, d = _base_circles()
    return InteriorNode((b, d, c), 0, config or GasketConfig())


class _BrokenPeripheral(PeripheralNode):
    """Peripheral node whose interior child is generated from separated circles."""

    __slots__ = ()

    def child_specs(self):
        specs = list(super().child_specs())
        separated = (Circle(1.0, 50 + 50j), Circle(1.0, -50 + 0j), Circle(1.0, 50j))
        specs[2] = (InteriorNode, separated)
        return tuple(specs)


def test_peripheral_node_circle():
    node = _peripheral()

    assert math.isclose(node.circle.k, 6.0, rel_tol=1e-12)
    assert abs(node.circle.z - complex(-0.5, 2.0 / 3.0)) < 1e-12
    assert node.boundary.k == -1.0
    assert node.is_leaf


def test_interior_node_circle():
    node = _interior()

    assert math.isclose(node.circle.k, 15.0, rel_tol=1e-12)
    assert abs(node.circle.z - complex(0.0, 4.0 / 15.0)) < 1e-12


def test_depth_zero_leaves_node_childless():
    node = _peripheral()

    assert node.subdivide(0) == 0
    assert node.children == [None, None, None]


def test_peripheral_children_follow_genealogy():
    node = _peripheral()
    assert node.subdivide(1) == 3

    first, second, inner = node.children
    a, b, _, d = _base_circles()
    assert isinstance(first, PeripheralNode)
    assert isinstance(second, PeripheralNode)
    assert isinstance(inner, InteriorNode)
    assert first.parents == (a, b, node.circle)
    assert second.parents == (a, node.circle, d)
    assert inner.parents == (b, d, node.circle)
    assert math.isclose(first.circle.k, 11.0, rel_tol=1e-12)
    assert math.isclose(second.circle.k, 14.0, rel_tol=1e-12)
    assert math.isclose(inner.circle.k, 23.0, rel_tol=1e-12)
    assert all(child.generation == 1 for child in node.children)


def test_interior_children_follow_genealogy():
    node = _interior()
    node.subdivide(1)

    _, b, c, d = _base_circles()
    own = node.circle
    assert all(isinstance(child, InteriorNode) for child in node.children)
    assert [child.parents for child in node.children] == [(b, d, own), (b, c, own), (d, c, own)]


def test_generated_circles_are_tangent_to_their_parents():
    for node in (_peripheral(), _interior()):
        node.subdivide(4)
        for descendant in node.iter_nodes():
            for parent in descendant.parents:
                scale = descendant.circle.radius + parent.radius
                assert descendant.circle.tangency_error(parent) / scale < 1e-9


def test_subdivision_is_idempotent():
    node = _peripheral()
    assert node.subdivide(2) == 3 + 9

    before = [(id(n), n.circle) for n in node.iter_nodes()]
    assert node.subdivide(2) == 0
    assert node.subdivide(1) == 0
    after = [(id(n), n.circle) for n in node.iter_nodes()]
    assert before == after


def test_deeper_subdivision_keeps_existing_children():
    node = _peripheral()
    node.subdivide(1)
    children = list(node.children)

    assert node.subdivide(2) == 9
    assert all(old is new for old, new in zip(children, node.children))
    assert len(list(node.iter_nodes())) == 1 + 3 + 9


def test_curvature_ceiling_controls_growth():
    node = _peripheral()

    assert node.subdivide_to_curvature(6.0) == 0
    assert node.subdivide_to_curvature(7.0) == 3
    assert all(child.circle.k > 7.0 for child in node.children)
    assert node.subdivide_to_curvature(7.0) == 0


def test_curvature_growth_reaches_deep_generations():
    node = _peripheral()
    node.subdivide_to_curvature(400.0)

    deepest = max(n.generation for n in node.iter_nodes())
    assert deepest >= 8
    for n in node.iter_nodes():
        if n.circle.k < 400.0:
            assert not n.is_leaf


def test_depth_budget_raises_resource_limit():
    node = _peripheral(GasketConfig(max_depth=2))

    with pytest.raises(ResourceLimitExceeded) as excinfo:
        node.subdivide(5)
    assert excinfo.value.kind == "depth"
    assert max(n.generation for n in node.iter_nodes()) == 2


def test_node_budget_raises_resource_limit():
    node = _peripheral()
    budget = SubdivisionBudget(max_depth=10, max_nodes=4)

    with pytest.raises(ResourceLimitExceeded) as excinfo:
        node.subdivide(2, budget)
    assert excinfo.value.kind == "nodes"
    assert excinfo.value.limit == 4
    assert budget.created == 4


def test_degenerate_child_is_skipped(caplog):
    a, b, _, d = _base_circles()
    node = _BrokenPeripheral((a, b, d), 0, GasketConfig())

    with caplog.at_level(logging.WARNING, logger="apollonian.nodes"):
        assert node.subdivide(1) == 2
    assert node.children[2] is None
    assert "Skipping interior child 2" in caplog.text

    # failed slots are not retried
    assert node.subdivide(1) == 0
    assert node.children[2] is None
    assert node.shade(complex(-0.3, 0.45)) is None


def test_peripheral_locate_descends_to_smaller_circles():
    node = _peripheral()
    own = node.circle

    assert math.isclose(node.locate(own.z), -own.r2)
    outside = complex(-0.85, 0.45)
    assert node.locate(outside) == own.penetration(outside)

    node.subdivide(1)
    first = node.children[0]
    assert node.locate(first.circle.z) == -first.circle.r2
    assert node.locate(outside) == min(own.penetration(outside), first.circle.penetration(outside))


def test_interior_locate_reports_own_circle_only():
    node = _interior()
    node.subdivide(2)
    child = node.children[0]

    assert node.locate(child.circle.z) == node.circle.penetration(child.circle.z)
    assert node.locate(child.circle.z) > 0.0


def test_shade_descends_into_children():
    node = _interior()
    child_center = complex(-0.1, 0.3)

    assert node.shade(node.circle.z) == 255
    assert node.shade(child_center) is None

    node.subdivide(1)
    target = node.children[0].circle
    assert node.shade(target.z) == 255
    assert 0 <= node.shade(target.z + 0.5 * target.radius) < 255
