import pytest

from apollonian import (
    Circle,
    classify_interior,
    classify_peripheral,
    classify_root,
    point_inside_triangle,
    point_left_of_line,
)


def _base_circles():
    a = Circle(-1.0, 0j)
    b = Circle(2.0, -0.5 + 0j)
    c = Circle(2.0, 0.5 + 0j)
    d = Circle(3.0, complex(0.0, 2.0 / 3.0))
    e = Circle(3.0, complex(0.0, -2.0 / 3.0))
    return a, b, c, d, e


def test_point_left_of_line():
    assert point_left_of_line(0.5 + 1j, 0j, 1 + 0j)
    assert not point_left_of_line(0.5 - 1j, 0j, 1 + 0j)
    assert not point_left_of_line(0.5 + 0j, 0j, 1 + 0j)
    # reversing the line flips the side
    assert point_left_of_line(0.5 - 1j, 1 + 0j, 0j)


@pytest.mark.parametrize("order", [(0j, 4 + 0j, 4j), (0j, 4j, 4 + 0j)])
def test_point_inside_triangle_ignores_orientation(order):
    z1, z2, z3 = order
    assert point_inside_triangle(1 + 1j, z1, z2, z3)
    assert not point_inside_triangle(3 + 3j, z1, z2, z3)
    assert not point_inside_triangle(-1 + 1j, z1, z2, z3)


@pytest.mark.parametrize(
    "point, expected",
    [
        (100 + 100j, "outside"),
        (0.99 + 0.99j, "outside"),
        (-0.5 + 0j, "b"),
        (0.5 + 0.1j, "c"),
        (0.05 + 0.6j, "d"),
        (-0.05 - 0.6j, "e"),
        (complex(-0.5, 0.667), "abd"),
        (complex(0.5, 0.667), "adc"),
        (complex(0.5, -0.667), "ace"),
        (complex(-0.5, -0.667), "aeb"),
        (0.01 + 0.2j, "bdc"),
        (0.01 - 0.2j, "ceb"),
    ],
)
def test_classify_root_default_gasket(point, expected):
    assert classify_root(point, *_base_circles()) == expected


def test_classify_peripheral_routes_three_ways():
    a, b, _, d, _ = _base_circles()
    own = Circle(6.0, complex(-0.5, 2.0 / 3.0))

    assert classify_peripheral(complex(-0.5, 0.7), own, a, b, d) == "own"
    # gap between b, d and the new circle
    assert classify_peripheral(complex(-0.3, 0.45), own, a, b, d) == "interior"
    # cusp between the boundary, b and the new circle
    assert classify_peripheral(complex(-0.85, 0.45), own, a, b, d) == "peripheral_1"
    # cusp between the boundary, the new circle and d
    assert classify_peripheral(complex(-0.3, 0.93), own, a, b, d) == "peripheral_2"


def test_classify_interior_routes_three_ways():
    _, b, c, d, _ = _base_circles()
    own = Circle(15.0, complex(0.0, 4.0 / 15.0))

    assert classify_interior(complex(0.0, 0.25), own, b, d, c) == "own"
    assert classify_interior(complex(-0.1, 0.3), own, b, d, c) == "interior_1"
    assert classify_interior(complex(0.0, 0.1), own, b, d, c) == "interior_2"
    assert classify_interior(complex(0.1, 0.3), own, b, d, c) == "interior_3"
