"""Point classification shared by the gasket root and region nodes.

Every routing decision in the tree goes through one of the ``classify_*``
functions below. Each returns a region tag naming exactly one of the
disjoint areas a region splits into, so callers never re-derive the
geometric tests themselves.
"""

from __future__ import annotations

from typing import Dict, Literal

from .circle import Circle

RootTag = Literal[
    "outside",
    "b",
    "c",
    "d",
    "e",
    "abd",
    "adc",
    "ace",
    "aeb",
    "bdc",
    "ceb",
]

NodeTag = Literal[
    "own",
    "peripheral_1",
    "peripheral_2",
    "interior",
    "interior_1",
    "interior_2",
    "interior_3",
]

# Child slot used by each node tag; "own" has no slot.
SLOT_INDEX: Dict[str, int] = {
    "peripheral_1": 0,
    "peripheral_2": 1,
    "interior": 2,
    "interior_1": 0,
    "interior_2": 1,
    "interior_3": 2,
}


def point_left_of_line(point: complex, z1: complex, z2: complex) -> bool:
    """Return ``True`` when ``point`` lies strictly left of the line ``z1 -> z2``."""

    return (point.real - z1.real) * (z2.imag - z1.imag) < (point.imag - z1.imag) * (z2.real - z1.real)


def point_inside_triangle(point: complex, z1: complex, z2: complex, z3: complex) -> bool:
    """Return ``True`` when ``point`` is on the same side of all three edges."""

    side1 = point_left_of_line(point, z1, z2)
    side2 = point_left_of_line(point, z2, z3)
    side3 = point_left_of_line(point, z3, z1)
    return side1 == side2 == side3


def classify_root(
    point: complex,
    a: Circle,
    b: Circle,
    c: Circle,
    d: Circle,
    e: Circle,
) -> RootTag:
    """Route ``point`` to one of the five base circles or six top-level regions.

    The ``b``-``c`` axis splits the disk into the ``d`` side (left of
    ``b -> c``) and the ``e`` side. On each side the straight triangle of
    the inner centers picks the interior region; otherwise the line from
    ``a`` through ``d`` (or ``e``) picks between the two peripheral regions.
    """

    if not a.contains(point):
        return "outside"
    if b.contains(point):
        return "b"
    if c.contains(point):
        return "c"
    if point_left_of_line(point, b.z, c.z):
        if d.contains(point):
            return "d"
        if point_inside_triangle(point, b.z, d.z, c.z):
            return "bdc"
        if point_left_of_line(point, a.z, d.z):
            return "abd"
        return "adc"
    if e.contains(point):
        return "e"
    if point_inside_triangle(point, c.z, e.z, b.z):
        return "ceb"
    if point_left_of_line(point, a.z, e.z):
        return "ace"
    return "aeb"


def classify_peripheral(
    point: complex,
    circle: Circle,
    boundary: Circle,
    inner1: Circle,
    inner2: Circle,
) -> NodeTag:
    if circle.contains(point):
        return "own"
    if point_inside_triangle(point, inner1.z, inner2.z, circle.z):
        return "interior"
    if point_left_of_line(point, boundary.z, circle.z):
        return "peripheral_1"
    return "peripheral_2"


def classify_interior(
    point: complex,
    circle: Circle,
    inner1: Circle,
    inner2: Circle,
    inner3: Circle,
) -> NodeTag:
    if circle.contains(point):
        return "own"
    if point_inside_triangle(point, inner1.z, inner2.z, circle.z):
        return "interior_1"
    if point_inside_triangle(point, inner1.z, inner3.z, circle.z):
        return "interior_2"
    return "interior_3"


__all__ = [
    "NodeTag",
    "RootTag",
    "SLOT_INDEX",
    "classify_interior",
    "classify_peripheral",
    "classify_root",
    "point_inside_triangle",
    "point_left_of_line",
]
