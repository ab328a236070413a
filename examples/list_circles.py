"""Example: print the circles of a small gasket as MATLAB ``circle`` calls."""

from apollonian import build


def main() -> None:
    gasket = build()
    gasket.subdivide(2)

    print("close all")
    for (x, y), radius in gasket.enumerate_circles():
        print(f"circle({x:.6f}, {y:.6f}, {radius:.6f});")
    print("axis square")
    print("axis equal")

    stats = gasket.stats()
    print(f"% {stats.circles} circles, {stats.leaves} leaf regions")


if __name__ == "__main__":
    main()
