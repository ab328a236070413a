"""Example: render a gasket to a binary PPM image.

The pixel grid covers the square ``[-1.05, 1.05]^2`` around a unit boundary
circle, with the first image row at the top.
"""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from apollonian import SeedSpec, build

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def pixel_grid(width: int, height: int, extent: float = 1.05) -> np.ndarray:
    """Complex sample points for every pixel, row 0 at the top."""

    scale = 2.0 * extent / max(width, height)
    xs = np.arange(width) * scale - extent
    ys = (height - np.arange(height)) * scale - extent
    return xs[np.newaxis, :] + 1j * ys[:, np.newaxis]


def write_ppm(path: Path, grey: np.ndarray) -> None:
    height, width = grey.shape
    rgb = np.repeat(grey.astype(np.uint8)[:, :, np.newaxis], 3, axis=2)
    with path.open("wb") as handle:
        handle.write(f"P6\n{width} {height}\n255\n".encode("ascii"))
        handle.write(rgb.tobytes())


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Render an Apollonian gasket")
    parser.add_argument("output", nargs="?", default="apollonian.ppm", help="Output PPM path")
    parser.add_argument("--size", type=int, default=512, help="Image width and height in pixels")
    parser.add_argument("--depth", type=int, default=6, help="Generations below each top region")
    parser.add_argument(
        "--ceiling",
        type=float,
        default=None,
        help="Keep subdividing while circle curvature is below this value",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    gasket = build(SeedSpec.from_boundary(-1.0, 0j))
    logger.info("Generating...")
    gasket.subdivide(args.depth)
    if args.ceiling is not None:
        gasket.subdivide(ceiling=args.ceiling)
    stats = gasket.stats()
    logger.info("%d circles, deepest generation %d", stats.circles, stats.max_generation)

    logger.info("Writing %s...", args.output)
    grey = gasket.shade_points(pixel_grid(args.size, args.size))
    write_ppm(Path(args.output), grey)
    logger.info("Writing done")


if __name__ == "__main__":
    main()
