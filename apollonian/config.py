"""Configuration helpers for gasket construction and shading."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Optional

# Shift applied to every center before taking the complex square root.
CENTER_OFFSET = complex(10.0, 10.0)


@dataclass
class GasketConfig:
    """Numeric tolerances, shading range and subdivision budgets."""

    tangency_tol: float = 1e-6
    radicand_tol: float = 1e-12
    center_offset: complex = CENTER_OFFSET
    shade_max: int = 255
    background: int = 0
    max_depth: int = 4096
    max_nodes: Optional[int] = None

    def __post_init__(self) -> None:
        if self.shade_max <= 0:
            raise ValueError("shade_max must be positive")
        if not 0 <= self.background <= self.shade_max:
            raise ValueError("background must lie within [0, shade_max]")
        if self.max_depth < 0:
            raise ValueError("max_depth must be non-negative")
        if self.max_nodes is not None and self.max_nodes < 0:
            raise ValueError("max_nodes must be non-negative")


_GASKET_CONFIG = GasketConfig()


def get_gasket_config() -> GasketConfig:
    return copy.deepcopy(_GASKET_CONFIG)


def set_gasket_config(config: GasketConfig) -> None:
    global _GASKET_CONFIG
    _GASKET_CONFIG = copy.deepcopy(config)


__all__ = [
    "CENTER_OFFSET",
    "GasketConfig",
    "get_gasket_config",
    "set_gasket_config",
]
