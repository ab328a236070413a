"""Exception hierarchy shared by the gasket modules."""

from __future__ import annotations

from typing import Optional


class GasketError(ValueError):
    """Base class for errors raised while building a gasket."""


class InvalidCurvature(GasketError):
    """Raised when a supplied or derived curvature is zero."""

    def __init__(self, message: str, curvature: Optional[float] = None):
        super().__init__(message)
        self.curvature = curvature


class DegenerateConfiguration(GasketError):
    """Raised when three circles admit no real tangent fourth circle."""

    def __init__(self, message: str, radicand: Optional[float] = None):
        super().__init__(message)
        self.radicand = radicand


class ResourceLimitExceeded(RuntimeError):
    """Raised when subdivision exceeds the configured depth or node budget."""

    def __init__(self, message: str, *, limit: int, kind: str):
        super().__init__(message)
        self.limit = limit
        self.kind = kind


__all__ = [
    "GasketError",
    "InvalidCurvature",
    "DegenerateConfiguration",
    "ResourceLimitExceeded",
]
