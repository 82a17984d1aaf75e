"""Move-source table primitives."""

from __future__ import annotations

from .tables import (
    MoveSourceEntry,
    MoveSourceRegistry,
    MoveSourceTable,
    load_default_registry,
    load_registry,
    parse_registry,
)

__all__ = [
    "MoveSourceEntry",
    "MoveSourceRegistry",
    "MoveSourceTable",
    "load_default_registry",
    "load_registry",
    "parse_registry",
]
