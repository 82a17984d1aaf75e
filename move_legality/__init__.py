"""Cross-generation move legality resolution."""

from __future__ import annotations

import re
from importlib import metadata as _metadata
from pathlib import Path

from .data.tables import (
    MoveSourceEntry,
    MoveSourceRegistry,
    MoveSourceTable,
    load_default_registry,
    load_registry,
    parse_registry,
)
from .learn_groups import LEARN_GROUPS, LearnGroup, VersionSource, get_learn_group
from .models import (
    Creature,
    EncounterKind,
    EncounterTemplate,
    EvoCriteria,
    EvolutionHistory,
    LearnOption,
    MoveSourceType,
)
from .results import LearnMethod, MoveResult, all_parsed, new_result_buffer
from .verifier import get_learnable_moves, iter_chain, verify_moves
from .versions import GameVersion, VersionGroup


def _read_local_version() -> str:
    """Return the project version from ``pyproject.toml`` when not installed."""

    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if pyproject.is_file():
        match = re.search(
            r'^version\s*=\s*"([^"]+)"', pyproject.read_text(), re.MULTILINE
        )
        if match:
            return match.group(1)
    return "0.0.0"


try:
    __version__ = _metadata.version("move-legality")
except _metadata.PackageNotFoundError:
    __version__ = _read_local_version()

__all__ = [
    "Creature",
    "EncounterKind",
    "EncounterTemplate",
    "EvoCriteria",
    "EvolutionHistory",
    "GameVersion",
    "LEARN_GROUPS",
    "LearnGroup",
    "LearnMethod",
    "LearnOption",
    "MoveResult",
    "MoveSourceEntry",
    "MoveSourceRegistry",
    "MoveSourceTable",
    "MoveSourceType",
    "VersionGroup",
    "VersionSource",
    "all_parsed",
    "get_learn_group",
    "get_learnable_moves",
    "iter_chain",
    "load_default_registry",
    "load_registry",
    "new_result_buffer",
    "parse_registry",
    "verify_moves",
    "__version__",
]
