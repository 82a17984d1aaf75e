"""Move-source tables: which moves a species/form can learn in one version group."""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Mapping, MutableSequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any

from ..config import build_settings
from ..errors import NotReadyError, TableFormatError
from ..models import EvoCriteria, LearnOption, MoveSourceType
from ..observability import get_logger, metrics
from ..results import LearnMethod
from ..versions import VersionGroup

__all__ = [
    "MoveSourceEntry",
    "MoveSourceTable",
    "MoveSourceRegistry",
    "load_registry",
    "parse_registry",
    "load_default_registry",
]

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class MoveSourceEntry:
    """Learnset data for a single species/form in one version group."""

    species: int
    form: int = 0
    form_count: int = 1
    base_friendship: int = 70
    level_up: tuple[tuple[int, int], ...] = ()
    machine: frozenset[int] = field(default_factory=frozenset)
    tutor: frozenset[int] = field(default_factory=frozenset)
    egg: frozenset[int] = field(default_factory=frozenset)

    def get_level(self, move: int) -> int | None:
        """Return the lowest level ``move`` is learned at, or ``None``."""

        levels = [level for learned, level in self.level_up if learned == move]
        return min(levels) if levels else None

    @property
    def level_up_moves(self) -> frozenset[int]:
        return frozenset(move for move, _ in self.level_up)

    @property
    def max_move_id(self) -> int:
        ids = [*self.level_up_moves, *self.machine, *self.tutor, *self.egg]
        return max(ids, default=0)


class MoveSourceTable:
    """Read-only index of :class:`MoveSourceEntry` keyed by ``(species, form)``."""

    def __init__(self, group: VersionGroup, entries: Iterable[MoveSourceEntry]):
        self.group = group
        index: dict[tuple[int, int], MoveSourceEntry] = {}
        for entry in entries:
            key = (entry.species, entry.form)
            if key in index:
                raise TableFormatError(
                    f"Duplicate entry for species {entry.species} form {entry.form}.",
                    remediation="Remove the repeated species/form row from the table payload.",
                    context={"version_group": group.value, "species": entry.species, "form": entry.form},
                )
            index[key] = entry
        self._entries = index
        self._max_move_id = max((entry.max_move_id for entry in index.values()), default=0)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MoveSourceEntry]:
        yield from self._entries.values()

    def try_get(self, species: int, form: int) -> MoveSourceEntry | None:
        return self._entries.get((species, form))

    def get_level_up_moves(self, species: int, form: int) -> frozenset[int]:
        entry = self.try_get(species, form)
        return entry.level_up_moves if entry is not None else frozenset()

    def get_egg_moves(self, species: int, form: int) -> frozenset[int]:
        entry = self.try_get(species, form)
        return entry.egg if entry is not None else frozenset()

    def get_can_learn(
        self,
        entry: MoveSourceEntry,
        evo: EvoCriteria,
        move: int,
        types: MoveSourceType,
        option: LearnOption,
    ) -> LearnMethod:
        """Return how ``move`` is learnable at ``evo``, or ``LearnMethod.NONE``."""

        if types & MoveSourceType.LEVEL_UP:
            level = entry.get_level(move)
            if level is not None and option.permits_level(level, evo):
                return LearnMethod.LEVEL_UP
        if types & MoveSourceType.MACHINE and move in entry.machine:
            return LearnMethod.MACHINE
        if types & MoveSourceType.TUTOR and move in entry.tutor:
            return LearnMethod.TUTOR
        return LearnMethod.NONE

    def get_all_moves(
        self,
        result: MutableSequence[bool],
        evo: EvoCriteria,
        types: MoveSourceType,
        option: LearnOption,
    ) -> None:
        """Flag every move ``evo`` can learn from this table in ``result``."""

        entry = self.try_get(evo.species, evo.form)
        if entry is None:
            return
        if types & MoveSourceType.LEVEL_UP:
            for move, level in entry.level_up:
                if option.permits_level(level, evo):
                    flag_move(result, move)
        if types & MoveSourceType.MACHINE:
            for move in entry.machine:
                flag_move(result, move)
        if types & MoveSourceType.TUTOR:
            for move in entry.tutor:
                flag_move(result, move)
        if types & MoveSourceType.EGG:
            for move in entry.egg:
                flag_move(result, move)

    @property
    def max_move_id(self) -> int:
        return self._max_move_id


def flag_move(result: MutableSequence[bool], move: int) -> None:
    """Mark ``move`` as obtainable, ignoring ids outside the mask."""

    if 0 <= move < len(result):
        result[move] = True


class MoveSourceRegistry:
    """Process-wide collection of tables, one per version group."""

    def __init__(self, tables: Iterable[MoveSourceTable]):
        self._tables: dict[VersionGroup, MoveSourceTable] = {table.group: table for table in tables}
        self._max_move_id = max((table.max_move_id for table in self._tables.values()), default=0)

    def get(self, group: VersionGroup) -> MoveSourceTable | None:
        return self._tables.get(group)

    def __contains__(self, group: VersionGroup) -> bool:
        return group in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    @property
    def groups(self) -> tuple[VersionGroup, ...]:
        return tuple(self._tables)

    @property
    def max_move_id(self) -> int:
        """Highest move id in any table, computed once since tables are read-only."""

        return self._max_move_id


def _as_move_ids(raw: Any, *, label: str) -> frozenset[int]:
    if not isinstance(raw, list):
        raise ValueError(f"'{label}' must be a list of move ids")
    moves = frozenset(int(move) for move in raw)
    if any(move <= 0 for move in moves):
        raise ValueError(f"'{label}' move ids must be positive")
    return moves


def _as_level_up(raw: Any) -> tuple[tuple[int, int], ...]:
    if not isinstance(raw, list):
        raise ValueError("'level_up' must be a list of [move, level] pairs")
    pairs: list[tuple[int, int]] = []
    for item in raw:
        move, level = (int(value) for value in item)
        if move <= 0 or not 0 <= level <= 100:
            raise ValueError("level-up entries need a positive move id and a level in 0..100")
        pairs.append((move, level))
    return tuple(pairs)


def _parse_entry(item: Mapping[str, Any]) -> MoveSourceEntry:
    species = int(item["species"])
    form = int(item.get("form", 0))
    form_count = int(item.get("form_count", 1))
    base_friendship = int(item.get("base_friendship", 70))
    if species <= 0 or form < 0:
        raise ValueError("species must be positive and form non-negative")
    if form_count < 1:
        raise ValueError("form_count must be at least 1")
    if not 0 <= base_friendship <= 255:
        raise ValueError("base_friendship must be between 0 and 255")
    return MoveSourceEntry(
        species=species,
        form=form,
        form_count=form_count,
        base_friendship=base_friendship,
        level_up=_as_level_up(item.get("level_up", [])),
        machine=_as_move_ids(item.get("machine", []), label="machine"),
        tutor=_as_move_ids(item.get("tutor", []), label="tutor"),
        egg=_as_move_ids(item.get("egg", []), label="egg"),
    )


def parse_registry(payload: Any) -> MoveSourceRegistry:
    """Build a :class:`MoveSourceRegistry` from a decoded JSON payload."""

    if not isinstance(payload, Mapping):
        raise TableFormatError(
            "Move-source payload must be a JSON object.",
            remediation="Wrap the tables in {\"version_groups\": {...}}.",
        )
    groups = payload.get("version_groups")
    if not isinstance(groups, Mapping):
        raise TableFormatError(
            "Move-source payload must contain a 'version_groups' object.",
            remediation="Key each table by its version group, e.g. \"B2W2\".",
        )

    tables: list[MoveSourceTable] = []
    for key, rows in groups.items():
        try:
            group = VersionGroup(key)
        except ValueError as exc:
            raise TableFormatError(
                f"Unknown version group {key!r}.",
                remediation=f"Use one of: {', '.join(g.value for g in VersionGroup)}.",
                context={"version_group": key},
            ) from exc
        if not isinstance(rows, list):
            raise TableFormatError(
                f"Version group {key!r} must map to a list of entries.",
                context={"version_group": key},
            )
        entries: list[MoveSourceEntry] = []
        for index, item in enumerate(rows):
            try:
                if not isinstance(item, Mapping):
                    raise ValueError("entry must be an object")
                entries.append(_parse_entry(item))
            except (KeyError, TypeError, ValueError) as exc:
                raise TableFormatError(
                    f"Invalid move-source entry in {key!r}: {exc}",
                    remediation="Each entry needs a positive 'species' and well-formed move lists.",
                    context={"version_group": key, "index": index},
                ) from exc
        tables.append(MoveSourceTable(group, entries))
    return MoveSourceRegistry(tables)


def load_registry(path: str | Path) -> MoveSourceRegistry:
    """Load move-source tables from the JSON document at ``path``."""

    payload_path = Path(path)
    try:
        raw = json.loads(payload_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TableFormatError(
            f"Failed to parse JSON from {payload_path}: {exc}",
            context={"path": str(payload_path)},
        ) from exc
    registry = parse_registry(raw)
    LOGGER.info(
        "tables_loaded",
        extra={
            "event": "tables_loaded",
            "path": str(payload_path),
            "version_groups": [group.value for group in registry.groups],
        },
    )
    return registry


@lru_cache(maxsize=1)
def load_default_registry() -> MoveSourceRegistry:
    """Return the cached registry read from the configured tables path."""

    settings = build_settings()
    if settings.tables_path is None:
        raise NotReadyError(
            "Move-source tables have not been configured.",
            remediation="Set MOVE_LEGALITY_TABLES or pass tables= explicitly.",
        )
    registry = load_registry(settings.tables_path)
    metrics.set_gauge("move_legality_tables_loaded", float(len(registry)))
    return registry
