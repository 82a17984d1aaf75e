"""Per-generation learn groups.

Each supported generation has exactly one :class:`LearnGroup`. A group explains
still-unresolved move slots using the move-source tables of that generation's
version groups, then hands over to the group of the previous generation the
creature could have visited. Groups differ only in their parameters; the set
is closed and looked up by generation number via :func:`get_learn_group`.

Within one generation the first version source is the later release with the
full table. Every further source contributes only the learn-source categories
listed for it (usually level-up), and a hit there overwrites the provenance
recorded from an earlier source for the same slot. The resolved/unresolved
outcome does not depend on this order; the reported provenance does.
"""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass

from .data.tables import MoveSourceEntry, MoveSourceRegistry, MoveSourceTable, flag_move
from .models import (
    Creature,
    EncounterTemplate,
    EvoCriteria,
    EvolutionHistory,
    LearnOption,
    MoveSourceType,
)
from .observability import get_logger
from .results import LearnMethod, MoveResult, all_parsed
from .versions import Move, Species, VersionGroup

__all__ = [
    "VersionSource",
    "LearnGroup",
    "LEARN_GROUPS",
    "get_learn_group",
]

LOGGER = get_logger(__name__)

_Lookup = tuple[MoveSourceTable, MoveSourceEntry, MoveSourceType]


@dataclass(frozen=True)
class VersionSource:
    """A version group's table and the learn-source categories it contributes."""

    group: VersionGroup
    types: MoveSourceType = MoveSourceType.ALL


@dataclass(frozen=True)
class LearnGroup:
    """Move-source rules for one generation."""

    generation: int
    sources: tuple[VersionSource, ...]
    previous: int | None = None
    form_change_species: frozenset[int] = frozenset()
    bonus_move: int | None = None
    virtual_console: bool = False

    def has_visited(self, history: EvolutionHistory) -> bool:
        return history.has_visited(self.generation)

    def get_previous(
        self,
        creature: Creature,
        history: EvolutionHistory,
        encounter: EncounterTemplate,
    ) -> LearnGroup | None:
        """Return the group of the most recent earlier generation, if any."""

        if encounter.generation >= self.generation:
            return None
        if self.virtual_console and encounter.generation <= 2:
            # Transferred straight from the handheld re-releases.
            return LEARN_GROUPS[2] if history.has_visited(2) else LEARN_GROUPS[1]
        if self.previous is None:
            return None
        return LEARN_GROUPS[self.previous]

    def evaluate(
        self,
        result: MutableSequence[MoveResult],
        moves: Sequence[int],
        creature: Creature,
        history: EvolutionHistory,
        encounter: EncounterTemplate,
        types: MoveSourceType = MoveSourceType.ALL,
        option: LearnOption = LearnOption.CURRENT,
        *,
        tables: MoveSourceRegistry,
    ) -> bool:
        """Resolve what this generation can explain; return ``True`` if all slots are valid."""

        for stage, evo in enumerate(history.get(self.generation)):
            self._check_stage(result, moves, evo, stage, types, option, tables)

        if types & MoveSourceType.ENCOUNTER and encounter.generation == self.generation:
            self._check_encounter_moves(result, moves, encounter, tables)

        return all_parsed(result)

    def get_all_moves(
        self,
        result: MutableSequence[bool],
        creature: Creature,
        history: EvolutionHistory,
        encounter: EncounterTemplate,
        types: MoveSourceType = MoveSourceType.ALL,
        option: LearnOption = LearnOption.CURRENT,
        *,
        tables: MoveSourceRegistry,
    ) -> None:
        """Flag every move obtainable in this generation."""

        if types & MoveSourceType.ENCOUNTER and encounter.generation == self.generation:
            self._flag_encounter_moves(result, encounter, tables)

        for evo in history.get(self.generation):
            for candidate in self._candidate_forms(evo, tables):
                for table, _, allowed in self._lookups(candidate, tables):
                    table.get_all_moves(result, candidate, types & allowed, option)

    def _lookups(self, evo: EvoCriteria, tables: MoveSourceRegistry) -> list[_Lookup]:
        lookups: list[_Lookup] = []
        for source in self.sources:
            table = tables.get(source.group)
            if table is None:
                continue
            # Some forms do not exist in every version of a generation.
            entry = table.try_get(evo.species, evo.form)
            if entry is None:
                continue
            lookups.append((table, entry, source.types))
        return lookups

    def _candidate_forms(self, evo: EvoCriteria, tables: MoveSourceRegistry) -> list[EvoCriteria]:
        if evo.species not in self.form_change_species:
            return [evo]

        # The creature could have held any form while learning, so check them all.
        lookups = self._lookups(evo, tables)
        if not lookups:
            LOGGER.debug(
                "stage_not_found",
                extra={
                    "event": "stage_not_found",
                    "generation": self.generation,
                    "species": evo.species,
                    "form": evo.form,
                },
            )
            return []
        _, entry, _ = lookups[0]
        return [evo.with_form(form) for form in range(entry.form_count)]

    def _check_stage(
        self,
        result: MutableSequence[MoveResult],
        moves: Sequence[int],
        evo: EvoCriteria,
        stage: int,
        types: MoveSourceType,
        option: LearnOption,
        tables: MoveSourceRegistry,
    ) -> None:
        for candidate in self._candidate_forms(evo, tables):
            self._check_form(result, moves, candidate, stage, types, option, tables)

    def _check_form(
        self,
        result: MutableSequence[MoveResult],
        moves: Sequence[int],
        evo: EvoCriteria,
        stage: int,
        types: MoveSourceType,
        option: LearnOption,
        tables: MoveSourceRegistry,
    ) -> None:
        lookups = self._lookups(evo, tables)
        if not lookups:
            return

        for i in range(len(result) - 1, -1, -1):
            if result[i].valid:
                continue
            move = moves[i]
            for table, entry, allowed in lookups:
                method = table.get_can_learn(entry, evo, move, types & allowed, option)
                if method:
                    result[i] = MoveResult(method, stage, self.generation)

    def _egg_move_sets(
        self, encounter: EncounterTemplate, tables: MoveSourceRegistry
    ) -> tuple[frozenset[int], frozenset[int]]:
        """Return ``(egg_moves, inheritable_level_up_moves)`` for an egg of this generation."""

        index = next(
            (i for i, source in enumerate(self.sources) if source.group.contains(encounter.version)),
            len(self.sources) - 1,
        )
        selected = tables.get(self.sources[index].group)
        egg_moves = (
            selected.get_egg_moves(encounter.species, encounter.form)
            if selected is not None
            else frozenset()
        )
        if not encounter.can_inherit_moves:
            return egg_moves, frozenset()

        # Parents may have been raised in any release up to the one the egg came from.
        level_moves: set[int] = set()
        for source in self.sources[index:]:
            table = tables.get(source.group)
            if table is not None:
                level_moves |= table.get_level_up_moves(encounter.species, encounter.form)
        return egg_moves, frozenset(level_moves)

    def _check_encounter_moves(
        self,
        result: MutableSequence[MoveResult],
        moves: Sequence[int],
        encounter: EncounterTemplate,
        tables: MoveSourceRegistry,
    ) -> None:
        if not encounter.is_egg:
            fixed = set(encounter.moves)
            for i in range(len(result) - 1, -1, -1):
                if not result[i].valid and moves[i] in fixed:
                    result[i] = MoveResult(LearnMethod.ENCOUNTER, 0, self.generation)
            return

        egg_moves, level_moves = self._egg_move_sets(encounter, tables)
        for i in range(len(result) - 1, -1, -1):
            if result[i].valid:
                continue
            move = moves[i]
            if move in egg_moves:
                result[i] = MoveResult(LearnMethod.EGG_MOVE, 0, self.generation)
            elif move in level_moves:
                result[i] = MoveResult(LearnMethod.INHERIT_LEVEL_UP, 0, self.generation)
            elif move == self.bonus_move and encounter.can_have_bonus_move:
                result[i] = MoveResult(LearnMethod.SPECIAL_EGG, 0, self.generation)

    def _flag_encounter_moves(
        self,
        result: MutableSequence[bool],
        encounter: EncounterTemplate,
        tables: MoveSourceRegistry,
    ) -> None:
        if not encounter.is_egg:
            for move in encounter.moves:
                flag_move(result, move)
            return

        egg_moves, level_moves = self._egg_move_sets(encounter, tables)
        for move in egg_moves | level_moves:
            flag_move(result, move)
        if self.bonus_move is not None and encounter.can_have_bonus_move:
            flag_move(result, self.bonus_move)


_LEVEL_UP = MoveSourceType.LEVEL_UP
_FORM_CHANGE_GEN4 = frozenset({Species.DEOXYS, Species.GIRATINA, Species.SHAYMIN})
_FORM_CHANGE_GEN6 = _FORM_CHANGE_GEN4 | {Species.HOOPA}

LEARN_GROUPS: dict[int, LearnGroup] = {
    1: LearnGroup(
        generation=1,
        sources=(VersionSource(VersionGroup.YW), VersionSource(VersionGroup.RB, _LEVEL_UP)),
    ),
    2: LearnGroup(
        generation=2,
        sources=(VersionSource(VersionGroup.C), VersionSource(VersionGroup.GS, _LEVEL_UP)),
        previous=1,
    ),
    3: LearnGroup(
        generation=3,
        sources=(
            VersionSource(VersionGroup.E),
            VersionSource(VersionGroup.FRLG, _LEVEL_UP | MoveSourceType.TUTOR),
            VersionSource(VersionGroup.RS, _LEVEL_UP),
        ),
        form_change_species=frozenset({Species.DEOXYS}),
        bonus_move=Move.VOLT_TACKLE,
    ),
    4: LearnGroup(
        generation=4,
        sources=(
            VersionSource(VersionGroup.HGSS),
            VersionSource(VersionGroup.PT, _LEVEL_UP | MoveSourceType.TUTOR),
            VersionSource(VersionGroup.DP, _LEVEL_UP),
        ),
        previous=3,
        form_change_species=_FORM_CHANGE_GEN4,
        bonus_move=Move.VOLT_TACKLE,
    ),
    5: LearnGroup(
        generation=5,
        sources=(VersionSource(VersionGroup.B2W2), VersionSource(VersionGroup.BW, _LEVEL_UP)),
        previous=4,
        form_change_species=_FORM_CHANGE_GEN4,
        bonus_move=Move.VOLT_TACKLE,
    ),
    6: LearnGroup(
        generation=6,
        sources=(VersionSource(VersionGroup.ORAS), VersionSource(VersionGroup.XY, _LEVEL_UP)),
        previous=5,
        form_change_species=_FORM_CHANGE_GEN6,
        bonus_move=Move.VOLT_TACKLE,
    ),
    7: LearnGroup(
        generation=7,
        sources=(VersionSource(VersionGroup.USUM), VersionSource(VersionGroup.SM, _LEVEL_UP)),
        previous=6,
        form_change_species=_FORM_CHANGE_GEN6,
        bonus_move=Move.VOLT_TACKLE,
        virtual_console=True,
    ),
    8: LearnGroup(
        generation=8,
        sources=(VersionSource(VersionGroup.SWSH),),
        previous=7,
        form_change_species=_FORM_CHANGE_GEN6,
        bonus_move=Move.VOLT_TACKLE,
    ),
    9: LearnGroup(
        generation=9,
        sources=(VersionSource(VersionGroup.SV),),
        previous=8,
        form_change_species=_FORM_CHANGE_GEN6,
    ),
}


def get_learn_group(generation: int) -> LearnGroup | None:
    """Return the learn group for ``generation``, or ``None`` if unsupported."""

    return LEARN_GROUPS.get(generation)
