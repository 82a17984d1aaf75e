"""Per-slot outcomes of a move legality check."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

__all__ = ["LearnMethod", "MoveResult", "new_result_buffer", "all_parsed"]


class LearnMethod(Enum):
    """Why a move slot is legal."""

    NONE = "unresolved"
    LEVEL_UP = "level_up"
    MACHINE = "machine"
    TUTOR = "tutor"
    EGG_MOVE = "egg_move"
    INHERIT_LEVEL_UP = "inherit_level_up"
    SPECIAL_EGG = "special_egg"
    ENCOUNTER = "encounter"

    def __bool__(self) -> bool:
        return self is not LearnMethod.NONE

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    LearnMethod.NONE: "Unresolved",
    LearnMethod.LEVEL_UP: "Level-up",
    LearnMethod.MACHINE: "Machine",
    LearnMethod.TUTOR: "Tutor",
    LearnMethod.EGG_MOVE: "Egg move",
    LearnMethod.INHERIT_LEVEL_UP: "Inherited level-up",
    LearnMethod.SPECIAL_EGG: "Hatchling bonus",
    LearnMethod.ENCOUNTER: "Encounter",
}


@dataclass(frozen=True)
class MoveResult:
    """Provenance for one move slot; ``stage`` and ``generation`` are 0 when unset."""

    method: LearnMethod = LearnMethod.NONE
    stage: int = 0
    generation: int = 0

    @property
    def valid(self) -> bool:
        return self.method is not LearnMethod.NONE

    def describe(self) -> str:
        """Return a short human-readable explanation for diagnostics."""

        if not self.valid:
            return "Unresolved"
        if self.generation == 0:
            return self.method.label
        return f"{self.method.label} (generation {self.generation}, stage {self.stage})"


UNRESOLVED = MoveResult()


def new_result_buffer(size: int) -> list[MoveResult]:
    """Return a fresh buffer of ``size`` unresolved slots."""

    return [UNRESOLVED] * size


def all_parsed(result: Sequence[MoveResult]) -> bool:
    return all(slot.valid for slot in result)
