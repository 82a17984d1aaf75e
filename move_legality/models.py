"""Read-only inputs consumed by the legality engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum, IntFlag

from .versions import MAX_GENERATION, GameVersion

__all__ = [
    "MoveSourceType",
    "LearnOption",
    "Creature",
    "EvoCriteria",
    "EvolutionHistory",
    "EncounterKind",
    "EncounterTemplate",
]


class MoveSourceType(IntFlag):
    """Learn-source categories a query is allowed to consult."""

    NONE = 0
    LEVEL_UP = 1
    MACHINE = 2
    TUTOR = 4
    EGG = 8
    ENCOUNTER = 16
    ALL = LEVEL_UP | MACHINE | TUTOR | EGG | ENCOUNTER


class LearnOption(Enum):
    """Whether level-up moves are judged against the creature's current state."""

    CURRENT = "current"
    AT_ANY_TIME = "at_any_time"

    def permits_level(self, level: int, evo: "EvoCriteria") -> bool:
        """Return ``True`` when a move learned at ``level`` counts for ``evo``."""

        if self is LearnOption.AT_ANY_TIME:
            return True
        return level <= evo.level_max


@dataclass(frozen=True)
class Creature:
    """The few fields of an entity that move legality reads."""

    species: int
    form: int = 0
    ability: int = 0
    generation: int = MAX_GENERATION

    def __post_init__(self) -> None:
        if self.species <= 0:
            raise ValueError("Creature species must be a positive dex number.")
        if self.form < 0:
            raise ValueError("Creature form cannot be negative.")


@dataclass(frozen=True)
class EvoCriteria:
    """One species/form a creature could have been while present in a generation."""

    species: int
    form: int = 0
    level_max: int = 100
    level_min: int = 1

    def __post_init__(self) -> None:
        if self.species <= 0:
            raise ValueError("Evolution stage species must be a positive dex number.")
        if self.form < 0:
            raise ValueError("Evolution stage form cannot be negative.")
        if not 1 <= self.level_min <= self.level_max <= 100:
            raise ValueError("Evolution stage levels must satisfy 1 <= min <= max <= 100.")

    def with_form(self, form: int) -> "EvoCriteria":
        return replace(self, form=form)


@dataclass(frozen=True)
class EvolutionHistory:
    """Per-generation evolution stages, earliest stage first.

    The stage index reported in a :class:`~move_legality.results.MoveResult` is
    the position of the explaining stage within that generation's tuple.
    """

    stages: Mapping[int, tuple[EvoCriteria, ...]] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[int, Iterable[EvoCriteria]]) -> "EvolutionHistory":
        return cls({int(gen): tuple(evos) for gen, evos in raw.items()})

    def get(self, generation: int) -> tuple[EvoCriteria, ...]:
        return tuple(self.stages.get(generation, ()))

    def has_visited(self, generation: int) -> bool:
        return len(self.get(generation)) > 0

    @property
    def visited_generations(self) -> tuple[int, ...]:
        return tuple(sorted(gen for gen, evos in self.stages.items() if evos))


class EncounterKind(str, Enum):
    WILD = "wild"
    STATIC = "static"
    EGG = "egg"
    TRADE = "trade"
    OTHER = "other"


@dataclass(frozen=True)
class EncounterTemplate:
    """The matched origin encounter, as supplied by encounter matching."""

    kind: EncounterKind
    species: int
    version: GameVersion
    form: int = 0
    moves: tuple[int, ...] = ()
    can_inherit_moves: bool = False
    can_have_bonus_move: bool = False

    def __post_init__(self) -> None:
        if self.species <= 0:
            raise ValueError("Encounter species must be a positive dex number.")
        if self.kind is not EncounterKind.EGG and (self.can_inherit_moves or self.can_have_bonus_move):
            raise ValueError("Only egg encounters can inherit moves or carry a hatchling bonus move.")

    @property
    def generation(self) -> int:
        return self.version.generation

    @property
    def is_egg(self) -> bool:
        return self.kind is EncounterKind.EGG
