"""Entry points that walk the generation chain for one creature."""
from __future__ import annotations

import time
from collections.abc import Iterator, Sequence

from .data.tables import MoveSourceRegistry, load_default_registry
from .learn_groups import LearnGroup, get_learn_group
from .models import (
    Creature,
    EncounterTemplate,
    EvolutionHistory,
    LearnOption,
    MoveSourceType,
)
from .observability import generate_trace_id, get_logger, metrics
from .results import MoveResult, new_result_buffer

__all__ = ["verify_moves", "get_learnable_moves", "iter_chain"]

LOGGER = get_logger(__name__)


def iter_chain(
    creature: Creature,
    history: EvolutionHistory,
    encounter: EncounterTemplate,
) -> Iterator[LearnGroup]:
    """Yield the learn groups a check visits, current generation first.

    The first group is always yielded; each predecessor only while the history
    shows the creature was present in that generation.
    """

    group: LearnGroup | None = get_learn_group(creature.generation)
    if group is None:
        LOGGER.warning(
            "unsupported_generation",
            extra={"event": "unsupported_generation", "generation": creature.generation},
        )
        return
    while group is not None:
        yield group
        group = group.get_previous(creature, history, encounter)
        if group is not None and not group.has_visited(history):
            break


def verify_moves(
    moves: Sequence[int],
    creature: Creature,
    history: EvolutionHistory,
    encounter: EncounterTemplate,
    types: MoveSourceType = MoveSourceType.ALL,
    option: LearnOption = LearnOption.CURRENT,
    *,
    tables: MoveSourceRegistry | None = None,
) -> list[MoveResult]:
    """Explain each move in ``moves``; unresolved slots are illegal moves.

    Returns one :class:`MoveResult` per input slot in the same order. A partially
    resolved list is a normal outcome, not an error.
    """

    registry = tables if tables is not None else load_default_registry()
    trace_id = generate_trace_id()
    started = time.perf_counter()

    result = new_result_buffer(len(moves))
    visited: list[int] = []
    for group in iter_chain(creature, history, encounter):
        visited.append(group.generation)
        if group.evaluate(result, moves, creature, history, encounter, types, option, tables=registry):
            break

    unresolved = sum(1 for slot in result if not slot.valid)
    metrics.increment("move_legality_checks_total")
    metrics.increment("move_legality_unresolved_slots_total", float(unresolved))
    metrics.observe("move_legality_check_duration_seconds", time.perf_counter() - started)
    LOGGER.debug(
        "move_check_completed",
        extra={
            "event": "move_check_completed",
            "trace_id": trace_id,
            "species": creature.species,
            "form": creature.form,
            "generations": visited,
            "slots": len(result),
            "unresolved": unresolved,
        },
    )
    return result


def get_learnable_moves(
    creature: Creature,
    history: EvolutionHistory,
    encounter: EncounterTemplate,
    types: MoveSourceType = MoveSourceType.ALL,
    option: LearnOption = LearnOption.CURRENT,
    *,
    tables: MoveSourceRegistry | None = None,
    move_count: int | None = None,
) -> list[bool]:
    """Return a mask indexed by move id of every move the creature could learn."""

    registry = tables if tables is not None else load_default_registry()
    chain = list(iter_chain(creature, history, encounter))
    if move_count is None:
        bonus = [group.bonus_move for group in chain if group.bonus_move is not None]
        move_count = max(registry.max_move_id, *encounter.moves, *bonus, 0) + 1
    if move_count < 0:
        raise ValueError("move_count must be non-negative.")

    result = [False] * move_count
    for group in chain:
        group.get_all_moves(result, creature, history, encounter, types, option, tables=registry)
    return result
