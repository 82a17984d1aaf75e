"""Diagnostics helpers for presenting move legality results."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from types import ModuleType
from typing import TYPE_CHECKING, Any

from .errors import DependencyError, InputValidationError
from .results import LearnMethod, MoveResult

pd: ModuleType | None
try:  # pandas is an optional extra used only for tabular reports.
    import pandas as pd
except ModuleNotFoundError:  # pragma: no cover - executed when pandas is absent.
    pd = None

if TYPE_CHECKING:  # pragma: no cover - type checking only.
    from pandas import DataFrame

__all__ = ["build_rows", "summarise_results", "results_to_frame"]

COLUMNS = ("Slot", "Move", "Valid", "Method", "Generation", "Stage", "Explanation")


def _check_alignment(moves: Sequence[int], results: Sequence[MoveResult]) -> None:
    if len(moves) != len(results):
        raise InputValidationError(
            "Move list and result list must be the same length.",
            remediation="Pass the same move list that was given to verify_moves.",
            context={"moves": len(moves), "results": len(results)},
        )


def build_rows(
    moves: Sequence[int],
    results: Sequence[MoveResult],
    move_names: Mapping[int, str] | None = None,
) -> list[dict[str, Any]]:
    """Return one row per slot, optionally labelling moves with ``move_names``."""

    _check_alignment(moves, results)
    names = move_names or {}
    rows: list[dict[str, Any]] = []
    for slot, (move, outcome) in enumerate(zip(moves, results)):
        rows.append(
            {
                "Slot": slot,
                "Move": names.get(move, str(move)),
                "Valid": outcome.valid,
                "Method": outcome.method.value,
                "Generation": outcome.generation or None,
                "Stage": outcome.stage if outcome.valid else None,
                "Explanation": outcome.describe(),
            }
        )
    return rows


def summarise_results(results: Sequence[MoveResult]) -> dict[str, Any]:
    """Summarise a check: validity, counts per learn method and per generation."""

    methods = Counter(outcome.method.value for outcome in results)
    generations = Counter(outcome.generation for outcome in results if outcome.valid)
    unresolved = [slot for slot, outcome in enumerate(results) if not outcome.valid]
    return {
        "valid": not unresolved,
        "unresolved_slots": unresolved,
        "methods": {method.value: methods[method.value] for method in LearnMethod if methods[method.value]},
        "generations": dict(sorted(generations.items())),
    }


def results_to_frame(
    moves: Sequence[int],
    results: Sequence[MoveResult],
    move_names: Mapping[int, str] | None = None,
) -> "DataFrame":
    """Return the per-slot rows as a pandas DataFrame."""

    if pd is None:
        raise DependencyError(
            "pandas is required to build a results DataFrame.",
            remediation="Install the 'report' extra: pip install move-legality[report].",
        )
    return pd.DataFrame(build_rows(moves, results, move_names), columns=list(COLUMNS))
