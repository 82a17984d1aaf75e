"""Configuration helpers for the legality engine's host process."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import InputValidationError

__all__ = ["LegalitySettings", "build_settings", "TABLES_ENV", "LOG_LEVEL_ENV"]

TABLES_ENV = "MOVE_LEGALITY_TABLES"
LOG_LEVEL_ENV = "MOVE_LEGALITY_LOG_LEVEL"

_LEVEL_NAMES = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class LegalitySettings:
    """Settings describing where move-source tables live and how to log."""

    tables_path: Path | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.log_level not in _LEVEL_NAMES:
            raise InputValidationError(
                f"Unsupported log level: {self.log_level!r}",
                remediation=f"Use one of: {', '.join(sorted(_LEVEL_NAMES))}.",
            )

    @property
    def tables_configured(self) -> bool:
        """Return ``True`` when a tables payload path has been provided."""

        return self.tables_path is not None

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level)


def _resolve_path(value: str | Path) -> Path:
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate
    return (Path.cwd() / candidate).resolve()


def build_settings(env: Mapping[str, str] | None = None) -> LegalitySettings:
    """Construct settings from environment variables."""

    env = os.environ if env is None else env
    raw_path = (env.get(TABLES_ENV) or "").strip()
    tables_path = _resolve_path(raw_path) if raw_path else None

    log_level = (env.get(LOG_LEVEL_ENV) or "INFO").strip().upper()
    if log_level not in _LEVEL_NAMES:
        raise InputValidationError(
            f"{LOG_LEVEL_ENV} must be one of {sorted(_LEVEL_NAMES)}, got {log_level!r}.",
            remediation=f"Set {LOG_LEVEL_ENV} to a standard level name such as INFO or DEBUG.",
            context={"variable": LOG_LEVEL_ENV, "value": log_level},
        )

    return LegalitySettings(tables_path=tables_path, log_level=log_level)
