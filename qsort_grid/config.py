"""Grid engine configuration, single source of truth for tunable defaults.

Values come from environment variables with safe defaults; anything that
does not parse falls back to the default instead of failing at import.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CorrectionMode(str, Enum):
    """Where a catalog entry's sum remainder is placed."""
    SYMMETRIC = "symmetric"  # odd columns: center; even columns: split over the two middle columns
    CENTER = "center"        # always the column at floor(columns / 2)


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _int_from_env(name: str, default: int, minimum: int) -> int:
    raw = os.environ.get(name, "")
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= minimum else default


@dataclass
class GridEngineConfig:
    """Runtime configuration for the grid engine."""

    correction_mode: CorrectionMode = CorrectionMode.SYMMETRIC

    # Hard ceiling on cells a hand-edited grid may hold
    max_cells: int = 60

    # Item count of the standard (most validated) catalog entry; larger
    # entries are downgraded for short sessions and first-time researchers
    standard_item_count: int = 36

    default_label_theme: str = "agreement"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "GridEngineConfig":
        """Build config from environment variables with safe defaults."""
        mode_str = os.environ.get("QSORT_GRID_CORRECTION_MODE", "symmetric").lower()
        try:
            mode = CorrectionMode(mode_str)
        except ValueError:
            mode = CorrectionMode.SYMMETRIC

        level = os.environ.get("QSORT_GRID_LOG_LEVEL", "WARNING").upper()
        if level not in _LOG_LEVELS:
            level = "WARNING"

        return cls(
            correction_mode=mode,
            max_cells=_int_from_env("QSORT_GRID_MAX_CELLS", 60, minimum=1),
            standard_item_count=_int_from_env("QSORT_GRID_STANDARD_ITEMS", 36, minimum=1),
            default_label_theme=os.environ.get("QSORT_GRID_LABEL_THEME", "agreement").lower() or "agreement",
            log_level=level,
        )

    def to_dict(self) -> dict:
        return {
            "correction_mode": self.correction_mode.value,
            "max_cells": self.max_cells,
            "standard_item_count": self.standard_item_count,
            "default_label_theme": self.default_label_theme,
            "log_level": self.log_level,
        }


# Singleton default config
_default_config: Optional[GridEngineConfig] = None


def get_config() -> GridEngineConfig:
    """Return the current global config (lazily initialised from env)."""
    global _default_config
    if _default_config is None:
        _default_config = GridEngineConfig.from_env()
    return _default_config


def set_config(cfg: Optional[GridEngineConfig]) -> None:
    """Override the global config (mainly for tests). ``None`` re-reads env on next use."""
    global _default_config
    _default_config = cfg
