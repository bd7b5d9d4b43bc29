"""Exceptions raised by the grid engine.

All of them derive from ValueError so callers that already guard bad input
with ``except ValueError`` keep working.
"""
from __future__ import annotations


class GridEngineError(ValueError):
    """Base class for grid engine errors."""


class InvalidRangeError(GridEngineError):
    """Scale range is empty or inverted (min >= max)."""


class InvalidTotalError(GridEngineError):
    """Item total cannot be placed on the requested grid."""


class DegenerateCorrectionError(GridEngineError):
    """Correcting a distribution would leave a column negative."""
