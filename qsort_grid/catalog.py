"""
Standard grid catalog: vetted Q-sort configurations from the methods literature.
================================================================================

Every entry includes:
- range: the bipolar scale (e.g. -4..+4)
- total_items: number of statements the grid holds
- distribution: cells per column AS AUTHORED (see note below)
- citation: Author (Year) reference the configuration follows
- expertise_level / time_estimate / recommended_for: selection metadata

Note on distributions: some entries were authored with column counts that do
not add up to their own ``total_items`` (beginner-25 and optimal-36 below).
They are kept verbatim so the table stays traceable to its sources; every
public accessor that hands a configuration to callers runs it through
``correct_distribution`` first. Use ``get_raw_config`` only for auditing.

The table is built once at import and exposed through a read-only mapping.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from .distribution import correct_distribution
from .models import GridRange, StandardGridConfig

logger = logging.getLogger(__name__)

STANDARD_CONFIG_ID = "optimal-36"

_BROWN_1980 = (
    "Brown, S. R. (1980). Political subjectivity: Applications of Q methodology "
    "in political science. Yale University Press."
)
_WATTS_STENNER_2012 = (
    "Watts, S., & Stenner, P. (2012). Doing Q methodological research: "
    "Theory, method and interpretation. SAGE."
)
_MCKEOWN_THOMAS_2013 = "McKeown, B., & Thomas, D. B. (2013). Q methodology (2nd ed.). SAGE."
_STEPHENSON_1953 = (
    "Stephenson, W. (1953). The study of behavior: Q-technique and its "
    "methodology. University of Chicago Press."
)


def _entries() -> List[StandardGridConfig]:
    return [
        StandardGridConfig(
            id="beginner-25",
            name="Beginner Friendly",
            range=GridRange(-3, 3),
            total_items=25,
            distribution=(2, 3, 4, 5, 4, 3, 2),  # sums to 23
            description="Seven-point grid with a small statement set for first studies and lay participants.",
            citation=_WATTS_STENNER_2012,
            recommended_for=("first-time researchers", "general public", "short sessions"),
            expertise_level="beginner",
            time_estimate="10-15 minutes",
        ),
        StandardGridConfig(
            id="compact-30",
            name="Compact Standard",
            range=GridRange(-4, 4),
            total_items=30,
            distribution=(2, 3, 3, 4, 6, 4, 3, 3, 2),
            description="Nine-point grid trimmed to 30 statements for pilot and classroom studies.",
            citation=_MCKEOWN_THOMAS_2013,
            recommended_for=("pilot studies", "classroom research", "mixed audiences"),
            expertise_level="beginner",
            time_estimate="12-18 minutes",
        ),
        StandardGridConfig(
            id=STANDARD_CONFIG_ID,
            name="Optimal Standard",
            range=GridRange(-4, 4),
            total_items=36,
            distribution=(2, 3, 4, 5, 6, 5, 4, 3, 2),  # sums to 34
            description="The most widely validated layout: nine columns, 36 statements, quasi-normal shape.",
            citation=_BROWN_1980,
            recommended_for=("confirmatory studies", "general research", "most Q studies"),
            expertise_level="intermediate",
            time_estimate="15-20 minutes",
        ),
        StandardGridConfig(
            id="extended-44",
            name="Extended Range",
            range=GridRange(-5, 5),
            total_items=44,
            distribution=(2, 3, 4, 4, 5, 8, 5, 4, 4, 3, 2),
            description="Eleven-point grid with room for a broad concourse in exploratory work.",
            citation=_WATTS_STENNER_2012,
            recommended_for=("exploratory studies", "large participant pools", "broad concourses"),
            expertise_level="advanced",
            time_estimate="25-30 minutes",
        ),
        StandardGridConfig(
            id="comprehensive-60",
            name="Comprehensive Expert",
            range=GridRange(-5, 5),
            total_items=60,
            distribution=(3, 4, 5, 6, 7, 10, 7, 6, 5, 4, 3),
            description="Eleven-point grid with 60 statements for expert panels and complex topics.",
            citation=_STEPHENSON_1953,
            recommended_for=("expert panels", "complex topics", "fine-grained discrimination"),
            expertise_level="expert",
            time_estimate="35-45 minutes",
        ),
    ]


STANDARD_CONFIGS: Mapping[str, StandardGridConfig] = MappingProxyType({c.id: c for c in _entries()})


# =============================================================================
# LOOKUP / QUERY FUNCTIONS
# =============================================================================

def corrected(config: StandardGridConfig) -> StandardGridConfig:
    """Copy of ``config`` whose distribution sums to its total."""
    fixed = correct_distribution(config)
    if tuple(fixed) == config.distribution:
        return config
    logger.debug("Corrected catalog entry %s: %s -> %s", config.id, list(config.distribution), fixed)
    return replace(config, distribution=tuple(fixed))


def get_config_by_id(config_id: str) -> Optional[StandardGridConfig]:
    """Look up a catalog entry by id, with its distribution corrected."""
    entry = STANDARD_CONFIGS.get(config_id)
    if entry is None:
        return None
    return corrected(entry)


def get_raw_config(config_id: str) -> Optional[StandardGridConfig]:
    """Catalog entry exactly as authored (distribution may not sum correctly)."""
    return STANDARD_CONFIGS.get(config_id)


def list_configs() -> List[StandardGridConfig]:
    """All entries in catalog order, corrected."""
    return [corrected(c) for c in STANDARD_CONFIGS.values()]


def get_standard_config() -> StandardGridConfig:
    return corrected(STANDARD_CONFIGS[STANDARD_CONFIG_ID])


def get_simplest_config() -> StandardGridConfig:
    """Fewest columns, then fewest items."""
    entry = min(STANDARD_CONFIGS.values(), key=lambda c: (c.columns, c.total_items))
    return corrected(entry)


def get_widest_config() -> StandardGridConfig:
    """Most columns, then most items."""
    entry = max(STANDARD_CONFIGS.values(), key=lambda c: (c.columns, c.total_items))
    return corrected(entry)


def get_next_smaller_config(config: StandardGridConfig) -> Optional[StandardGridConfig]:
    """Entry with the largest item count below ``config``'s, or None if it is already the smallest."""
    smaller = [c for c in STANDARD_CONFIGS.values() if c.total_items < config.total_items]
    if not smaller:
        return None
    return corrected(max(smaller, key=lambda c: (c.total_items, c.columns)))


def get_catalog_summary() -> Dict[str, Any]:
    """Return a summary of the catalog contents for audit/reporting."""
    entries = list(STANDARD_CONFIGS.values())
    return {
        "total_entries": len(entries),
        "ids": [c.id for c in entries],
        "needs_correction": [c.id for c in entries if sum(c.distribution) != c.total_items],
        "item_counts": sorted({c.total_items for c in entries}),
        "column_counts": sorted({c.columns for c in entries}),
        "expertise_levels": sorted({c.expertise_level for c in entries}),
        "unique_citations": len({c.citation for c in entries}),
    }
