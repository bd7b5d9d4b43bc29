"""Tabular views of the catalog and of individual grids (pandas)."""
from __future__ import annotations

from typing import List, Optional

import pandas as pd

from .catalog import STANDARD_CONFIGS, corrected
from .grid_builder import GridConfiguration
from .validator import validate_distribution


def catalog_frame() -> pd.DataFrame:
    """One row per catalog entry, raw and corrected distributions side by side."""
    rows = []
    for raw in STANDARD_CONFIGS.values():
        fixed = corrected(raw)
        result = validate_distribution(fixed.distribution, fixed.total_items)
        rows.append({
            "id": raw.id,
            "name": raw.name,
            "range": f"{raw.range.min:+d}..{raw.range.max:+d}",
            "columns": raw.columns,
            "total_items": raw.total_items,
            "raw_sum": sum(raw.distribution),
            "distribution": " ".join(str(v) for v in fixed.distribution),
            "score": result.score,
            "expertise_level": raw.expertise_level,
            "time_estimate": raw.time_estimate,
        })
    return pd.DataFrame(rows)


def grid_frame(grid: GridConfiguration, total_items: Optional[int] = None) -> pd.DataFrame:
    """Per-column view of a grid: label, cells and share of all cells."""
    df = pd.DataFrame([
        {"value": c.value, "label": c.display_label(), "cells": c.cells}
        for c in grid.columns
    ])
    total = grid.total_cells if total_items is None else total_items
    df["share"] = (df["cells"] / total).round(3) if total else 0.0
    df["cumulative"] = df["cells"].cumsum()
    return df


def distribution_summary(distributions: List[List[int]], total_items: int) -> pd.DataFrame:
    """Score a batch of candidate distributions for the same item count."""
    rows = []
    for dist in distributions:
        result = validate_distribution(dist, total_items)
        rows.append({
            "distribution": " ".join(str(v) for v in dist),
            "sum": sum(dist),
            "score": result.score,
            "quality": result.quality,
            "issues": len(result.issues),
        })
    if not rows:
        return pd.DataFrame(columns=["distribution", "sum", "score", "quality", "issues"])
    return pd.DataFrame(rows).sort_values("score", ascending=False, kind="stable").reset_index(drop=True)
