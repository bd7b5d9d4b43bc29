"""
Structural validator for Q-sort distributions.
==============================================

Scores any distribution (generated, corrected or hand-edited) out of 100.
Checks performed, each with a fixed penalty:

1. Total      - cells sum to the expected item count            (-30)
2. Symmetry   - mirrored columns hold equal counts               (-20)
3. Peak       - center column strictly above the left edge       (-25)
4. Shape      - non-decreasing from the left edge to the center  (-15)
5. Edges      - both edge columns hold at least two cells        (-10)

The validator runs on grids that are still being edited, so it never
raises: every problem is reported as an issue string and the result is
``is_valid`` only when no issue was found.
"""
from __future__ import annotations

import logging
from typing import List, Sequence

from .models import MIN_EDGE_CELLS, ValidationResult

logger = logging.getLogger(__name__)

SUM_PENALTY = 30
SYMMETRY_PENALTY = 20
PEAK_PENALTY = 25
MONOTONIC_PENALTY = 15
EDGE_PENALTY = 10


def validate_distribution(distribution: Sequence[int], total_items: int) -> ValidationResult:
    """
    Validate a distribution against the structural rules of a forced Q-sort.

    Args:
        distribution: Cell counts per column, left to right
        total_items: Number of statements the grid must hold

    Returns:
        ValidationResult with issues in check order and a score in [0, 100]
    """
    dist: List[int] = list(distribution)
    if not dist:
        return ValidationResult(is_valid=False, issues=["Distribution has no columns"], score=0)

    issues: List[str] = []
    score = 100
    n = len(dist)
    center = n // 2

    actual = sum(dist)
    if actual != total_items:
        issues.append(f"Distribution sums to {actual} but the grid needs {total_items} items")
        score -= SUM_PENALTY

    for i in range(n // 2):
        j = n - 1 - i
        if dist[i] != dist[j]:
            issues.append(
                f"Distribution is not symmetric: column {i + 1} has {dist[i]} cells, "
                f"its mirror column {j + 1} has {dist[j]}"
            )
            score -= SYMMETRY_PENALTY
            break

    if not dist[center] > dist[0]:
        issues.append(
            f"Center column ({dist[center]} cells) should hold more than the edge column ({dist[0]} cells)"
        )
        score -= PEAK_PENALTY

    for i in range(center):
        if dist[i] > dist[i + 1]:
            issues.append(
                f"Distribution drops from {dist[i]} to {dist[i + 1]} cells between columns "
                f"{i + 1} and {i + 2} on the way to the center"
            )
            score -= MONOTONIC_PENALTY
            break

    if dist[0] < MIN_EDGE_CELLS or dist[-1] < MIN_EDGE_CELLS:
        issues.append(f"Edge columns need at least {MIN_EDGE_CELLS} cells (have {dist[0]} and {dist[-1]})")
        score -= EDGE_PENALTY

    score = max(0, score)
    if issues:
        logger.debug("Distribution %s scored %s: %s", dist, score, "; ".join(issues))
    return ValidationResult(is_valid=not issues, issues=issues, score=score)
