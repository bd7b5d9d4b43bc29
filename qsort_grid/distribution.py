"""
Distribution generation and correction for Q-sort grids.
=========================================================

A distribution is the list of cell counts per column, left to right.

Bell generation (``generate_distribution``):
    1. Seed both edge columns with MIN_EDGE_CELLS (every extreme position
       must be usable by at least two statements).
    2. Gaussian kernel over column indices, sigma = columns / 3.5.
    3. Interior columns get round(total * proportion), clamped to
       [MIN_EDGE_CELLS, total // 4] so no column dominates.
    4. Surplus goes to the center; a deficit is taken from the fullest
       interior columns, mirrored pairs first, never below MIN_EDGE_CELLS.
    5. Mirrored pairs are averaged and any residual lands in the center.
    6. Even column count with an odd total: steps 1-5 run for one item
       fewer and the spare cell goes to the right-hand middle column.

Inputs are checked up front: an inverted range raises InvalidRangeError and
a total that cannot give every column two cells raises InvalidTotalError.
"""
from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

import numpy as np

from .config import CorrectionMode, get_config
from .errors import DegenerateCorrectionError, InvalidTotalError
from .models import MIN_EDGE_CELLS, Distribution, GridRange, StandardGridConfig

logger = logging.getLogger(__name__)

SIGMA_DIVISOR = 3.5


def _round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; cell counts round .5 upwards
    return int(math.floor(x + 0.5))


def _check_total(total_items: Any) -> int:
    if isinstance(total_items, bool) or not isinstance(total_items, (int, np.integer)):
        raise InvalidTotalError(f"total_items must be an integer, got {total_items!r}")
    total = int(total_items)
    if total <= 0:
        raise InvalidTotalError(f"total_items must be positive, got {total}")
    return total


def center_index(columns: int) -> int:
    return columns // 2


def _add_to_center(dist: Distribution, amount: int, mode: CorrectionMode) -> None:
    """Add ``amount`` (may be negative) to the middle of ``dist`` in place."""
    n = len(dist)
    mid = center_index(n)
    if mode == CorrectionMode.CENTER or n % 2 == 1:
        dist[mid] += amount
        return
    # Even column count: two middle columns share the amount and the
    # right-hand one (the column floor(n/2) points at) ends up the larger
    half = amount // 2
    dist[mid - 1] += half
    dist[mid] += amount - half


# =============================================================================
# CORRECTION
# =============================================================================

def correct_distribution(config: StandardGridConfig, mode: Optional[CorrectionMode] = None) -> Distribution:
    """Make a catalog entry's distribution sum exactly to its total_items.

    The difference between ``total_items`` and the authored sum is added to
    the middle of the grid. With ``CorrectionMode.SYMMETRIC`` (default) an
    even column count splits it over the two middle columns; with
    ``CorrectionMode.CENTER`` it all goes to column ``columns // 2``.
    Correcting an already-correct distribution returns it unchanged.

    Raises:
        DegenerateCorrectionError: if a column would end up negative.
    """
    if mode is None:
        mode = get_config().correction_mode
    dist = [int(v) for v in config.distribution]
    difference = config.total_items - sum(dist)
    if difference == 0:
        return dist

    _add_to_center(dist, difference, mode)
    if min(dist) < 0:
        raise DegenerateCorrectionError(
            f"Correcting {config.id!r} by {difference:+d} leaves a negative column: {dist}"
        )
    logger.debug("Distribution of %s corrected by %+d (%s mode)", config.id, difference, mode.value)
    return dist


# =============================================================================
# GENERATION
# =============================================================================

def bell_proportions(columns: int) -> np.ndarray:
    """Normalised Gaussian weights over column indices."""
    idx = np.arange(columns, dtype=float)
    center = (columns - 1) / 2.0
    sigma = columns / SIGMA_DIVISOR
    bell = np.exp(-0.5 * ((idx - center) / sigma) ** 2)
    return bell / bell.sum()


def _absorb_deficit(dist: Distribution, deficit: int) -> int:
    """Remove ``deficit`` cells from interior columns; returns what could not be removed."""
    n = len(dist)
    mid = center_index(n)
    interior = range(1, n - 1)

    def distance(i: int) -> float:
        return abs(i - (n - 1) / 2.0)

    while deficit > 0:
        odd_center = n % 2 == 1 and mid in interior
        # An odd deficit on an odd grid comes off a center that stands above its neighbours
        if deficit % 2 == 1 and odd_center and dist[mid] > MIN_EDGE_CELLS and dist[mid] > dist[mid - 1]:
            dist[mid] -= 1
            deficit -= 1
            continue
        pairs = [
            i for i in interior
            if i < n - 1 - i and dist[i] > MIN_EDGE_CELLS and dist[n - 1 - i] > MIN_EDGE_CELLS
        ]
        if pairs and (deficit >= 2 or odd_center):
            # Fullest pair; on a plateau the outermost one, so the shape stays non-decreasing
            i = max(pairs, key=lambda j: (dist[j] + dist[n - 1 - j], -j))
            dist[i] -= 1
            dist[n - 1 - i] -= 1
            deficit -= 2
            if deficit < 0:
                # Took one too many: hand it back to the center
                dist[mid] -= deficit
                deficit = 0
            continue
        singles = [i for i in interior if dist[i] > MIN_EDGE_CELLS]
        if not singles:
            break
        i = max(singles, key=lambda j: (dist[j], -distance(j), -j))
        dist[i] -= 1
        deficit -= 1
    return deficit


def _bell_allocation(n: int, total: int) -> Distribution:
    dist = [0] * n
    dist[0] = MIN_EDGE_CELLS
    dist[n - 1] = MIN_EDGE_CELLS

    proportions = bell_proportions(n)
    cap = total // 4
    for i in range(1, n - 1):
        ideal = _round_half_up(total * float(proportions[i]))
        dist[i] = max(MIN_EDGE_CELLS, min(ideal, cap))

    discrepancy = total - sum(dist)
    if discrepancy > 0:
        _add_to_center(dist, discrepancy, CorrectionMode.SYMMETRIC)
    elif discrepancy < 0:
        left = _absorb_deficit(dist, -discrepancy)
        if left:
            # Unreachable when total >= 2 * columns; kept as a hard stop
            raise InvalidTotalError(f"Could not remove {left} surplus cells without breaking the 2-cell floor")
    logger.debug("Bell allocation for %s columns / %s items before symmetry: %s", n, total, dist)

    for i in range(n // 2):
        j = n - 1 - i
        avg = _round_half_up((dist[i] + dist[j]) / 2.0)
        dist[i] = avg
        dist[j] = avg

    residual = total - sum(dist)
    if residual:
        _add_to_center(dist, residual, CorrectionMode.SYMMETRIC)
    return dist


def generate_distribution(grid_range: Any, total_items: int) -> Distribution:
    """Generate a symmetric, bell-shaped distribution of ``total_items`` over ``grid_range``.

    An even column count with an odd total cannot be mirrored: the grid is
    built for ``total_items - 1`` and the spare cell goes to the right-hand
    middle column, so both halves still rise towards the center.

    Args:
        grid_range: GridRange, (min, max) pair or {"min", "max"} mapping
        total_items: number of statements to place; at least 2 per column

    Returns:
        List of cell counts, one per column, summing to ``total_items`` with
        both edges holding at least two cells.

    Raises:
        InvalidRangeError: min >= max
        InvalidTotalError: total not a positive integer or below 2 * columns
    """
    rng = GridRange.coerce(grid_range)
    total = _check_total(total_items)
    n = rng.columns
    if total < MIN_EDGE_CELLS * n:
        raise InvalidTotalError(
            f"{total} items cannot fill {n} columns with at least {MIN_EDGE_CELLS} cells each "
            f"(need {MIN_EDGE_CELLS * n})"
        )

    if n % 2 == 0 and total % 2 == 1:
        logger.warning(
            "%s items on an even %s-column grid cannot be mirrored exactly; middle columns differ by one",
            total, n,
        )
        dist = _bell_allocation(n, total - 1)
        dist[center_index(n)] += 1
        return dist
    return _bell_allocation(n, total)


def generate_flat_distribution(grid_range: Any, total_items: int) -> Distribution:
    """Spread ``total_items`` evenly; leftover cells go to the middle columns."""
    rng = GridRange.coerce(grid_range)
    total = _check_total(total_items)
    n = rng.columns
    per_column, remainder = divmod(total, n)
    dist = [per_column] * n
    start = (n - remainder) // 2
    for i in range(start, start + remainder):
        dist[i] += 1
    return dist
