"""
Tests for distribution generation and catalog correction.

Covers the bell generator's structural guarantees over a sweep of grid
sizes and item counts, the flat generator, and both correction modes.

Run with: python3 -m pytest tests/test_distribution.py -v
"""
import logging
from dataclasses import replace

import numpy as np
import pytest

from qsort_grid.config import CorrectionMode, GridEngineConfig, set_config
from qsort_grid.distribution import (
    bell_proportions,
    correct_distribution,
    generate_distribution,
    generate_flat_distribution,
)
from qsort_grid.errors import DegenerateCorrectionError, InvalidRangeError, InvalidTotalError
from qsort_grid.models import GridRange, StandardGridConfig
from qsort_grid.validator import validate_distribution

ODD_RANGES = [(-2, 2), (-3, 3), (-4, 4), (-5, 5), (-6, 6)]
EVEN_RANGES = [(-2, 1), (-3, 2), (-4, 3), (-5, 4), (-6, 5)]


def _sweep(ranges, max_total=80):
    for lo, hi in ranges:
        n = hi - lo + 1
        for total in range(2 * n, max_total + 1):
            yield (lo, hi), n, total


def _even_config(total_items, distribution=(2, 3, 3, 2)):
    return StandardGridConfig(
        id="even-test",
        name="Even test grid",
        range=GridRange(-2, 1),
        total_items=total_items,
        distribution=distribution,
    )


# =============================================================================
# BELL GENERATOR
# =============================================================================

def test_optimal_standard_shape():
    """-4..+4 with 36 items gives the canonical nine-column shape."""
    dist = generate_distribution((-4, 4), 36)
    assert dist == [2, 3, 4, 6, 6, 6, 4, 3, 2], f"Unexpected shape {dist}"
    assert max(dist) == dist[4]


def test_generated_sum_matches_total():
    for rng, _, total in _sweep(ODD_RANGES + EVEN_RANGES):
        dist = generate_distribution(rng, total)
        assert sum(dist) == total, f"{rng} / {total}: {dist} sums to {sum(dist)}"


def test_generated_odd_grids_are_symmetric_with_two_cell_edges():
    for rng, n, total in _sweep(ODD_RANGES):
        dist = generate_distribution(rng, total)
        assert len(dist) == n
        assert dist == dist[::-1], f"{rng} / {total}: {dist} not symmetric"
        assert dist[0] == dist[-1] == 2, f"{rng} / {total}: edges {dist[0]}, {dist[-1]}"


def test_generated_odd_grids_rise_towards_center():
    for rng, n, total in _sweep(ODD_RANGES):
        dist = generate_distribution(rng, total)
        left = dist[: n // 2 + 1]
        assert all(a <= b for a, b in zip(left, left[1:])), f"{rng} / {total}: {dist} dips before the center"


def test_generated_even_grids_symmetric_when_total_even():
    for rng, _, total in _sweep(EVEN_RANGES):
        dist = generate_distribution(rng, total)
        assert dist[0] >= 2 and dist[-1] >= 2, f"{rng} / {total}: edges {dist}"
        if total % 2 == 0:
            assert dist == dist[::-1], f"{rng} / {total}: {dist} not symmetric"


def test_generated_even_grids_rise_towards_center():
    for rng, n, total in _sweep(EVEN_RANGES, max_total=139):
        dist = generate_distribution(rng, total)
        left = dist[: n // 2 + 1]
        assert all(a <= b for a, b in zip(left, left[1:])), f"{rng} / {total}: {dist} dips before the center"


def test_even_grid_odd_total_puts_spare_cell_right_of_middle():
    for rng, n, total in _sweep(EVEN_RANGES):
        if total % 2 == 0:
            continue
        dist = generate_distribution(rng, total)
        mid = n // 2
        mirrored = dist[:]
        mirrored[mid] -= 1
        assert mirrored == mirrored[::-1], f"{rng} / {total}: {dist} differs beyond the middle pair"
        assert dist[mid] == dist[mid - 1] + 1
        assert validate_distribution(dist, total).score == 80, "Only the symmetry check may fail"
    assert generate_distribution((-3, 2), 15) == [2, 2, 3, 4, 2, 2]


def test_even_grid_with_odd_total_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="qsort_grid.distribution"):
        dist = generate_distribution((-4, 5), 31)
    assert sum(dist) == 31
    assert any("cannot be mirrored" in r.getMessage() for r in caplog.records)


def test_minimum_total_gives_all_two_cells():
    assert generate_distribution((-4, 4), 18) == [2] * 9


def test_generate_accepts_range_shapes():
    expected = generate_distribution((-3, 3), 25)
    assert generate_distribution(GridRange(-3, 3), 25) == expected
    assert generate_distribution({"min": -3, "max": 3}, 25) == expected
    assert generate_distribution([-3, 3], np.int64(25)) == expected


def test_generate_is_deterministic():
    assert generate_distribution((-5, 5), 44) == generate_distribution((-5, 5), 44)


def test_inverted_or_empty_range_rejected():
    with pytest.raises(InvalidRangeError):
        generate_distribution((4, -4), 36)
    with pytest.raises(InvalidRangeError):
        generate_distribution((0, 0), 36)
    with pytest.raises(InvalidRangeError):
        generate_distribution("wide", 36)


def test_bad_totals_rejected():
    for bad in (0, -5, 17, "36", 36.0, True):
        with pytest.raises(InvalidTotalError):
            generate_distribution((-4, 4), bad)


def test_errors_are_value_errors():
    """Callers that only catch ValueError still see engine errors."""
    with pytest.raises(ValueError):
        generate_distribution((-4, 4), 10)


def test_bell_proportions_normalised_and_symmetric():
    for n in (5, 7, 9, 10, 13):
        p = bell_proportions(n)
        assert np.isclose(p.sum(), 1.0)
        assert np.allclose(p, p[::-1])
        assert p.argmax() == (n - 1) // 2


# =============================================================================
# FLAT GENERATOR
# =============================================================================

def test_flat_even_split():
    assert generate_flat_distribution((-3, 3), 21) == [3] * 7


def test_flat_remainder_goes_to_middle():
    assert generate_flat_distribution((-2, 2), 13) == [2, 3, 3, 3, 2]


def test_flat_rejects_bad_input():
    with pytest.raises(InvalidTotalError):
        generate_flat_distribution((-2, 2), 0)
    with pytest.raises(InvalidRangeError):
        generate_flat_distribution((2, -2), 10)


# =============================================================================
# CORRECTION
# =============================================================================

def test_correct_already_summing_is_unchanged():
    cfg = _even_config(10)
    assert correct_distribution(cfg) == [2, 3, 3, 2]


def test_symmetric_mode_splits_over_middle_pair():
    assert correct_distribution(_even_config(14), CorrectionMode.SYMMETRIC) == [2, 5, 5, 2]
    assert correct_distribution(_even_config(13), CorrectionMode.SYMMETRIC) == [2, 4, 5, 2]


def test_center_mode_dumps_into_floor_half_column():
    assert correct_distribution(_even_config(14), CorrectionMode.CENTER) == [2, 3, 7, 2]
    assert correct_distribution(_even_config(13), CorrectionMode.CENTER) == [2, 3, 6, 2]


def test_mode_defaults_to_engine_config():
    set_config(GridEngineConfig(correction_mode=CorrectionMode.CENTER))
    assert correct_distribution(_even_config(14)) == [2, 3, 7, 2]


def test_odd_grid_modes_agree():
    cfg = StandardGridConfig(
        id="odd-test", name="Odd", range=GridRange(-2, 2), total_items=14, distribution=(2, 2, 4, 2, 2),
    )
    assert correct_distribution(cfg, CorrectionMode.SYMMETRIC) == [2, 2, 6, 2, 2]
    assert correct_distribution(cfg, CorrectionMode.CENTER) == [2, 2, 6, 2, 2]


def test_correction_is_idempotent():
    for total in (8, 10, 13, 14, 20):
        cfg = _even_config(total)
        once = correct_distribution(cfg)
        twice = correct_distribution(replace(cfg, distribution=tuple(once)))
        assert once == twice
        assert sum(once) == total


def test_negative_correction_raises():
    for mode in CorrectionMode:
        with pytest.raises(DegenerateCorrectionError):
            correct_distribution(_even_config(2), mode)


def test_correct_does_not_touch_input():
    cfg = _even_config(14)
    correct_distribution(cfg)
    assert cfg.distribution == (2, 3, 3, 2)
