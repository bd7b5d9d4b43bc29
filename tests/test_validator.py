"""
Tests for the structural distribution validator.

Each check is exercised on its own so the penalty table can be read off
the assertions, then in combination to confirm penalties stack.

Run with: python3 -m pytest tests/test_validator.py -v
"""
import pytest

from qsort_grid.validator import (
    EDGE_PENALTY,
    MONOTONIC_PENALTY,
    PEAK_PENALTY,
    SUM_PENALTY,
    SYMMETRY_PENALTY,
    validate_distribution,
)

OPTIMAL = [2, 3, 4, 5, 8, 5, 4, 3, 2]


def test_valid_distribution_scores_full():
    result = validate_distribution(OPTIMAL, 36)
    assert result.is_valid
    assert result.issues == []
    assert result.score == 100
    assert result.quality == "optimal"


@pytest.mark.parametrize("dist,total,penalty,fragment", [
    (OPTIMAL, 37, SUM_PENALTY, "sums to 36"),
    ([2, 3, 5, 4, 3], 17, SYMMETRY_PENALTY, "not symmetric"),
    ([2, 2, 2, 2, 2], 10, PEAK_PENALTY, "Center column"),
    ([2, 4, 3, 5, 3, 4, 2], 23, MONOTONIC_PENALTY, "drops from 4 to 3"),
    ([1, 3, 5, 3, 1], 13, EDGE_PENALTY, "Edge columns"),
])
def test_single_violation_costs_its_penalty(dist, total, penalty, fragment):
    result = validate_distribution(dist, total)
    assert not result.is_valid
    assert len(result.issues) == 1, f"Expected one issue, got {result.issues}"
    assert fragment in result.issues[0]
    assert result.score == 100 - penalty


def test_penalties_stack_in_check_order():
    result = validate_distribution([5, 1, 0, 2], 100)
    assert result.score == 100 - SUM_PENALTY - SYMMETRY_PENALTY - PEAK_PENALTY - MONOTONIC_PENALTY
    assert len(result.issues) == 4
    assert "sums to" in result.issues[0]
    assert "not symmetric" in result.issues[1]
    assert result.quality == "poor"


def test_every_check_failing_scores_zero():
    result = validate_distribution([5, 1, 0, 1], 100)
    assert len(result.issues) == 5
    assert result.score == 0


def test_symmetry_reported_once():
    result = validate_distribution([2, 3, 4, 9, 4, 4, 3], 29)
    assert sum("not symmetric" in issue for issue in result.issues) == 1


def test_empty_distribution_is_reported_not_raised():
    result = validate_distribution([], 36)
    assert not result.is_valid
    assert result.score == 0
    assert result.issues


def test_nonsense_input_never_raises():
    result = validate_distribution([-1, 0, -1], 0)
    assert not result.is_valid
    assert 0 <= result.score <= 100


def test_quality_bands():
    assert validate_distribution(OPTIMAL, 37).quality == "acceptable"   # 70
    assert validate_distribution([2, 2, 2, 2, 2], 10).quality == "acceptable"  # 75
    assert validate_distribution([1, 3, 5, 3, 1], 13).quality == "optimal"  # 90
    assert validate_distribution([2, 3, 5, 4, 3], 99).quality == "poor"  # 50


def test_to_dict_shape():
    d = validate_distribution(OPTIMAL, 36).to_dict()
    assert d == {"isValid": True, "issues": [], "score": 100, "quality": "optimal"}


def test_accepts_tuples():
    assert validate_distribution(tuple(OPTIMAL), 36).score == 100
