import pytest

from services.grade_calculator import (
    EXCELLENT, GOOD, NEEDS_IMPROVEMENT, calculate_average, calculate_remarks,
)


@pytest.mark.parametrize("scores", [
    (0, 0, 0),
    (100, 100, 100),
    (95, 92, 91),
    (70, 60, 65),
    (33.3, 66.6, 99.9),
])
def test_average_is_arithmetic_mean(scores):
    assert calculate_average(*scores) == pytest.approx(sum(scores) / 3)


@pytest.mark.parametrize("average, expected", [
    (100, EXCELLENT),
    (90, EXCELLENT),
    (89.999, GOOD),
    (75, GOOD),
    (74.999, NEEDS_IMPROVEMENT),
    (0, NEEDS_IMPROVEMENT),
])
def test_remarks_boundaries(average, expected):
    assert calculate_remarks(average) == expected
