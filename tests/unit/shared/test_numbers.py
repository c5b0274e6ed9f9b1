"""Tests for round_half_up."""

import pytest

from exam_grader.shared.utils import round_half_up


@pytest.mark.parametrize(
    "value, digits, expected",
    [
        (62.5, 0, 63.0),
        (70.25, 0, 70.0),
        (8.55, 1, 8.6),
        (2.675, 2, 2.68),
        (9.45, 1, 9.5),
        (0.0, 1, 0.0),
        (-2.5, 0, -3.0),
    ],
)
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected


def test_differs_from_builtin_round():
    assert round(2.5) == 2
    assert round_half_up(2.5) == 3.0
