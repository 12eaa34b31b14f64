from datetime import date

import pytest

from vessel_integrity.analysis.remaining_life import (
    calculate_next_inspection_date,
    calculate_next_inspection_interval,
    calculate_remaining_life,
    calculate_time_span_years,
)


def test_remaining_life():
    # (0.375 - 0.200) / 0.005 = 35 years
    assert calculate_remaining_life(0.375, 0.200, 0.005) == pytest.approx(35.0)


def test_remaining_life_no_corrosion():
    assert calculate_remaining_life(0.375, 0.200, 0) == 999
    assert calculate_remaining_life(0.375, 0.200, -0.01) == 999


@pytest.mark.parametrize("actual,minimum", [(0.200, 0.200), (0.190, 0.200)])
def test_remaining_life_at_or_below_minimum(actual, minimum):
    assert calculate_remaining_life(actual, minimum, 0.005) == 0


def test_below_minimum_takes_precedence_over_zero_rate():
    assert calculate_remaining_life(0.190, 0.200, 0) == 0


def test_remaining_life_unachievable_minimum():
    assert calculate_remaining_life(0.5, float('inf'), 0.005) == 0


@pytest.mark.parametrize("remaining_life,interval", [
    (35.0, 10),
    (20.0, 10),
    (12.0, 6.0),
    (3.0, 1.5),
    (999, 10),
    (0, 0),
])
def test_next_inspection_interval(remaining_life, interval):
    assert calculate_next_inspection_interval(remaining_life) == pytest.approx(interval)


def test_next_inspection_interval_bounds():
    for remaining_life in (0.1, 1, 4.5, 19.9, 20, 21, 500):
        interval = calculate_next_inspection_interval(remaining_life)
        assert 0 <= interval <= 10
        assert interval <= remaining_life / 2


def test_next_inspection_date_uses_whole_years():
    today = date(2024, 3, 15)
    assert calculate_next_inspection_date(10, today) == date(2034, 3, 15)
    assert calculate_next_inspection_date(3.9, today) == date(2027, 3, 15)
    assert calculate_next_inspection_date(0.5, today) == today
    assert calculate_next_inspection_date(0, today) == today


def test_next_inspection_date_leap_day():
    assert calculate_next_inspection_date(1, date(2024, 2, 29)) == date(2025, 2, 28)


def test_next_inspection_date_defaults_to_today():
    assert calculate_next_inspection_date(0) == date.today()


def test_time_span_years():
    assert calculate_time_span_years(date(2019, 1, 1), date(2024, 1, 1)) == pytest.approx(1826 / 365.25)
    assert calculate_time_span_years("2020-01-01", "2021-01-01") == pytest.approx(366 / 365.25)
    assert calculate_time_span_years(date(2024, 1, 1), date(2019, 1, 1)) < 0
