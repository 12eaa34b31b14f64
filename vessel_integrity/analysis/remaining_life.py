"""
Remaining life and next inspection interval (API 510 6.5 / 7.2).
"""
import math
from datetime import date
from typing import Optional

import pandas as pd

from vessel_integrity.config import DAYS_PER_YEAR, INFINITE_REMAINING_LIFE, MAX_INSPECTION_INTERVAL


def calculate_remaining_life(actual_thickness: float, minimum_thickness: float,
                             corrosion_rate: float) -> float:
    """
    RL = (t_actual - t_min) / CR

    Returns 0 when the component is already at or below its minimum thickness,
    whatever the rate, and 999 (effectively infinite) for a non-positive rate.
    """
    corrosion_allowance = actual_thickness - minimum_thickness
    if corrosion_allowance <= 0:
        return 0
    if corrosion_rate <= 0:
        return INFINITE_REMAINING_LIFE
    return corrosion_allowance / corrosion_rate


def calculate_next_inspection_interval(remaining_life: float) -> float:
    """Lesser of half the remaining life and the 10-year ceiling."""
    if remaining_life <= 0:
        return 0
    return min(remaining_life / 2, MAX_INSPECTION_INTERVAL)


def calculate_next_inspection_date(next_inspection_years: float, today: Optional[date] = None) -> date:
    """Current date advanced by the whole years of the interval."""
    today = today or date.today()
    whole_years = int(math.floor(next_inspection_years))
    return (pd.Timestamp(today) + pd.DateOffset(years=whole_years)).date()


def calculate_time_span_years(start_date, end_date) -> float:
    """Elapsed years between two dates (365.25-day year)."""
    elapsed = pd.Timestamp(end_date) - pd.Timestamp(start_date)
    return elapsed / pd.Timedelta(days=DAYS_PER_YEAR)
