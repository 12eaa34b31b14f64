"""
Short-term / long-term corrosion rates and governing-rate selection (API 510 7.1.1).

Rates are in inches per year. A rate is never reported as zero or negative:
no measurable loss (or apparent metal growth) falls back to the minimum
nominal rate, since a zero rate would imply infinite remaining life.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from vessel_integrity.config import ANOMALY_CHANGE_PCT, DEFAULT_TIME_SPAN_YEARS, MIN_NOMINAL_RATE

LONG_TERM_REASON = "Long-term rate is higher - indicates sustained corrosion"
SHORT_TERM_REASON = "Short-term rate is higher - indicates accelerated recent corrosion"


@dataclass(frozen=True)
class GoverningRate:
    """Rate carried into remaining-life prediction"""
    rate: float
    rate_lt: float
    rate_st: float
    governing: str  # 'LT' or 'ST'
    reason: str


def _floored_rate(start_thickness: float, actual_thickness: float, time_span: float) -> float:
    if time_span <= 0:
        return MIN_NOMINAL_RATE
    rate = (start_thickness - actual_thickness) / time_span
    if rate <= 0:
        return MIN_NOMINAL_RATE
    return rate


def calculate_short_term_corrosion_rate(previous_thickness: float, actual_thickness: float,
                                        time_span: float) -> float:
    """CR_ST = (t_previous - t_actual) / dT_recent"""
    return _floored_rate(previous_thickness, actual_thickness, time_span)


def calculate_long_term_corrosion_rate(initial_thickness: float, actual_thickness: float,
                                       total_time_span: float) -> float:
    """CR_LT = (t_initial - t_actual) / dT_total"""
    return _floored_rate(initial_thickness, actual_thickness, total_time_span)


def select_governing_rate(rate_lt: float, rate_st: float) -> GoverningRate:
    """The larger rate governs; a tie goes to the long-term rate."""
    if rate_lt >= rate_st:
        return GoverningRate(rate_lt, rate_lt, rate_st, 'LT', LONG_TERM_REASON)
    return GoverningRate(rate_st, rate_lt, rate_st, 'ST', SHORT_TERM_REASON)


def analyze_corrosion_rates(actual_thickness: float,
                            previous_thickness: Optional[float] = None,
                            initial_thickness: Optional[float] = None,
                            nominal_thickness: Optional[float] = None,
                            time_span: Optional[float] = None,
                            total_time_span: Optional[float] = None) -> GoverningRate:
    """
    Compute both rates with the usual fallbacks and select the governing one.

    Missing values fall back as follows:
    - previous thickness: nominal, then actual
    - initial thickness: nominal, then previous
    - time span: 10 years when absent; total time span: the time span

    A zero span is a real span (same-day dates) and gives the nominal rate.
    """
    if time_span is None:
        time_span = DEFAULT_TIME_SPAN_YEARS
    if total_time_span is None:
        total_time_span = time_span
    previous_thickness = previous_thickness or nominal_thickness or actual_thickness
    initial_thickness = initial_thickness or nominal_thickness or previous_thickness

    rate_st = calculate_short_term_corrosion_rate(previous_thickness, actual_thickness, time_span)
    rate_lt = calculate_long_term_corrosion_rate(initial_thickness, actual_thickness, total_time_span)
    return select_governing_rate(rate_lt, rate_st)


def detect_anomaly(current_thickness: float, previous_thickness: Optional[float]) -> Dict:
    """
    Flag readings that need confirmation before their rate is trusted.

    Returns:
    - dict with 'is_anomaly' (bool) and 'reason' (str, empty when not an anomaly)
    """
    if not previous_thickness or previous_thickness <= 0:
        return {'is_anomaly': False, 'reason': ''}

    pct_change = abs((current_thickness - previous_thickness) / previous_thickness) * 100

    if current_thickness > previous_thickness:
        return {
            'is_anomaly': True,
            'reason': f"Metal growth detected: {pct_change:.1f}% increase from previous reading"
        }

    if pct_change > ANOMALY_CHANGE_PCT:
        return {
            'is_anomaly': True,
            'reason': f"Anomaly: {pct_change:.1f}% change from previous reading - confirm measurement"
        }

    return {'is_anomaly': False, 'reason': ''}
