"""
Full calculation for one vessel component: minimum thickness, MAWP,
corrosion rates, remaining life, inspection interval and status.
"""
import logging
import math
from datetime import date
from typing import Optional

from vessel_integrity.analysis.corrosion_rates import analyze_corrosion_rates, detect_anomaly
from vessel_integrity.analysis.remaining_life import (
    calculate_next_inspection_date,
    calculate_next_inspection_interval,
    calculate_remaining_life,
)
from vessel_integrity.config import (
    CRITICAL_REMAINING_LIFE,
    DEFAULT_TIME_SPAN_YEARS,
    RESULT_PRECISION,
    WARNING_REMAINING_LIFE,
)
from vessel_integrity.core.formulas import mawp_for, minimum_thickness_for
from vessel_integrity.core.models import (
    CalculationInput,
    CalculationResult,
    ComponentId,
    ComponentStatus,
)

logger = logging.getLogger(__name__)


def round_half_up(value: float, digits: int) -> float:
    """Round to `digits` places with ties rounded up, e.g. 2.25 -> 2.3."""
    if math.isinf(value):
        return value
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def classify_status(actual_thickness: float, minimum_thickness: float,
                    remaining_life: float) -> ComponentStatus:
    """Ordered classification: each rule is checked only if the previous one did not match."""
    if actual_thickness < minimum_thickness:
        return ComponentStatus.BELOW_MINIMUM
    if remaining_life < CRITICAL_REMAINING_LIFE:
        return ComponentStatus.CRITICAL
    if remaining_life < WARNING_REMAINING_LIFE:
        return ComponentStatus.WARNING
    return ComponentStatus.ACCEPTABLE


def perform_component_calculations(calc_input: CalculationInput,
                                   component: Optional[ComponentId] = None,
                                   minimum_thickness: Optional[float] = None,
                                   today: Optional[date] = None) -> CalculationResult:
    """
    Run every calculation for a single component.

    Parameters:
    - calc_input: design values and reduced thickness data
    - component: identity stamped on the result
    - minimum_thickness: overrides the code formula (e.g. a nozzle t_min
      supplied with the nozzle record)
    - today: reference date for the next inspection date

    Returns:
    - CalculationResult with stored values rounded; status is classified on
      unrounded values
    """
    if minimum_thickness is None:
        minimum_thickness = minimum_thickness_for(
            calc_input.component_type, calc_input.head_type,
            calc_input.design_pressure, calc_input.inside_diameter,
            calc_input.allowable_stress, calc_input.joint_efficiency,
            crown_radius=calc_input.crown_radius, knuckle_radius=calc_input.knuckle_radius,
        )

    calculated_mawp = mawp_for(
        calc_input.component_type, calc_input.head_type,
        calc_input.actual_thickness, calc_input.inside_diameter,
        calc_input.allowable_stress, calc_input.joint_efficiency,
    )

    time_span = calc_input.time_span
    if time_span is None:
        time_span = DEFAULT_TIME_SPAN_YEARS
    rates = analyze_corrosion_rates(
        calc_input.actual_thickness,
        previous_thickness=calc_input.previous_thickness,
        initial_thickness=calc_input.initial_thickness,
        nominal_thickness=calc_input.nominal_thickness,
        time_span=time_span,
        total_time_span=calc_input.total_time_span,
    )

    remaining_life = calculate_remaining_life(calc_input.actual_thickness, minimum_thickness, rates.rate)
    next_inspection_years = calculate_next_inspection_interval(remaining_life)
    next_inspection_date = calculate_next_inspection_date(next_inspection_years, today)

    status = classify_status(calc_input.actual_thickness, minimum_thickness, remaining_life)
    anomaly = detect_anomaly(calc_input.actual_thickness, calc_input.previous_thickness)
    if anomaly['is_anomaly']:
        logger.warning(f"{component.display_name if component else 'Component'}: {anomaly['reason']}")

    return CalculationResult(
        minimum_thickness=round_half_up(minimum_thickness, RESULT_PRECISION['minimum_thickness']),
        calculated_mawp=round_half_up(calculated_mawp, RESULT_PRECISION['calculated_mawp']),
        corrosion_rate=round_half_up(rates.rate, RESULT_PRECISION['corrosion_rate']),
        corrosion_rate_lt=round_half_up(rates.rate_lt, RESULT_PRECISION['corrosion_rate']),
        corrosion_rate_st=round_half_up(rates.rate_st, RESULT_PRECISION['corrosion_rate']),
        governing_rate=rates.governing,
        governing_rate_reason=rates.reason,
        remaining_life=round_half_up(remaining_life, RESULT_PRECISION['remaining_life']),
        next_inspection_years=round_half_up(next_inspection_years, RESULT_PRECISION['next_inspection_years']),
        next_inspection_date=next_inspection_date,
        is_below_minimum=calc_input.actual_thickness < minimum_thickness,
        status=status,
        component=component,
        actual_thickness=calc_input.actual_thickness,
        previous_thickness=calc_input.previous_thickness,
        time_span=time_span,
        anomaly_note=anomaly['reason'],
    )
