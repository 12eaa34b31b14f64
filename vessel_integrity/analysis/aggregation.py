"""
Per-component aggregation of an inspection's thickness readings.

One run turns the full reading set of an inspection into exactly one
CalculationResult per vessel body component (shell, east head, west head)
and one per tracked nozzle, replaces the stored result set in a single
write, and raises at most one criticality alert once every component has
been evaluated.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

from vessel_integrity.analysis.component_calculations import perform_component_calculations
from vessel_integrity.analysis.remaining_life import calculate_time_span_years
from vessel_integrity.config import (
    DEFAULT_DESIGN_VALUES,
    DEFAULT_NOZZLE_JOINT_EFFICIENCY,
    DEFAULT_TIME_SPAN_YEARS,
)
from vessel_integrity.core.data_pipeline import THICKNESS_COLUMNS, readings_from_dataframe, readings_to_dataframe
from vessel_integrity.core.material_stress import MaterialStressTable
from vessel_integrity.core.models import (
    VESSEL_BODY_COMPONENTS,
    CalculationInput,
    CalculationResult,
    ComponentId,
    ComponentKind,
    ComponentStatus,
    CriticalityAlert,
    NozzleRecord,
    ThicknessReading,
    VesselDesign,
    parse_head_type,
)
from vessel_integrity.core.nozzles import calculate_nozzle_minimum_thickness, nozzle_outside_diameter

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "component", "component_name", "actual_thickness", "previous_thickness", "time_span",
    "minimum_thickness", "calculated_mawp", "corrosion_rate", "corrosion_rate_lt",
    "corrosion_rate_st", "governing_rate", "governing_rate_reason", "remaining_life",
    "next_inspection_years", "next_inspection_date", "is_below_minimum", "status",
    "status_message", "anomaly_note",
]


@dataclass
class DesignValues:
    """Vessel design values after defaults and stress resolution"""
    design_pressure: float
    design_temperature: float
    inside_diameter: float
    allowable_stress: float
    joint_efficiency: float
    nominal_thickness: float


@dataclass
class AggregationRun:
    """Outcome of one aggregation run"""
    inspection_id: Optional[str]
    results: Dict[ComponentId, CalculationResult]
    time_span: float
    alert: Optional[CriticalityAlert] = None
    skipped_nozzles: List[str] = field(default_factory=list)

    @property
    def critical_components(self) -> List[ComponentId]:
        return [c for c, r in self.results.items() if r.status.requires_alert]

    def to_dataframe(self) -> pd.DataFrame:
        return results_to_dataframe(self.results)


# ------------------------------------------------------------------------
# Design values

def resolve_allowable_stress(vessel: VesselDesign, design_temperature: float,
                             stress_table: Optional[MaterialStressTable] = None) -> float:
    """
    Explicit allowable stress wins; otherwise the material table is
    interpolated at the design temperature.

    Raises:
    - ValueError when neither source gives a value
    """
    if vessel.allowable_stress:
        return float(vessel.allowable_stress)

    if stress_table is not None and vessel.material_spec:
        stress = stress_table.lookup(vessel.material_spec, design_temperature)
        if stress is not None:
            logger.info(f"Allowable stress for {vessel.material_spec} at {design_temperature}°F: {stress} psi")
            return float(stress)

    raise ValueError(
        f"Allowable stress unresolved for material '{vessel.material_spec}' at {design_temperature}°F"
    )


def resolve_design_values(vessel: VesselDesign,
                          stress_table: Optional[MaterialStressTable] = None) -> DesignValues:
    """Fill blank design values with documented defaults, logging each one used."""
    values = {}
    for name, default in DEFAULT_DESIGN_VALUES.items():
        value = getattr(vessel, name)
        if value is None or value == 0:
            logger.warning(f"Vessel {vessel.vessel_tag or 'Unknown'}: no {name}, using default {default}")
            value = default
        values[name] = float(value)

    values["allowable_stress"] = resolve_allowable_stress(vessel, values["design_temperature"], stress_table)
    return DesignValues(**values)


def derive_time_span(vessel: VesselDesign) -> float:
    """Years since the previous inspection, or 10 years when either date is missing."""
    if vessel.inspection_date and vessel.previous_inspection_date:
        return calculate_time_span_years(vessel.previous_inspection_date, vessel.inspection_date)
    logger.warning(f"Vessel {vessel.vessel_tag or 'Unknown'}: inspection dates missing, "
                   f"using {DEFAULT_TIME_SPAN_YEARS} year time span")
    return DEFAULT_TIME_SPAN_YEARS


# ------------------------------------------------------------------------
# Readings

def _as_readings_frame(readings: Union[pd.DataFrame, Sequence[ThicknessReading], None]) -> pd.DataFrame:
    if readings is None:
        return readings_to_dataframe([])
    if isinstance(readings, pd.DataFrame):
        # Round-trip through the record type so component tags are validated
        return readings_to_dataframe(readings_from_dataframe(readings))
    return readings_to_dataframe(readings)


def partition_readings(readings_df: pd.DataFrame) -> Dict[ComponentKind, pd.DataFrame]:
    """Group readings by their declared component kind."""
    return {ComponentKind(kind): group for kind, group in readings_df.groupby("component_type")}


def reduce_worst_case_thickness(readings_df: pd.DataFrame, fallback_thickness: float):
    """
    Worst-case (minimum) actual and previous thickness of one component.

    Actual thickness is the minimum positive value across every location and
    angular sub-reading; previous thickness the minimum positive previous
    value. Either falls back to the given thickness (normally nominal) when
    no usable value exists.

    Returns:
    - (actual_thickness, previous_thickness)
    """
    actual_thickness = previous_thickness = fallback_thickness
    if readings_df is None or readings_df.empty:
        return actual_thickness, previous_thickness

    measured = readings_df[THICKNESS_COLUMNS].apply(pd.to_numeric, errors='coerce')
    worst_actual = measured.where(measured > 0).min().min()
    if pd.notna(worst_actual):
        actual_thickness = float(worst_actual)

    previous = pd.to_numeric(readings_df["previous_thickness"], errors='coerce')
    worst_previous = previous.where(previous > 0).min()
    if pd.notna(worst_previous):
        previous_thickness = float(worst_previous)

    return actual_thickness, previous_thickness


# ------------------------------------------------------------------------
# Component evaluation

def evaluate_body_component(kind: ComponentKind, readings_df: Optional[pd.DataFrame], vessel: VesselDesign,
                            design: DesignValues, time_span: float,
                            today: Optional[date] = None) -> CalculationResult:
    """Shell or head result from that component's readings."""
    actual_thickness, previous_thickness = reduce_worst_case_thickness(readings_df, design.nominal_thickness)

    calc_input = CalculationInput(
        design_pressure=design.design_pressure,
        design_temperature=design.design_temperature,
        inside_diameter=design.inside_diameter,
        allowable_stress=design.allowable_stress,
        joint_efficiency=design.joint_efficiency,
        actual_thickness=actual_thickness,
        previous_thickness=previous_thickness,
        nominal_thickness=design.nominal_thickness,
        time_span=time_span,
        total_time_span=vessel.total_time_span,
        component_type='head' if kind.is_head else 'shell',
        head_type=parse_head_type(vessel.head_type),
    )
    return perform_component_calculations(calc_input, component=ComponentId(kind), today=today)


def evaluate_nozzle(nozzle: NozzleRecord, readings_df: Optional[pd.DataFrame], vessel: VesselDesign,
                    design: DesignValues, time_span: float,
                    today: Optional[date] = None) -> Optional[CalculationResult]:
    """
    Nozzle result using the shell formulas at the nozzle radius.

    Thickness values on the record win over values reduced from readings
    tagged with the same nozzle id. Returns None when the nozzle has no size
    or no thickness data to evaluate.
    """
    if not nozzle.size:
        logger.warning(f"Nozzle {nozzle.nozzle_id}: no size given, skipping evaluation")
        return None

    fallback = nozzle.nominal_thickness or None
    reduced_actual, reduced_previous = reduce_worst_case_thickness(readings_df, fallback)
    actual_thickness = nozzle.actual_thickness or reduced_actual
    previous_thickness = nozzle.previous_thickness or reduced_previous
    if not actual_thickness:
        logger.warning(f"Nozzle {nozzle.nozzle_id}: no thickness data, skipping evaluation")
        return None

    joint_efficiency = vessel.nozzle_joint_efficiency or DEFAULT_NOZZLE_JOINT_EFFICIENCY
    minimum_thickness = nozzle.minimum_thickness
    if not minimum_thickness:
        minimum_thickness = calculate_nozzle_minimum_thickness(
            design.design_pressure, nozzle.size, design.allowable_stress, joint_efficiency)

    calc_input = CalculationInput(
        design_pressure=design.design_pressure,
        design_temperature=design.design_temperature,
        inside_diameter=nozzle_outside_diameter(nozzle.size),
        allowable_stress=design.allowable_stress,
        joint_efficiency=joint_efficiency,
        actual_thickness=actual_thickness,
        previous_thickness=previous_thickness,
        nominal_thickness=nozzle.nominal_thickness,
        time_span=time_span,
        total_time_span=vessel.total_time_span,
        component_type='nozzle',
    )
    return perform_component_calculations(calc_input, component=nozzle.component,
                                          minimum_thickness=minimum_thickness, today=today)


# ------------------------------------------------------------------------
# Pipeline

def run_component_aggregation(inspection_id, vessel: VesselDesign,
                              readings: Union[pd.DataFrame, Sequence[ThicknessReading], None] = None,
                              nozzles: Optional[Sequence[NozzleRecord]] = None,
                              stress_table: Optional[MaterialStressTable] = None,
                              result_store=None, alert_sink=None,
                              today: Optional[date] = None) -> AggregationRun:
    """
    Recalculate every component of one inspection.

    Parameters:
    - inspection_id: key of the stored result set
    - vessel: design record; blank values use documented defaults
    - readings: ThicknessReading records or a processed TML DataFrame
    - nozzles: tracked nozzle records, each evaluated independently
    - stress_table: resolves allowable stress when the vessel record has none
    - result_store: receives the full result set in a single replace
    - alert_sink: receives at most one CriticalityAlert, after the write
    - today: reference date for next inspection dates

    Returns:
    - AggregationRun with one result per component

    The host must serialise runs for the same inspection.
    """
    design = resolve_design_values(vessel, stress_table)
    time_span = derive_time_span(vessel)

    readings_df = _as_readings_frame(readings)
    groups = partition_readings(readings_df)

    results: Dict[ComponentId, CalculationResult] = {}
    for kind in VESSEL_BODY_COMPONENTS:
        component_readings = groups.get(kind)
        if component_readings is None:
            logger.warning(f"No readings for {kind.value}, using nominal thickness {design.nominal_thickness}")
        results[ComponentId(kind)] = evaluate_body_component(
            kind, component_readings, vessel, design, time_span, today)

    nozzle_readings = groups.get(ComponentKind.NOZZLE, readings_df.iloc[0:0])
    tracked_ids = set()
    skipped = []
    for nozzle in nozzles or []:
        tracked_ids.add(str(nozzle.nozzle_id))
        matching = nozzle_readings[nozzle_readings["nozzle_id"].astype(str) == str(nozzle.nozzle_id)]
        result = evaluate_nozzle(nozzle, matching, vessel, design, time_span, today)
        if result is None:
            skipped.append(str(nozzle.nozzle_id))
            continue
        results[nozzle.component] = result

    untracked = set(nozzle_readings["nozzle_id"].dropna().astype(str)) - tracked_ids
    if untracked:
        logger.warning(f"Readings reference untracked nozzles: {sorted(untracked)}")

    if result_store is not None:
        result_store.replace_results(inspection_id, results)

    run = AggregationRun(inspection_id=inspection_id, results=results, time_span=time_span,
                         skipped_nozzles=skipped)

    critical = run.critical_components
    if critical:
        run.alert = CriticalityAlert(
            vessel_tag=vessel.vessel_tag,
            inspection_id=inspection_id,
            components=[c.display_name for c in critical],
        )
        if alert_sink is not None:
            alert_sink.send(run.alert)

    statuses = pd.Series([r.status.value for r in results.values()]).value_counts().to_dict()
    logger.info(f"Inspection {inspection_id}: {len(results)} components evaluated {statuses}")
    return run


# ------------------------------------------------------------------------
# Tabular form

def results_to_dataframe(results: Dict[ComponentId, CalculationResult]) -> pd.DataFrame:
    """One row per component, keyed by the component key."""
    rows = []
    for component, result in results.items():
        rows.append({
            "component": component.key,
            "component_name": component.display_name,
            "actual_thickness": result.actual_thickness,
            "previous_thickness": result.previous_thickness,
            "time_span": result.time_span,
            "minimum_thickness": result.minimum_thickness,
            "calculated_mawp": result.calculated_mawp,
            "corrosion_rate": result.corrosion_rate,
            "corrosion_rate_lt": result.corrosion_rate_lt,
            "corrosion_rate_st": result.corrosion_rate_st,
            "governing_rate": result.governing_rate,
            "governing_rate_reason": result.governing_rate_reason,
            "remaining_life": result.remaining_life,
            "next_inspection_years": result.next_inspection_years,
            "next_inspection_date": result.next_inspection_date.isoformat(),
            "is_below_minimum": result.is_below_minimum,
            "status": result.status.value,
            "status_message": result.status_message,
            "anomaly_note": result.anomaly_note,
        })
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def _optional_float(value) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def results_from_dataframe(df: pd.DataFrame) -> Dict[ComponentId, CalculationResult]:
    """Inverse of results_to_dataframe."""
    results = {}
    for row in df.to_dict(orient='records'):
        component = ComponentId.from_key(str(row["component"]))
        results[component] = CalculationResult(
            minimum_thickness=float(row["minimum_thickness"]),
            calculated_mawp=float(row["calculated_mawp"]),
            corrosion_rate=float(row["corrosion_rate"]),
            corrosion_rate_lt=float(row["corrosion_rate_lt"]),
            corrosion_rate_st=float(row["corrosion_rate_st"]),
            governing_rate=row["governing_rate"],
            governing_rate_reason=row["governing_rate_reason"],
            remaining_life=float(row["remaining_life"]),
            next_inspection_years=float(row["next_inspection_years"]),
            next_inspection_date=date.fromisoformat(str(row["next_inspection_date"])),
            is_below_minimum=str(row["is_below_minimum"]).lower() == "true",
            status=ComponentStatus(row["status"]),
            component=component,
            actual_thickness=_optional_float(row["actual_thickness"]),
            previous_thickness=_optional_float(row["previous_thickness"]),
            time_span=_optional_float(row["time_span"]),
            anomaly_note="" if pd.isna(row["anomaly_note"]) else str(row["anomaly_note"]),
        )
    return results
