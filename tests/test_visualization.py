import math

import pandas as pd

from vessel_integrity.analysis.aggregation import RESULT_COLUMNS, run_component_aggregation
from vessel_integrity.visualization.calculation_viz import (
    STATUS_COLORS,
    create_remaining_life_chart,
    create_thickness_margin_chart,
)


def _results_df(vessel, readings, nozzles, today):
    return run_component_aggregation("INSP-1", vessel, readings, nozzles, today=today).to_dataframe()


def test_thickness_margin_chart(vessel, readings, nozzles, today):
    fig = create_thickness_margin_chart(_results_df(vessel, readings, nozzles, today))

    actual, minimum = fig.data
    assert list(actual.x) == ["Vessel Shell", "East Head", "West Head", "Nozzle N1"]
    assert actual.marker.color[1] == STATUS_COLORS["BELOW_MINIMUM"]
    assert list(minimum.y) == [0.213, 0.212, 0.212, 0.009]
    assert fig.layout.barmode == "group"


def test_thickness_chart_skips_infinite_minimum(vessel, readings, today):
    df = _results_df(vessel, readings, [], today)
    df.loc[0, "minimum_thickness"] = math.inf
    fig = create_thickness_margin_chart(df)
    assert fig.data[1].y[0] is None


def test_remaining_life_chart_caps_infinite_life(vessel, today):
    df = _results_df(vessel, [], [], today)
    df.loc[0, "remaining_life"] = 999
    fig = create_remaining_life_chart(df)

    bars = fig.data[0]
    assert bars.y[0] == 50
    assert bars.text[0] == "No measurable corrosion"
    assert len(fig.layout.shapes) == 2


def test_empty_results():
    empty = pd.DataFrame(columns=RESULT_COLUMNS)
    assert len(create_thickness_margin_chart(empty).data) == 0
    assert len(create_remaining_life_chart(empty).data) == 0
    assert create_remaining_life_chart(empty).layout.annotations[0].text == "No calculation results to display"
