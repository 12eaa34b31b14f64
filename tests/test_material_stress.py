import pandas as pd
import pytest

from vessel_integrity.core.material_stress import MaterialStressTable, interpolate_stress
from vessel_integrity.core.models import MaterialStressPoint


def test_exact_temperature(stress_table):
    assert stress_table.lookup("SA-516 70", 500) == 19400


def test_interpolated_temperature(stress_table):
    # 19400 + 50/100 * (18100 - 19400) = 18750
    assert stress_table.lookup("SA-516 70", 550) == 18750
    # 19400 + 25/100 * -1300 = 19075
    assert stress_table.lookup("SA-516 70", 525) == 19075
    assert stress_table.lookup("SA-106 B", 575) == 16050


def test_interpolation_rounds_half_up():
    table = MaterialStressTable([
        MaterialStressPoint("SA-240 304", 100, 20000),
        MaterialStressPoint("SA-240 304", 200, 20001),
    ])
    assert table.lookup("SA-240 304", 150) == 20001
    assert interpolate_stress(150, 100, 20000, 200, 20001) == 20001
    assert interpolate_stress(125, 100, 20000, 200, 20001) == 20000


def test_no_extrapolation(stress_table):
    assert stress_table.lookup("SA-516 70", 50) == 20000
    assert stress_table.lookup("SA-516 70", 700) == 18100
    assert stress_table.lookup("SA-106 B", 900) == 15000


def test_unknown_material(stress_table):
    assert stress_table.lookup("SA-999 X", 300) is None


def test_single_point_curve():
    table = MaterialStressTable([MaterialStressPoint("SA-105", 100, 20000)])
    assert table.lookup("SA-105", 50) == 20000
    assert table.lookup("SA-105", 650) == 20000


def test_rows_sorted_on_load():
    table = MaterialStressTable(pd.DataFrame({
        "material_spec": ["SA-516 70"] * 3,
        "temperature": [600, 100, 500],
        "allowable_stress": [18100, 20000, 19400],
    }))
    assert table.curve("SA-516 70")["temperature"].tolist() == [100, 500, 600]
    assert table.lookup("SA-516 70", 550) == 18750


def test_list_materials(stress_table):
    assert stress_table.list_materials() == ["SA-106 B", "SA-516 70"]
    assert len(stress_table) == 9


def test_duplicate_temperature_rejected():
    with pytest.raises(ValueError, match="Duplicate temperatures"):
        MaterialStressTable([
            MaterialStressPoint("SA-516 70", 100, 20000),
            MaterialStressPoint("SA-516 70", 100, 19000),
        ])


def test_missing_columns_rejected():
    with pytest.raises(ValueError, match="missing columns"):
        MaterialStressTable(pd.DataFrame({"material_spec": ["SA-516 70"], "temperature": [100]}))


def test_non_numeric_and_negative_rejected():
    with pytest.raises(ValueError) as exc_info:
        MaterialStressTable(pd.DataFrame({
            "material_spec": ["SA-516 70", "SA-516 70"],
            "temperature": ["hot", 200],
            "allowable_stress": [20000, -5],
        }))
    assert "non-numeric" in str(exc_info.value)
    assert "must not be negative" in str(exc_info.value)
