import pytest

from vessel_integrity.core.formulas import calculate_shell_minimum_thickness
from vessel_integrity.core.nozzles import (
    calculate_nozzle_minimum_thickness,
    nozzle_outside_diameter,
    parse_nominal_size,
)


@pytest.mark.parametrize("token,size", [
    ("2", 2.0),
    ('2"', 2.0),
    ("1.5 in", 1.5),
    ("NPS 3", 3.0),
    ("2in", 2.0),
    ("1.5in.", 1.5),
    ("3inch", 3.0),
    ("4 inches", 4.0),
    ("1-1/2in", 1.5),
    ("3/4", 0.75),
    ("1-1/2", 1.5),
    ('2-1/2"', 2.5),
    (6, 6.0),
    (0.5, 0.5),
])
def test_parse_nominal_size(token, size):
    assert parse_nominal_size(token) == pytest.approx(size)


@pytest.mark.parametrize("token", ["", "large", "2x4", "1/0"])
def test_parse_nominal_size_rejects_garbage(token):
    with pytest.raises(ValueError):
        parse_nominal_size(token)


@pytest.mark.parametrize("token,od", [
    ("2", 2.375),
    ('24"', 24.0),
    ("3/4", 1.050),
    ("6", 6.625),
])
def test_table_outside_diameter(token, od):
    assert nozzle_outside_diameter(token) == od


def test_fallback_outside_diameter():
    # Non-standard sizes use size + 0.375 in
    assert nozzle_outside_diameter("5") == pytest.approx(5.375)
    assert nozzle_outside_diameter("42") == pytest.approx(42.375)


def test_nozzle_minimum_thickness():
    # 2" NPS: R = 2.375 / 2, E = 1.0
    expected = 150 * 1.1875 / (20000 * 1.0 - 0.6 * 150)
    assert calculate_nozzle_minimum_thickness(150, '2"', 20000) == pytest.approx(expected)
    assert calculate_nozzle_minimum_thickness(150, '2"', 20000) == pytest.approx(0.00895, abs=1e-5)


def test_nozzle_default_joint_efficiency_is_seamless():
    assert calculate_nozzle_minimum_thickness(150, "4", 17100) == \
        calculate_nozzle_minimum_thickness(150, "4", 17100, 1.0)
    assert calculate_nozzle_minimum_thickness(150, "4", 17100, 0.85) > \
        calculate_nozzle_minimum_thickness(150, "4", 17100)


def test_nozzle_uses_shell_formula():
    assert calculate_nozzle_minimum_thickness(300, "8", 20000, 0.85) == \
        calculate_shell_minimum_thickness(300, 8.625 / 2, 20000, 0.85)
