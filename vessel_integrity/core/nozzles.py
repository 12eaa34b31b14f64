"""
Nozzle minimum thickness from nominal pipe size (ASME B31.3 / B36.10 ODs).
"""
import re

from vessel_integrity.config import DEFAULT_NOZZLE_JOINT_EFFICIENCY
from vessel_integrity.core.formulas import calculate_shell_minimum_thickness

# Nominal pipe size (in) -> outside diameter (in)
NPS_OUTSIDE_DIAMETER = {
    0.5: 0.840, 0.75: 1.050, 1: 1.315, 1.25: 1.660, 1.5: 1.900,
    2: 2.375, 2.5: 2.875, 3: 3.500, 4: 4.500, 6: 6.625,
    8: 8.625, 10: 10.750, 12: 12.750, 14: 14.000, 16: 16.000,
    18: 18.000, 20: 20.000, 24: 24.000, 30: 30.000, 36: 36.000,
}

# Added to the nominal size when it is not in the table
OD_FALLBACK_ALLOWANCE = 0.375

_UNIT_MARKERS = re.compile(r'(["”″]|inch(es)?\b|in\.?$|\bnps\b)', re.IGNORECASE)


def parse_nominal_size(nozzle_size) -> float:
    """
    Parse a nominal pipe size token such as '2', '2"', '2in', '1.5 in' or 'NPS 3'.
    Fractions like '3/4' and '1-1/2' are accepted.
    """
    if isinstance(nozzle_size, (int, float)):
        return float(nozzle_size)

    token = _UNIT_MARKERS.sub('', str(nozzle_size)).strip()
    try:
        if '/' in token:
            whole, _, fraction = token.rpartition('-') if '-' in token else ('0', '', token)
            numerator, denominator = fraction.split('/')
            return float(whole or 0) + float(numerator) / float(denominator)
        return float(token)
    except (ValueError, ZeroDivisionError):
        raise ValueError(f"Cannot parse nozzle size: {nozzle_size!r}") from None


def nozzle_outside_diameter(nozzle_size) -> float:
    """Table OD for standard sizes, otherwise size + 0.375 in."""
    size = parse_nominal_size(nozzle_size)
    if size in NPS_OUTSIDE_DIAMETER:
        return NPS_OUTSIDE_DIAMETER[size]
    return size + OD_FALLBACK_ALLOWANCE


def calculate_nozzle_minimum_thickness(pressure: float, nozzle_size, allowable_stress: float,
                                       joint_efficiency: float = DEFAULT_NOZZLE_JOINT_EFFICIENCY) -> float:
    """
    Nozzle minimum thickness using the shell formula at the nozzle radius.

    Parameters:
    - pressure: design pressure (psi)
    - nozzle_size: nominal pipe size token, e.g. '2', '24"'
    - allowable_stress: nozzle material allowable stress (psi)
    - joint_efficiency: defaults to 1.0 (seamless pipe)
    """
    radius = nozzle_outside_diameter(nozzle_size) / 2
    return calculate_shell_minimum_thickness(pressure, radius, allowable_stress, joint_efficiency)
