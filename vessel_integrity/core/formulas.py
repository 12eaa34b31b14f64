"""
ASME Section VIII Div. 1 thickness and pressure formulas.

All functions are pure. Minimum-thickness functions return ``math.inf`` when
the design pressure cannot be sustained by the material/geometry (the
denominator is not positive); MAWP functions return 0 for a non-positive
denominator or zero thickness. Callers treat these sentinels as engineering
outcomes, not errors.

Units: pressure and stress in psi, lengths in inches.
"""
import math
from typing import Optional

from vessel_integrity.core.models import ComponentKind, HeadType, parse_head_type


def calculate_shell_minimum_thickness(pressure: float, radius: float,
                                      allowable_stress: float, joint_efficiency: float) -> float:
    """
    Cylindrical shell, circumferential stress (UG-27(c)(1)).
    t_min = PR / (SE - 0.6P)
    """
    denominator = allowable_stress * joint_efficiency - 0.6 * pressure
    if denominator <= 0:
        return math.inf
    return pressure * radius / denominator


def calculate_ellipsoidal_head_minimum_thickness(pressure: float, diameter: float,
                                                 allowable_stress: float, joint_efficiency: float) -> float:
    """
    2:1 ellipsoidal head (UG-32(d)).
    t_min = PD / (2SE - 0.2P)
    """
    denominator = 2 * allowable_stress * joint_efficiency - 0.2 * pressure
    if denominator <= 0:
        return math.inf
    return pressure * diameter / denominator


def calculate_torispherical_head_minimum_thickness(pressure: float, crown_radius: float,
                                                   allowable_stress: float, joint_efficiency: float,
                                                   knuckle_radius: Optional[float] = None) -> float:
    """
    Torispherical head (Appendix 1-4(d)).
    t_min = PLM / (2SE - 0.2P), M = 0.25 * (3 + sqrt(L / r))

    The knuckle radius defaults to 6% of the crown radius.
    """
    r = knuckle_radius or crown_radius * 0.06
    denominator = 2 * allowable_stress * joint_efficiency - 0.2 * pressure
    if denominator <= 0:
        return math.inf
    M = 0.25 * (3 + math.sqrt(crown_radius / r)) if r > 0 else 1.0
    return pressure * crown_radius * M / denominator


def calculate_hemispherical_head_minimum_thickness(pressure: float, radius: float,
                                                   allowable_stress: float, joint_efficiency: float) -> float:
    """
    Hemispherical head (UG-32(f)).
    t_min = PR / (2SE - 0.2P)
    """
    denominator = 2 * allowable_stress * joint_efficiency - 0.2 * pressure
    if denominator <= 0:
        return math.inf
    return pressure * radius / denominator


def calculate_shell_mawp(thickness: float, radius: float,
                         allowable_stress: float, joint_efficiency: float) -> float:
    """P = SEt / (R + 0.6t)"""
    denominator = radius + 0.6 * thickness
    if denominator <= 0 or thickness == 0:
        return 0.0
    return allowable_stress * joint_efficiency * thickness / denominator


def calculate_ellipsoidal_head_mawp(thickness: float, diameter: float,
                                    allowable_stress: float, joint_efficiency: float) -> float:
    """P = 2SEt / (D + 0.2t)"""
    denominator = diameter + 0.2 * thickness
    if denominator <= 0 or thickness == 0:
        return 0.0
    return 2 * allowable_stress * joint_efficiency * thickness / denominator


def calculate_hemispherical_head_mawp(thickness: float, radius: float,
                                      allowable_stress: float, joint_efficiency: float) -> float:
    """P = 2SEt / (R + 0.2t)"""
    denominator = radius + 0.2 * thickness
    if denominator <= 0 or thickness == 0:
        return 0.0
    return 2 * allowable_stress * joint_efficiency * thickness / denominator


def calculate_derated_mawp(actual_thickness: float, radius: float, allowable_stress: float,
                           joint_efficiency: float, component_type: str = 'shell') -> float:
    """
    De-rated MAWP at the measured thickness, used once a component is below
    its minimum thickness. Heads are rated as 2:1 ellipsoidal.
    """
    if component_type == 'shell':
        return calculate_shell_mawp(actual_thickness, radius, allowable_stress, joint_efficiency)
    return calculate_ellipsoidal_head_mawp(actual_thickness, radius * 2, allowable_stress, joint_efficiency)


def _is_head(component) -> bool:
    if isinstance(component, ComponentKind):
        return component.is_head
    return component == 'head'


def minimum_thickness_for(component, head_type, pressure: float, inside_diameter: float,
                          allowable_stress: float, joint_efficiency: float,
                          crown_radius: Optional[float] = None,
                          knuckle_radius: Optional[float] = None) -> float:
    """
    Minimum thickness with head-type-aware branching.

    Parameters:
    - component: ComponentKind, or one of 'shell', 'head', 'nozzle'
    - head_type: HeadType (or its string value); ignored for non-head components
    - crown_radius: torispherical crown radius, defaults to the inside diameter
    """
    radius = inside_diameter / 2
    if not _is_head(component):
        return calculate_shell_minimum_thickness(pressure, radius, allowable_stress, joint_efficiency)

    head_type = parse_head_type(head_type)
    if head_type is HeadType.HEMISPHERICAL:
        return calculate_hemispherical_head_minimum_thickness(
            pressure, radius, allowable_stress, joint_efficiency)
    if head_type is HeadType.TORISPHERICAL:
        return calculate_torispherical_head_minimum_thickness(
            pressure, crown_radius or inside_diameter, allowable_stress, joint_efficiency, knuckle_radius)
    return calculate_ellipsoidal_head_minimum_thickness(
        pressure, inside_diameter, allowable_stress, joint_efficiency)


def mawp_for(component, head_type, thickness: float, inside_diameter: float,
             allowable_stress: float, joint_efficiency: float) -> float:
    """MAWP with head-type-aware branching. Torispherical heads are rated as ellipsoidal."""
    radius = inside_diameter / 2
    if not _is_head(component):
        return calculate_shell_mawp(thickness, radius, allowable_stress, joint_efficiency)

    if parse_head_type(head_type) is HeadType.HEMISPHERICAL:
        return calculate_hemispherical_head_mawp(thickness, radius, allowable_stress, joint_efficiency)
    return calculate_ellipsoidal_head_mawp(thickness, inside_diameter, allowable_stress, joint_efficiency)
