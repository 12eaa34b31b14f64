"""
Core functionality for the vessel integrity calculation engine.
"""
from .formulas import (
    calculate_shell_minimum_thickness,
    calculate_ellipsoidal_head_minimum_thickness,
    calculate_torispherical_head_minimum_thickness,
    calculate_hemispherical_head_minimum_thickness,
    calculate_shell_mawp,
    calculate_ellipsoidal_head_mawp,
    calculate_hemispherical_head_mawp,
    calculate_derated_mawp,
)
from .material_stress import MaterialStressTable
from .nozzles import calculate_nozzle_minimum_thickness
from .models import (
    CalculationInput,
    CalculationResult,
    ComponentId,
    ComponentKind,
    ComponentStatus,
    HeadType,
    NozzleRecord,
    ThicknessReading,
    VesselDesign,
)
