from datetime import date

import pandas as pd
import pytest

from vessel_integrity.core.material_stress import MaterialStressTable
from vessel_integrity.core.models import NozzleRecord, ThicknessReading, VesselDesign

INSPECTION_DATE = date(2024, 1, 1)
PREVIOUS_INSPECTION_DATE = date(2019, 1, 1)


@pytest.fixture
def today():
    return INSPECTION_DATE


@pytest.fixture
def vessel():
    """48 in ID horizontal drum, SA-516 70, 150 psi, spot RT."""
    return VesselDesign(
        vessel_tag="V-101",
        design_pressure=150,
        design_temperature=200,
        inside_diameter=48,
        material_spec="SA-516 70",
        allowable_stress=20000,
        joint_efficiency=0.85,
        nominal_thickness=0.5,
        head_type="ellipsoidal",
        inspection_date=INSPECTION_DATE,
        previous_inspection_date=PREVIOUS_INSPECTION_DATE,
    )


@pytest.fixture
def readings():
    return [
        ThicknessReading(component_type="shell", cml_number="1", tml_1=0.390, tml_2=0.375,
                         tml_3=0.381, tml_4=0.388, previous_thickness=0.400, actual_thickness=0.380),
        ThicknessReading(component_type="shell", cml_number="2", tml_1=0.402, tml_2=0.399,
                         previous_thickness=0.410, actual_thickness=0.399),
        ThicknessReading(component_type="east_head", cml_number="10", tml_1=0.195, tml_2=0.190,
                         previous_thickness=0.230, actual_thickness=0.190),
        ThicknessReading(component_type="nozzle", cml_number="N1-1", nozzle_id="N1",
                         tml_1=0.205, tml_2=0.200, previous_thickness=0.218),
    ]


@pytest.fixture
def nozzles():
    return [
        NozzleRecord(nozzle_id="N1", size='2"', schedule="80", service_type="Inlet",
                     nominal_thickness=0.218),
    ]


@pytest.fixture
def stress_table():
    """ASME II-D Table 1A, SA-516 Gr. 70 (psi) plus a second material."""
    return MaterialStressTable(pd.DataFrame({
        "material_spec": ["SA-516 70"] * 6 + ["SA-106 B"] * 3,
        "temperature": [100, 200, 300, 400, 500, 600, 100, 500, 650],
        "allowable_stress": [20000, 20000, 20000, 20000, 19400, 18100, 17100, 17100, 15000],
    }))
