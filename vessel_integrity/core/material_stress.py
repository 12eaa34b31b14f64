"""
Temperature-dependent allowable stress lookup (ASME Section II Part D tables).
"""
import logging
import math
from typing import Iterable, List, Optional, Union

import pandas as pd

from vessel_integrity.core.models import MaterialStressPoint

logger = logging.getLogger(__name__)

STRESS_TABLE_COLUMNS = ["material_spec", "temperature", "allowable_stress"]


class MaterialStressTable:
    """
    Per-material piecewise-linear allowable stress curves.

    Temperatures must be unique within a material; rows may arrive in any
    order and are sorted on construction.
    """

    def __init__(self, points: Union[pd.DataFrame, Iterable[MaterialStressPoint]]):
        if isinstance(points, pd.DataFrame):
            df = points.copy()
        else:
            df = pd.DataFrame(
                [(p.material_spec, p.temperature, p.allowable_stress) for p in points],
                columns=STRESS_TABLE_COLUMNS,
            )

        missing = [col for col in STRESS_TABLE_COLUMNS if col not in df.columns]
        if missing:
            raise ValueError(f"Stress table missing columns: {missing}")

        df = df[STRESS_TABLE_COLUMNS].copy()
        df["material_spec"] = df["material_spec"].astype(str).str.strip()
        df[["temperature", "allowable_stress"]] = df[["temperature", "allowable_stress"]].apply(
            pd.to_numeric, errors='coerce')

        errors = []
        invalid = df[df[["temperature", "allowable_stress"]].isna().any(axis=1)]
        if not invalid.empty:
            errors.append(f"{len(invalid)} rows have non-numeric temperature or stress")
        if (df["allowable_stress"] < 0).any():
            errors.append("Allowable stress values must not be negative")
        duplicated = df[df.duplicated(subset=["material_spec", "temperature"], keep=False)]
        if not duplicated.empty:
            pairs = duplicated[["material_spec", "temperature"]].drop_duplicates().values.tolist()
            errors.append(f"Duplicate temperatures for materials: {pairs[:5]}")
        if errors:
            raise ValueError("Stress table validation failed:\n" + "\n".join(errors))

        self._df = df.sort_values(["material_spec", "temperature"]).reset_index(drop=True)
        logger.debug(f"Loaded {len(self._df)} stress points for {self._df['material_spec'].nunique()} materials")

    def __len__(self):
        return len(self._df)

    def list_materials(self) -> List[str]:
        return sorted(self._df["material_spec"].unique().tolist())

    def curve(self, material_spec: str) -> pd.DataFrame:
        """Tabulated (temperature, allowable_stress) points for one material, ascending."""
        curve = self._df[self._df["material_spec"] == material_spec.strip()]
        return curve[["temperature", "allowable_stress"]].reset_index(drop=True)

    def lookup(self, material_spec: str, temperature: float) -> Optional[float]:
        """
        Allowable stress at a temperature, or None when the material has no points.

        Between two tabulated temperatures the stress is linearly interpolated
        and rounded to the nearest whole psi. Outside the tabulated range the
        nearest bound is returned unchanged; there is no extrapolation.
        """
        curve = self.curve(material_spec)
        if curve.empty:
            logger.warning(f"No allowable stress data for material '{material_spec}'")
            return None

        lower = curve[curve["temperature"] <= temperature]
        upper = curve[curve["temperature"] >= temperature]

        if lower.empty:
            return float(upper.iloc[0]["allowable_stress"])
        if upper.empty:
            return float(lower.iloc[-1]["allowable_stress"])

        t1, s1 = lower.iloc[-1]["temperature"], lower.iloc[-1]["allowable_stress"]
        t2, s2 = upper.iloc[0]["temperature"], upper.iloc[0]["allowable_stress"]
        if t1 == t2:
            return float(s1)

        return interpolate_stress(temperature, t1, s1, t2, s2)


def interpolate_stress(temperature: float, t1: float, s1: float, t2: float, s2: float) -> int:
    """Linear interpolation between two stress points, rounded half up to whole psi."""
    stress = s1 + (temperature - t1) / (t2 - t1) * (s2 - s1)
    return int(math.floor(stress + 0.5))
