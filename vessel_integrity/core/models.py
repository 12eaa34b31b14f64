"""
Data model for vessel component calculations.
"""
import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class ComponentKind(Enum):
    """Vessel components tracked by an inspection"""
    SHELL = "shell"
    EAST_HEAD = "east_head"
    WEST_HEAD = "west_head"
    NOZZLE = "nozzle"

    @property
    def is_head(self) -> bool:
        return self in (ComponentKind.EAST_HEAD, ComponentKind.WEST_HEAD)


class HeadType(Enum):
    """Supported formed-head geometries"""
    ELLIPSOIDAL = "ellipsoidal"
    TORISPHERICAL = "torispherical"
    HEMISPHERICAL = "hemispherical"


class ComponentStatus(Enum):
    """Ordered condition classes, most severe first"""
    BELOW_MINIMUM = "BELOW_MINIMUM"
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    ACCEPTABLE = "ACCEPTABLE"

    @property
    def message(self) -> str:
        return STATUS_MESSAGES[self]

    @property
    def requires_alert(self) -> bool:
        return self in (ComponentStatus.BELOW_MINIMUM, ComponentStatus.CRITICAL)


STATUS_MESSAGES = {
    ComponentStatus.BELOW_MINIMUM: "UNSAFE - BELOW MINIMUM THICKNESS",
    ComponentStatus.CRITICAL: "CRITICAL - Less than 2 years remaining life",
    ComponentStatus.WARNING: "WARNING - Less than 5 years remaining life",
    ComponentStatus.ACCEPTABLE: "ACCEPTABLE",
}

# Free-text component tags seen on inspection sheets
COMPONENT_ALIASES = {
    "shell": ComponentKind.SHELL,
    "vessel shell": ComponentKind.SHELL,
    "cylinder": ComponentKind.SHELL,
    "east_head": ComponentKind.EAST_HEAD,
    "east head": ComponentKind.EAST_HEAD,
    "e head": ComponentKind.EAST_HEAD,
    "head 1": ComponentKind.EAST_HEAD,
    "top head": ComponentKind.EAST_HEAD,
    "west_head": ComponentKind.WEST_HEAD,
    "west head": ComponentKind.WEST_HEAD,
    "w head": ComponentKind.WEST_HEAD,
    "head 2": ComponentKind.WEST_HEAD,
    "bottom head": ComponentKind.WEST_HEAD,
    "nozzle": ComponentKind.NOZZLE,
    "nozzles": ComponentKind.NOZZLE,
    "connection": ComponentKind.NOZZLE,
}

VESSEL_BODY_COMPONENTS = (ComponentKind.SHELL, ComponentKind.EAST_HEAD, ComponentKind.WEST_HEAD)


def parse_component_kind(tag) -> ComponentKind:
    """Map a component tag onto ComponentKind. Blank tags count as shell."""
    if isinstance(tag, ComponentKind):
        return tag
    if tag is None or str(tag).strip() == "":
        return ComponentKind.SHELL
    cleaned = str(tag).strip().lower().replace("-", " ")
    if cleaned in COMPONENT_ALIASES:
        return COMPONENT_ALIASES[cleaned]
    cleaned = cleaned.replace(" ", "_")
    if cleaned in COMPONENT_ALIASES:
        return COMPONENT_ALIASES[cleaned]
    raise ValueError(f"Unknown component type: {tag!r}")


def parse_head_type(value) -> HeadType:
    """Blank head types default to 2:1 ellipsoidal."""
    if isinstance(value, HeadType):
        return value
    if value is None or str(value).strip() == "":
        return HeadType.ELLIPSOIDAL
    cleaned = str(value).strip().lower()
    for head_type in HeadType:
        if cleaned.startswith(head_type.value[:5]):
            return head_type
    if "2:1" in cleaned or "elliptical" in cleaned:
        return HeadType.ELLIPSOIDAL
    if "f&d" in cleaned or "flanged" in cleaned:
        return HeadType.TORISPHERICAL
    raise ValueError(f"Unknown head type: {value!r}")


def normalize_nozzle_id(value) -> Optional[str]:
    """Canonical nozzle id text. Spreadsheet floats such as 1.0 become '1'."""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class ComponentId:
    """Identity of one tracked component: a canonical body part or one nozzle."""
    kind: ComponentKind
    nozzle_id: Optional[str] = None

    def __post_init__(self):
        if self.kind is ComponentKind.NOZZLE and not self.nozzle_id:
            raise ValueError("Nozzle components require a nozzle_id")
        if self.kind is not ComponentKind.NOZZLE and self.nozzle_id is not None:
            raise ValueError(f"{self.kind.value} components do not take a nozzle_id")

    @classmethod
    def shell(cls) -> "ComponentId":
        return cls(ComponentKind.SHELL)

    @classmethod
    def east_head(cls) -> "ComponentId":
        return cls(ComponentKind.EAST_HEAD)

    @classmethod
    def west_head(cls) -> "ComponentId":
        return cls(ComponentKind.WEST_HEAD)

    @classmethod
    def nozzle(cls, nozzle_id: str) -> "ComponentId":
        return cls(ComponentKind.NOZZLE, normalize_nozzle_id(nozzle_id))

    @property
    def key(self) -> str:
        if self.kind is ComponentKind.NOZZLE:
            return f"nozzle:{self.nozzle_id}"
        return self.kind.value

    @classmethod
    def from_key(cls, key: str) -> "ComponentId":
        if key.startswith("nozzle:"):
            return cls.nozzle(key.split(":", 1)[1])
        return cls(ComponentKind(key))

    @property
    def display_name(self) -> str:
        if self.kind is ComponentKind.SHELL:
            return "Vessel Shell"
        if self.kind is ComponentKind.EAST_HEAD:
            return "East Head"
        if self.kind is ComponentKind.WEST_HEAD:
            return "West Head"
        return f"Nozzle {self.nozzle_id}"


@dataclass
class CalculationInput:
    """Inputs for one component calculation (psi, °F, inches, years)"""
    design_pressure: float
    design_temperature: float
    inside_diameter: float
    allowable_stress: float
    joint_efficiency: float
    actual_thickness: float
    previous_thickness: Optional[float] = None
    nominal_thickness: Optional[float] = None
    initial_thickness: Optional[float] = None
    corrosion_allowance: Optional[float] = None
    time_span: Optional[float] = None        # years since previous inspection
    total_time_span: Optional[float] = None  # years since initial thickness
    component_type: str = "shell"            # 'shell', 'head' or 'nozzle'
    head_type: HeadType = HeadType.ELLIPSOIDAL
    crown_radius: Optional[float] = None
    knuckle_radius: Optional[float] = None

    def __post_init__(self):
        self.head_type = parse_head_type(self.head_type)
        if self.component_type not in ("shell", "head", "nozzle"):
            raise ValueError(f"Unknown component type: {self.component_type!r}")

        errors = []
        if not 0 < self.joint_efficiency <= 1:
            errors.append(f"joint efficiency {self.joint_efficiency} must be in (0, 1]")
        for name in ("allowable_stress", "actual_thickness", "previous_thickness",
                     "nominal_thickness", "initial_thickness", "corrosion_allowance"):
            value = getattr(self, name)
            if value is not None and value < 0:
                errors.append(f"{name} {value} must not be negative")
        if errors:
            raise ValueError("Invalid calculation input:\n" + "\n".join(errors))


@dataclass(frozen=True)
class CalculationResult:
    """Ratified calculation for one component; replaced, never updated."""
    minimum_thickness: float
    calculated_mawp: float
    corrosion_rate: float
    corrosion_rate_lt: float
    corrosion_rate_st: float
    governing_rate: str            # 'LT' or 'ST'
    governing_rate_reason: str
    remaining_life: float
    next_inspection_years: float
    next_inspection_date: date
    is_below_minimum: bool
    status: ComponentStatus
    component: Optional[ComponentId] = None
    actual_thickness: Optional[float] = None
    previous_thickness: Optional[float] = None
    time_span: Optional[float] = None
    anomaly_note: str = ""

    @property
    def status_message(self) -> str:
        return self.status.message

    @property
    def component_name(self) -> str:
        return self.component.display_name if self.component else ""


@dataclass
class ThicknessReading:
    """One CML/TML measurement location"""
    component_type: ComponentKind = ComponentKind.SHELL
    cml_number: Optional[str] = None
    location: Optional[str] = None
    nozzle_id: Optional[str] = None
    tml_1: Optional[float] = None
    tml_2: Optional[float] = None
    tml_3: Optional[float] = None
    tml_4: Optional[float] = None
    previous_thickness: Optional[float] = None
    actual_thickness: Optional[float] = None
    nominal_thickness: Optional[float] = None
    minimum_thickness: Optional[float] = None

    def __post_init__(self):
        self.component_type = parse_component_kind(self.component_type)
        self.nozzle_id = normalize_nozzle_id(self.nozzle_id)


@dataclass
class MaterialStressPoint:
    material_spec: str
    temperature: float    # °F
    allowable_stress: float  # psi


@dataclass
class VesselDesign:
    """Vessel design record driving one aggregation run"""
    vessel_tag: Optional[str] = None
    design_pressure: Optional[float] = None
    design_temperature: Optional[float] = None
    inside_diameter: Optional[float] = None
    material_spec: Optional[str] = None
    allowable_stress: Optional[float] = None
    joint_efficiency: Optional[float] = None
    nominal_thickness: Optional[float] = None
    head_type: Optional[str] = None
    inspection_date: Optional[date] = None
    previous_inspection_date: Optional[date] = None
    total_time_span: Optional[float] = None
    nozzle_joint_efficiency: Optional[float] = None


@dataclass
class NozzleRecord:
    """One nozzle evaluation, tracked independently of the vessel body"""
    nozzle_id: str
    size: Optional[str] = None
    schedule: Optional[str] = None
    service_type: Optional[str] = None
    nominal_thickness: Optional[float] = None
    previous_thickness: Optional[float] = None
    actual_thickness: Optional[float] = None
    minimum_thickness: Optional[float] = None

    def __post_init__(self):
        self.nozzle_id = normalize_nozzle_id(self.nozzle_id)

    @property
    def component(self) -> ComponentId:
        return ComponentId.nozzle(self.nozzle_id)


@dataclass
class CriticalityAlert:
    """Single notification payload for one aggregation run"""
    vessel_tag: Optional[str]
    inspection_id: Optional[str]
    components: List[str] = field(default_factory=list)

    @property
    def title(self) -> str:
        return f"CRITICAL: Vessel {self.vessel_tag or 'Unknown'} requires attention"

    @property
    def content(self) -> str:
        return (f"Components with critical conditions: {', '.join(self.components)}. "
                "Status: Below minimum thickness or remaining life < 2 years.")
