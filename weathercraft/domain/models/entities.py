"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional


class TempTrend(str, Enum):
    """Direction of temperature movement"""
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


class RiskLevel(str, Enum):
    """Operational weather risk for a day"""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    CRITICAL = "critical"


class ScopeType(str, Enum):
    """Project phase an assembly belongs to"""
    DECK_PREP = "Deck Prep"
    BASE_SHEET = "Base Sheet"
    CAP_SHEET = "Cap Sheet"
    FLASHINGS = "Flashings"
    COATINGS = "Coatings"
    METAL_PANELS = "Metal Panels"


class MaterialCategory(str, Enum):
    """Material catalog grouping"""
    ROOFING_MOD_BIT = "Roofing (Mod. Bit.)"
    ROOFING_METAL = "Roofing (Metal)"
    ROOFING_COATINGS = "Roofing (Coatings)"
    HVAC = "HVAC"
    ELECTRICAL = "Electrical"
    GENERAL = "General"


class InsightType(str, Enum):
    """Kind of advisory insight"""
    RECOMMENDATION = "recommendation"
    WARNING = "warning"
    OPPORTUNITY = "opportunity"
    RISK = "risk"


class SuitabilityStatus(str, Enum):
    """Daily go/no-go status for a work package"""
    GO = "go"
    CAUTION = "caution"
    HOLD = "hold"


# ======================
# Constraint model
# ======================

@dataclass(frozen=True)
class WeatherConstraint:
    """Weather tolerances of one material - Immutable"""
    min_temp: Optional[float] = None
    max_temp: Optional[float] = None
    must_be_rising: bool = False
    no_precipitation: bool = False
    max_wind_speed: Optional[float] = None
    max_humidity: Optional[float] = None
    cure_time_hours: Optional[float] = None


@dataclass(frozen=True)
class Component:
    """One weather-sensitive material or step of an assembly"""
    id: str
    name: str
    description: str
    constraint: WeatherConstraint
    critical_note: Optional[str] = None

    def __post_init__(self):
        if not self.id:
            raise ValueError("Component id cannot be empty")


@dataclass(frozen=True)
class Assembly:
    """Roofing system whose components must all be installable together"""
    id: str
    name: str
    description: str
    components: tuple[Component, ...]
    scope_type: ScopeType
    min_lead_time_days: int
    min_work_window_hours: int

    def __post_init__(self):
        if not self.id:
            raise ValueError("Assembly id cannot be empty")
        if len(self.components) < 1:
            raise ValueError(f"Assembly {self.id} must have at least one component")
        if self.min_work_window_hours <= 0:
            raise ValueError(f"Assembly {self.id} minimum work window must be positive")
        if self.min_lead_time_days < 0:
            raise ValueError(f"Assembly {self.id} lead time cannot be negative")

    @property
    def lead_time_hours(self) -> int:
        return self.min_lead_time_days * 24


@dataclass(frozen=True)
class Material:
    """Catalog material with application and storage limits"""
    id: str
    name: str
    category: MaterialCategory
    description: str
    constraint: WeatherConstraint
    storage_temp_min: Optional[float] = None
    storage_temp_max: Optional[float] = None
    manufacturer_url: Optional[str] = None


@dataclass(frozen=True)
class Project:
    """Job site the forecast is fetched for"""
    id: str
    name: str
    lat: float
    lon: float
    location: str
    default_materials: tuple[str, ...] = ()


@dataclass(frozen=True)
class AssemblyCatalog:
    """Read-only set of assemblies and materials handed to the engines"""
    assemblies: tuple[Assembly, ...]
    materials: tuple[Material, ...] = ()

    def get_assembly(self, assembly_id: str) -> Optional[Assembly]:
        for assembly in self.assemblies:
            if assembly.id == assembly_id:
                return assembly
        return None

    def get_material(self, material_id: str) -> Optional[Material]:
        for material in self.materials:
            if material.id == material_id:
                return material
        return None


# ======================
# Weather inputs
# ======================

@dataclass(frozen=True)
class WeatherSample:
    """One current or forecast reading from the weather provider"""
    timestamp: datetime
    temp: float
    humidity: float
    wind_speed: float
    description: str
    precip_probability: float = 0.0  # 0.0 - 1.0
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    wind_deg: Optional[float] = None
    icon: str = ""


@dataclass(frozen=True)
class DailyForecast:
    """Forecast samples aggregated per calendar day"""
    date: date
    day_name: str
    high: float
    low: float
    avg_temp: float
    max_wind: float
    avg_humidity: int
    precip_probability: int  # 0 - 100
    conditions: str
    icon: str = ""
    hourly: tuple[WeatherSample, ...] = ()


@dataclass(frozen=True)
class WeatherConditions:
    """Canonical weather snapshot consumed by the evaluators"""
    temp: float
    temp_trend: TempTrend
    wind_speed: float
    humidity: float
    is_precipitating: bool
    precip_probability: int  # 0 - 100


# ======================
# Evaluation results
# ======================

@dataclass(frozen=True)
class ComponentResult:
    component: Component
    compliant: bool
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class WorkWindow:
    """Contiguous compliant forecast span"""
    start: datetime
    duration_hours: int


@dataclass(frozen=True)
class AssemblyResult:
    """Current compliance plus forecast window decision for one assembly"""
    assembly: Assembly
    compliant: bool
    component_results: tuple[ComponentResult, ...]
    failing_components: tuple[Component, ...]
    has_full_work_window: bool
    has_required_lead_time: bool
    work_window_hours: int
    labor_green_light: bool
    status_message: str
    next_work_window: Optional[WorkWindow] = None


@dataclass(frozen=True)
class ComplianceCheck:
    """Outcome of an id-based compliance lookup"""
    compliant: bool
    reasons: tuple[str, ...] = ()


@dataclass(frozen=True)
class DailyRiskAssessment:
    date: date
    day_name: str
    risk_score: int
    overall_risk: RiskLevel
    factors: tuple[str, ...]
    best_work_window: Optional[str] = None


@dataclass(frozen=True)
class ScheduleRecommendation:
    assembly: str
    recommended_day: str
    confidence: int
    reason: str
    alternate_day: Optional[str] = None
    work_window: Optional[str] = None


@dataclass(frozen=True)
class Insight:
    """Templated advisory message"""
    id: str
    type: InsightType
    priority: int  # 1 = highest
    title: str
    description: str
    reasoning: str
    action_items: tuple[str, ...] = field(default_factory=tuple)


# ======================
# Winter planning
# ======================

@dataclass(frozen=True)
class WorkPackage:
    """Schedulable unit of cold-weather work"""
    id: str
    name: str
    description: str
    constraint: WeatherConstraint
    required_hours: int
    lead_time_hours: int


@dataclass(frozen=True)
class PackageWindow:
    """Forecast slot range in which a work package can run"""
    start: datetime
    end: datetime
    duration_hours: int
    avg_temp: int
    max_wind: int
    max_precip: int
    confidence: int


@dataclass(frozen=True)
class DailySuitability:
    date: date
    status: SuitabilityStatus
    reasons: tuple[str, ...] = ()


# ======================
# Work log
# ======================

@dataclass(frozen=True)
class WorkLogEntry:
    """Labor hours recorded for one calendar day"""
    date: date
    labor_hours: float
    categories: dict = field(default_factory=dict, hash=False, compare=True)

    def __post_init__(self):
        if self.labor_hours < 0:
            raise ValueError("Labor hours cannot be negative")


@dataclass(frozen=True)
class WorkLogStats:
    total_days: int
    total_labor_hours: float
    average_hours_per_day: float
    work_streak: int
    days_since_last_work: Optional[int]
    first_worked_date: Optional[date] = None
    last_worked_date: Optional[date] = None
