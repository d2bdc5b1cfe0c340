"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    InsightType,
    MaterialCategory,
    RiskLevel,
    ScopeType,
    SuitabilityStatus,
    TempTrend,

    # Constraint model
    Assembly,
    AssemblyCatalog,
    Component,
    Material,
    Project,
    WeatherConstraint,

    # Weather inputs
    DailyForecast,
    WeatherConditions,
    WeatherSample,

    # Results
    AssemblyResult,
    ComplianceCheck,
    ComponentResult,
    DailyRiskAssessment,
    Insight,
    ScheduleRecommendation,
    WorkWindow,

    # Winter planning
    DailySuitability,
    PackageWindow,
    WorkPackage,

    # Work log
    WorkLogEntry,
    WorkLogStats,
)

__all__ = [
    # Enums
    "InsightType",
    "MaterialCategory",
    "RiskLevel",
    "ScopeType",
    "SuitabilityStatus",
    "TempTrend",

    # Constraint model
    "Assembly",
    "AssemblyCatalog",
    "Component",
    "Material",
    "Project",
    "WeatherConstraint",

    # Weather inputs
    "DailyForecast",
    "WeatherConditions",
    "WeatherSample",

    # Results
    "AssemblyResult",
    "ComplianceCheck",
    "ComponentResult",
    "DailyRiskAssessment",
    "Insight",
    "ScheduleRecommendation",
    "WorkWindow",

    # Winter planning
    "DailySuitability",
    "PackageWindow",
    "WorkPackage",

    # Work log
    "WorkLogEntry",
    "WorkLogStats",
]
