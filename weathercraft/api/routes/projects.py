"""
Project API Routes
Job-site catalog and per-site weather decisions
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from weathercraft.api.deps import get_config_engine, get_outlook_service, require_project
from weathercraft.domain.models import Project
from weathercraft.domain.schemas.compliance import (
    ComplianceResponse,
    assembly_result_response,
    conditions_response,
)
from weathercraft.domain.schemas.forecast import (
    DailySuitabilityResponse,
    InsightResponse,
    InsightsResponse,
    PackageWindowResponse,
    RiskAssessmentResponse,
    ScheduleRecommendationResponse,
    WorkPackagePlanResponse,
)
from weathercraft.domain.services.config_engine import ConfigEngine
from weathercraft.domain.services.winter_planner import WinterPlanner
from weathercraft.infrastructure.weather.types import WeatherProviderError
from weathercraft.services.site_outlook_service import SiteOutlook, SiteOutlookService

logger = logging.getLogger(__name__)
router = APIRouter()


# Response models
class ProjectInfo(BaseModel):
    id: str
    name: str
    location: str
    lat: float
    lon: float
    default_materials: List[str]


class ComponentInfo(BaseModel):
    id: str
    name: str
    min_temp: Optional[float] = None
    max_temp: Optional[float] = None
    must_be_rising: bool
    no_precipitation: bool
    max_wind_speed: Optional[float] = None
    max_humidity: Optional[float] = None
    cure_time_hours: Optional[float] = None
    critical_note: Optional[str] = None


class AssemblyInfo(BaseModel):
    id: str
    name: str
    description: str
    scope_type: str
    min_lead_time_days: int
    min_work_window_hours: int
    components: List[ComponentInfo]


def _project_info(project: Project) -> ProjectInfo:
    return ProjectInfo(
        id=project.id,
        name=project.name,
        location=project.location,
        lat=project.lat,
        lon=project.lon,
        default_materials=list(project.default_materials),
    )


async def _outlook(project: Project, service: SiteOutlookService) -> SiteOutlook:
    try:
        return await service.get_outlook(project)
    except WeatherProviderError as exc:
        logger.error(f"Outlook failed for {project.id}: {exc}")
        raise HTTPException(status_code=500, detail=str(exc))


# ======================
# Catalog
# ======================

@router.get("/projects", response_model=List[ProjectInfo])
async def list_projects(config_engine: ConfigEngine = Depends(get_config_engine)):
    return [_project_info(p) for p in config_engine.projects]


@router.get("/assemblies", response_model=List[AssemblyInfo])
async def list_assemblies(config_engine: ConfigEngine = Depends(get_config_engine)):
    """Roofing assemblies with their component weather constraints"""
    return [
        AssemblyInfo(
            id=a.id,
            name=a.name,
            description=a.description,
            scope_type=a.scope_type.value,
            min_lead_time_days=a.min_lead_time_days,
            min_work_window_hours=a.min_work_window_hours,
            components=[
                ComponentInfo(
                    id=c.id,
                    name=c.name,
                    min_temp=c.constraint.min_temp,
                    max_temp=c.constraint.max_temp,
                    must_be_rising=c.constraint.must_be_rising,
                    no_precipitation=c.constraint.no_precipitation,
                    max_wind_speed=c.constraint.max_wind_speed,
                    max_humidity=c.constraint.max_humidity,
                    cure_time_hours=c.constraint.cure_time_hours,
                    critical_note=c.critical_note,
                )
                for c in a.components
            ],
        )
        for a in config_engine.assemblies
    ]


# ======================
# Site decisions
# ======================

@router.get("/projects/{project_id}/compliance", response_model=ComplianceResponse)
async def get_compliance(
    project_id: str,
    config_engine: ConfigEngine = Depends(get_config_engine),
    service: SiteOutlookService = Depends(get_outlook_service),
):
    """
    Go / hold per assembly right now

    Includes work-window length, lead-time confirmation and the labor green light.
    """
    project = require_project(config_engine, project_id)
    outlook = await _outlook(project, service)
    return ComplianceResponse(
        project_id=project.id,
        generated_at=outlook.generated_at,
        conditions=conditions_response(outlook.conditions),
        assemblies=[assembly_result_response(r) for r in outlook.assembly_results],
    )


@router.get("/projects/{project_id}/risk", response_model=List[RiskAssessmentResponse])
async def get_risk(
    project_id: str,
    config_engine: ConfigEngine = Depends(get_config_engine),
    service: SiteOutlookService = Depends(get_outlook_service),
):
    project = require_project(config_engine, project_id)
    outlook = await _outlook(project, service)
    return [
        RiskAssessmentResponse(
            date=r.date,
            day_name=r.day_name,
            risk_score=r.risk_score,
            overall_risk=r.overall_risk.value,
            factors=list(r.factors),
            best_work_window=r.best_work_window,
        )
        for r in outlook.risk_assessments
    ]


@router.get("/projects/{project_id}/schedule", response_model=List[ScheduleRecommendationResponse])
async def get_schedule(
    project_id: str,
    config_engine: ConfigEngine = Depends(get_config_engine),
    service: SiteOutlookService = Depends(get_outlook_service),
):
    project = require_project(config_engine, project_id)
    outlook = await _outlook(project, service)
    return [
        ScheduleRecommendationResponse(
            assembly=r.assembly,
            recommended_day=r.recommended_day,
            confidence=r.confidence,
            reason=r.reason,
            alternate_day=r.alternate_day,
            work_window=r.work_window,
        )
        for r in outlook.recommendations
    ]


@router.get("/projects/{project_id}/insights", response_model=InsightsResponse)
async def get_insights(
    project_id: str,
    config_engine: ConfigEngine = Depends(get_config_engine),
    service: SiteOutlookService = Depends(get_outlook_service),
):
    project = require_project(config_engine, project_id)
    outlook = await _outlook(project, service)
    return InsightsResponse(
        project_id=project.id,
        summary=outlook.summary,
        insights=[
            InsightResponse(
                id=i.id,
                type=i.type.value,
                priority=i.priority,
                title=i.title,
                description=i.description,
                reasoning=i.reasoning,
                action_items=list(i.action_items),
            )
            for i in outlook.insights
        ],
    )


@router.get("/projects/{project_id}/winter-plan", response_model=List[WorkPackagePlanResponse])
async def get_winter_plan(
    project_id: str,
    config_engine: ConfigEngine = Depends(get_config_engine),
    service: SiteOutlookService = Depends(get_outlook_service),
):
    """Cold-weather work windows and daily go/caution/hold per work package"""
    project = require_project(config_engine, project_id)
    try:
        forecast = await service.provider.get_forecast(project.lat, project.lon)
    except WeatherProviderError as exc:
        logger.error(f"Winter plan forecast failed for {project.id}: {exc}")
        raise HTTPException(status_code=500, detail=str(exc))

    dailies = service.normalizer.group_forecast_by_day(forecast, service.tz)
    planner = WinterPlanner()
    plans = []
    for package in config_engine.work_packages:
        windows = planner.find_work_windows(forecast, package)
        daily = planner.build_daily_suitability(dailies, package, service.forecast_days)
        plans.append(WorkPackagePlanResponse(
            package_id=package.id,
            name=package.name,
            required_hours=package.required_hours,
            lead_time_hours=package.lead_time_hours,
            windows=[
                PackageWindowResponse(
                    start=w.start,
                    end=w.end,
                    duration_hours=w.duration_hours,
                    avg_temp=w.avg_temp,
                    max_wind=w.max_wind,
                    max_precip=w.max_precip,
                    confidence=w.confidence,
                )
                for w in windows
            ],
            daily=[
                DailySuitabilityResponse(date=d.date, status=d.status.value, reasons=list(d.reasons))
                for d in daily
            ],
        ))
    return plans
