from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from weathercraft.domain.models import AssemblyResult, WeatherConditions


class ConditionsResponse(BaseModel):
    temp: float
    temp_trend: str
    wind_speed: float
    humidity: float
    is_precipitating: bool
    precip_probability: int


class ComponentResultResponse(BaseModel):
    component_id: str
    name: str
    compliant: bool
    reasons: List[str]
    critical_note: Optional[str] = None


class WorkWindowResponse(BaseModel):
    start: datetime
    duration_hours: int


class AssemblyResultResponse(BaseModel):
    assembly_id: str
    name: str
    scope_type: str
    compliant: bool
    labor_green_light: bool
    has_full_work_window: bool
    has_required_lead_time: bool
    work_window_hours: int
    min_work_window_hours: int
    min_lead_time_days: int
    status_message: str
    next_work_window: Optional[WorkWindowResponse] = None
    failing_components: List[str]
    components: List[ComponentResultResponse]


class ComplianceResponse(BaseModel):
    project_id: str
    generated_at: datetime
    conditions: ConditionsResponse
    assemblies: List[AssemblyResultResponse]


def conditions_response(conditions: WeatherConditions) -> ConditionsResponse:
    return ConditionsResponse(
        temp=conditions.temp,
        temp_trend=conditions.temp_trend.value,
        wind_speed=conditions.wind_speed,
        humidity=conditions.humidity,
        is_precipitating=conditions.is_precipitating,
        precip_probability=conditions.precip_probability,
    )


def assembly_result_response(result: AssemblyResult) -> AssemblyResultResponse:
    window = result.next_work_window
    return AssemblyResultResponse(
        assembly_id=result.assembly.id,
        name=result.assembly.name,
        scope_type=result.assembly.scope_type.value,
        compliant=result.compliant,
        labor_green_light=result.labor_green_light,
        has_full_work_window=result.has_full_work_window,
        has_required_lead_time=result.has_required_lead_time,
        work_window_hours=result.work_window_hours,
        min_work_window_hours=result.assembly.min_work_window_hours,
        min_lead_time_days=result.assembly.min_lead_time_days,
        status_message=result.status_message,
        next_work_window=(
            WorkWindowResponse(start=window.start, duration_hours=window.duration_hours)
            if window else None
        ),
        failing_components=[c.name for c in result.failing_components],
        components=[
            ComponentResultResponse(
                component_id=r.component.id,
                name=r.component.name,
                compliant=r.compliant,
                reasons=list(r.reasons),
                critical_note=r.component.critical_note,
            )
            for r in result.component_results
        ],
    )
