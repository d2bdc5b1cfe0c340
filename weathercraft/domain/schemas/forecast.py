from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class WeatherSampleResponse(BaseModel):
    dt: int
    temp: float
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    humidity: float
    wind_speed: float
    wind_deg: Optional[float] = None
    description: str
    icon: str
    pop: float


class RiskAssessmentResponse(BaseModel):
    date: date
    day_name: str
    risk_score: int
    overall_risk: str
    factors: List[str]
    best_work_window: Optional[str] = None


class ScheduleRecommendationResponse(BaseModel):
    assembly: str
    recommended_day: str
    confidence: int
    reason: str
    alternate_day: Optional[str] = None
    work_window: Optional[str] = None


class InsightResponse(BaseModel):
    id: str
    type: str
    priority: int
    title: str
    description: str
    reasoning: str
    action_items: List[str]


class InsightsResponse(BaseModel):
    project_id: str
    summary: str
    insights: List[InsightResponse]


class PackageWindowResponse(BaseModel):
    start: datetime
    end: datetime
    duration_hours: int
    avg_temp: int
    max_wind: int
    max_precip: int
    confidence: int


class DailySuitabilityResponse(BaseModel):
    date: date
    status: str
    reasons: List[str]


class WorkPackagePlanResponse(BaseModel):
    package_id: str
    name: str
    required_hours: int
    lead_time_hours: int
    windows: List[PackageWindowResponse]
    daily: List[DailySuitabilityResponse]
