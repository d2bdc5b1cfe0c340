from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class WorkLogEntryRequest(BaseModel):
    labor_hours: float = Field(ge=0)
    categories: Dict[str, float] = Field(default_factory=dict)


class WorkLogEntryResponse(BaseModel):
    date: date
    labor_hours: float
    categories: Dict[str, float]


class WorkLogStatsResponse(BaseModel):
    total_days: int
    total_labor_hours: float
    average_hours_per_day: float
    work_streak: int
    days_since_last_work: Optional[int] = None
    first_worked_date: Optional[date] = None
    last_worked_date: Optional[date] = None
    months: List[str]
