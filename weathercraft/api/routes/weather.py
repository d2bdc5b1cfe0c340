"""
Weather API Routes
Proxy for current conditions and the 3-hour forecast
"""

import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query

from weathercraft.api.deps import get_outlook_service
from weathercraft.domain.models import WeatherSample
from weathercraft.domain.schemas.forecast import WeatherSampleResponse
from weathercraft.infrastructure.weather.types import WeatherProviderError
from weathercraft.services.site_outlook_service import SiteOutlookService

logger = logging.getLogger(__name__)
router = APIRouter()


def sample_response(sample: WeatherSample) -> WeatherSampleResponse:
    return WeatherSampleResponse(
        dt=int(sample.timestamp.timestamp()),
        temp=sample.temp,
        feels_like=sample.feels_like,
        temp_min=sample.temp_min,
        temp_max=sample.temp_max,
        humidity=sample.humidity,
        wind_speed=sample.wind_speed,
        wind_deg=sample.wind_deg,
        description=sample.description,
        icon=sample.icon,
        pop=sample.precip_probability,
    )


@router.get("", response_model=Union[WeatherSampleResponse, List[WeatherSampleResponse]])
async def get_weather(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    kind: str = Query("current", alias="type", pattern="^(current|forecast)$"),
    service: SiteOutlookService = Depends(get_outlook_service),
):
    """
    Current conditions or forecast for a coordinate

    Query: lat, lon, type=current|forecast
    """
    if lat is None or lon is None:
        raise HTTPException(status_code=400, detail="Missing lat/lon parameters")

    try:
        if kind == "forecast":
            forecast = await service.provider.get_forecast(lat, lon)
            return [sample_response(s) for s in forecast]
        current = await service.provider.get_current(lat, lon)
        return sample_response(current)
    except WeatherProviderError as exc:
        logger.error(f"Weather lookup failed for ({lat}, {lon}): {exc}")
        raise HTTPException(status_code=500, detail=str(exc))
