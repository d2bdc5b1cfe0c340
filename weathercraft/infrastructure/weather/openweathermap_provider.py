"""
OpenWeatherMap Provider
Current conditions and 5-day / 3-hour forecast in imperial units.
"""

from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional

import httpx

from weathercraft.domain.models import WeatherSample
from weathercraft.infrastructure.weather.types import WeatherProviderError
from weathercraft.utils.time import from_unix

logger = logging.getLogger(__name__)

CURRENT_TTL_SECONDS = 300
FORECAST_TTL_SECONDS = 1800


class OpenWeatherMapProvider:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.openweathermap.org/data/2.5",
        current_ttl_seconds: int = CURRENT_TTL_SECONDS,
        forecast_ttl_seconds: int = FORECAST_TTL_SECONDS,
        timeout_seconds: float = 15.0,
    ):
        self.api_key = (api_key or "").strip() or None
        self.base_url = base_url.rstrip("/")
        self.current_ttl_seconds = current_ttl_seconds
        self.forecast_ttl_seconds = forecast_ttl_seconds
        self.timeout_seconds = timeout_seconds
        self._cache: Dict[str, tuple[float, object]] = {}

    def _cache_get(self, key: str, ttl: int) -> Optional[object]:
        cached = self._cache.get(key)
        if not cached:
            return None
        ts, value = cached
        if time.time() - ts > ttl:
            return None
        return value

    def _cache_set(self, key: str, value: object) -> None:
        self._cache[key] = (time.time(), value)

    async def _request_json(self, path: str, lat: float, lon: float) -> dict:
        if not self.api_key:
            raise WeatherProviderError("OPENWEATHERMAP_API_KEY not configured")

        params = {"lat": lat, "lon": lon, "units": "imperial", "appid": self.api_key}
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning(f"Weather request failed: {exc}")
            raise WeatherProviderError(f"Weather request failed: {exc}") from exc

        if response.status_code != 200:
            logger.warning(f"Weather API {response.status_code}: {response.text[:200]}")
            raise WeatherProviderError(
                f"Weather API error: {response.status_code}",
                status_code=response.status_code,
            )
        return response.json()

    # ------------------------------------------------------------------
    # CURRENT
    # ------------------------------------------------------------------

    async def get_current(self, lat: float, lon: float) -> WeatherSample:
        cache_key = f"current:{lat}:{lon}"
        cached = self._cache_get(cache_key, self.current_ttl_seconds)
        if cached is not None:
            return cached  # type: ignore[return-value]

        data = await self._request_json("weather", lat, lon)
        sample = self._parse_sample(data, precip_probability=0.0)
        self._cache_set(cache_key, sample)
        return sample

    # ------------------------------------------------------------------
    # FORECAST
    # ------------------------------------------------------------------

    async def get_forecast(self, lat: float, lon: float) -> List[WeatherSample]:
        cache_key = f"forecast:{lat}:{lon}"
        cached = self._cache_get(cache_key, self.forecast_ttl_seconds)
        if cached is not None:
            return cached  # type: ignore[return-value]

        data = await self._request_json("forecast", lat, lon)
        samples = [
            self._parse_sample(item, precip_probability=item.get("pop") or 0.0)
            for item in data.get("list", [])
        ]
        samples.sort(key=lambda sample: sample.timestamp)
        self._cache_set(cache_key, samples)
        return samples

    @staticmethod
    def _parse_sample(item: dict, precip_probability: float) -> WeatherSample:
        main = item.get("main", {})
        wind = item.get("wind", {})
        weather = (item.get("weather") or [{}])[0]
        try:
            return WeatherSample(
                timestamp=from_unix(item["dt"]),
                temp=float(main["temp"]),
                humidity=float(main["humidity"]),
                wind_speed=float(wind.get("speed", 0.0)),
                description=weather.get("description", ""),
                precip_probability=float(precip_probability),
                feels_like=main.get("feels_like"),
                temp_min=main.get("temp_min"),
                temp_max=main.get("temp_max"),
                wind_deg=wind.get("deg"),
                icon=weather.get("icon", ""),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise WeatherProviderError(f"Malformed weather payload: {exc}") from exc
