"""
Weather provider protocol for type hints.
"""

from __future__ import annotations

from typing import List, Protocol

from weathercraft.domain.models import WeatherSample


class WeatherProvider(Protocol):
    async def get_current(self, lat: float, lon: float) -> WeatherSample:
        ...

    async def get_forecast(self, lat: float, lon: float) -> List[WeatherSample]:
        ...


class WeatherProviderError(RuntimeError):
    """Upstream weather data could not be obtained."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
