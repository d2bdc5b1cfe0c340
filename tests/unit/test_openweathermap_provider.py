from datetime import datetime, timezone

import pytest

import weathercraft.infrastructure.weather.openweathermap_provider as owm_module
from weathercraft.infrastructure.weather.openweathermap_provider import OpenWeatherMapProvider
from weathercraft.infrastructure.weather.types import WeatherProviderError

CURRENT_PAYLOAD = {
    "dt": 1767625200,
    "main": {"temp": 47.3, "feels_like": 44.0, "temp_min": 45.0, "temp_max": 49.0, "humidity": 52},
    "wind": {"speed": 8.1, "deg": 270},
    "weather": [{"description": "scattered clouds", "icon": "03d"}],
}

FORECAST_PAYLOAD = {
    "list": [
        {
            "dt": 1767636000,
            "main": {"temp": 51.0, "humidity": 48},
            "wind": {"speed": 6.0},
            "weather": [{"description": "clear sky", "icon": "01d"}],
            "pop": 0.1,
        },
        {
            "dt": 1767625200,
            "main": {"temp": 49.0, "humidity": 50},
            "wind": {"speed": 7.0},
            "weather": [{"description": "light rain", "icon": "10d"}],
        },
    ]
}


def make_provider(**kwargs) -> OpenWeatherMapProvider:
    return OpenWeatherMapProvider(api_key="key", base_url="https://owm.test/data/2.5", **kwargs)


@pytest.mark.asyncio
async def test_current_parsing(monkeypatch):
    provider = make_provider()

    async def fake_request_json(path, lat, lon):
        assert path == "weather"
        return CURRENT_PAYLOAD

    monkeypatch.setattr(provider, "_request_json", fake_request_json)

    sample = await provider.get_current(38.8, -104.7)
    assert sample.timestamp == datetime.fromtimestamp(1767625200, tz=timezone.utc)
    assert sample.temp == 47.3
    assert sample.humidity == 52
    assert sample.wind_speed == 8.1
    assert sample.wind_deg == 270
    assert sample.description == "scattered clouds"
    assert sample.icon == "03d"
    assert sample.precip_probability == 0.0


@pytest.mark.asyncio
async def test_forecast_sorted_with_pop(monkeypatch):
    provider = make_provider()

    async def fake_request_json(path, lat, lon):
        return FORECAST_PAYLOAD

    monkeypatch.setattr(provider, "_request_json", fake_request_json)

    forecast = await provider.get_forecast(38.8, -104.7)
    assert [s.temp for s in forecast] == [49.0, 51.0]
    assert [s.precip_probability for s in forecast] == [0.0, 0.1]


@pytest.mark.asyncio
async def test_responses_cached_per_location(monkeypatch):
    provider = make_provider()
    calls = []

    async def fake_request_json(path, lat, lon):
        calls.append((path, lat, lon))
        return CURRENT_PAYLOAD

    monkeypatch.setattr(provider, "_request_json", fake_request_json)

    await provider.get_current(38.8, -104.7)
    await provider.get_current(38.8, -104.7)
    await provider.get_current(39.2, -106.8)
    assert calls == [("weather", 38.8, -104.7), ("weather", 39.2, -106.8)]


@pytest.mark.asyncio
async def test_current_and_forecast_expire_separately(monkeypatch):
    provider = make_provider(current_ttl_seconds=300, forecast_ttl_seconds=1800)
    calls = []
    clock = [1000.0]

    async def fake_request_json(path, lat, lon):
        calls.append(path)
        return CURRENT_PAYLOAD if path == "weather" else FORECAST_PAYLOAD

    monkeypatch.setattr(provider, "_request_json", fake_request_json)
    monkeypatch.setattr(owm_module.time, "time", lambda: clock[0])

    await provider.get_current(38.8, -104.7)
    await provider.get_forecast(38.8, -104.7)

    clock[0] += 600
    await provider.get_current(38.8, -104.7)
    await provider.get_forecast(38.8, -104.7)
    assert calls == ["weather", "forecast", "weather"]

    clock[0] += 1300
    await provider.get_forecast(38.8, -104.7)
    assert calls == ["weather", "forecast", "weather", "forecast"]


@pytest.mark.asyncio
async def test_malformed_payload(monkeypatch):
    provider = make_provider()

    async def fake_request_json(path, lat, lon):
        return {"dt": 1767625200, "main": {}}

    monkeypatch.setattr(provider, "_request_json", fake_request_json)

    with pytest.raises(WeatherProviderError):
        await provider.get_current(38.8, -104.7)


@pytest.mark.asyncio
async def test_missing_api_key():
    provider = OpenWeatherMapProvider(api_key="  ")
    with pytest.raises(WeatherProviderError, match="not configured"):
        await provider.get_current(38.8, -104.7)


@pytest.mark.asyncio
async def test_upstream_error_carries_status(monkeypatch):
    class FakeResponse:
        status_code = 401
        text = "Invalid API key"

        def json(self):
            return {}

    class FakeClient:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def get(self, url, params=None):
            assert url == "https://owm.test/data/2.5/weather"
            assert params["units"] == "imperial"
            return FakeResponse()

    monkeypatch.setattr(owm_module.httpx, "AsyncClient", FakeClient)

    with pytest.raises(WeatherProviderError) as exc_info:
        await make_provider().get_current(38.8, -104.7)
    assert exc_info.value.status_code == 401
