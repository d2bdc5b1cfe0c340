from datetime import datetime, timezone

import pytest

from weathercraft.services.site_outlook_service import SiteOutlookService
from weathercraft.utils.time import project_tz

NOW = datetime(2026, 1, 5, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def service(fake_provider, config_engine):
    return SiteOutlookService(
        provider=fake_provider,
        catalog=config_engine.catalog,
        tz=project_tz("America/Denver"),
    )


@pytest.mark.asyncio
async def test_outlook_fetches_site_weather(service, fake_provider, config_engine):
    project = config_engine.get_project("aspen-es-roof")
    outlook = await service.get_outlook(project, now=NOW)

    assert fake_provider.calls == [
        ("current", project.lat, project.lon),
        ("forecast", project.lat, project.lon),
    ]
    assert outlook.generated_at == NOW
    assert len(outlook.assembly_results) == len(config_engine.assemblies)
    assert len(outlook.risk_assessments) == 5
    assert len(outlook.recommendations) == len(config_engine.assemblies)
    assert outlook.summary


def test_outlook_uses_local_days(service, fake_provider):
    outlook = service.build_outlook(fake_provider.current, fake_provider.forecast, now=NOW)
    # 40 three-hour samples starting 08:00 local span six calendar days
    assert len(outlook.dailies) == 6
    assert outlook.dailies[0].hourly[0].timestamp.hour == 8


def test_three_hour_samples_scanned_as_hours(service, fake_provider):
    outlook = service.build_outlook(fake_provider.current, fake_provider.forecast, now=NOW)
    flashings = next(r for r in outlook.assembly_results if r.assembly.id == "mod-bit-flashings")
    # Every sample is warm and dry: the whole 120-hour forecast is one window
    assert flashings.work_window_hours == 120
    assert flashings.labor_green_light is True


def test_empty_forecast_degrades(service, fake_provider):
    outlook = service.build_outlook(fake_provider.current, [], now=NOW)
    assert outlook.dailies == ()
    assert outlook.risk_assessments == ()
    assert all(not r.labor_green_light for r in outlook.assembly_results)
    assert all(r.confidence == 0 for r in outlook.recommendations)
