from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator, List, Optional

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from weathercraft.api.routes import health, projects, weather, work_log
from weathercraft.domain.models import WeatherSample
from weathercraft.domain.services.config_engine import ConfigEngine
from weathercraft.infrastructure.db import database
from weathercraft.infrastructure.db.database import Base, get_db
from weathercraft.infrastructure.weather.types import WeatherProviderError
from weathercraft.services.site_outlook_service import SiteOutlookService
from weathercraft.utils.time import project_tz

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"

# Monday 2026-01-05 08:00 in Denver
FORECAST_START = datetime(2026, 1, 5, 15, 0, tzinfo=timezone.utc)


class FakeWeatherProvider:
    """In-memory provider; raises the given error instead of answering when set"""

    def __init__(
        self,
        current: WeatherSample,
        forecast: List[WeatherSample],
        error: Optional[WeatherProviderError] = None,
    ):
        self.current = current
        self.forecast = forecast
        self.error = error
        self.calls = []

    async def get_current(self, lat: float, lon: float) -> WeatherSample:
        self.calls.append(("current", lat, lon))
        if self.error:
            raise self.error
        return self.current

    async def get_forecast(self, lat: float, lon: float) -> List[WeatherSample]:
        self.calls.append(("forecast", lat, lon))
        if self.error:
            raise self.error
        return list(self.forecast)


def _mild_forecast() -> List[WeatherSample]:
    samples = []
    for i in range(40):
        ts = FORECAST_START + timedelta(hours=3 * i)
        # 8 samples per day, warm afternoons
        temp = 52.0 + (i % 8) * 2.0
        samples.append(WeatherSample(
            timestamp=ts,
            temp=temp,
            humidity=45,
            wind_speed=6.0,
            description="clear sky",
            precip_probability=0.0,
            icon="01d",
        ))
    return samples


@pytest.fixture()
def config_engine() -> ConfigEngine:
    engine = ConfigEngine(CONFIG_DIR)
    engine.load_all()
    return engine


@pytest.fixture()
def fake_provider() -> FakeWeatherProvider:
    current = WeatherSample(
        timestamp=FORECAST_START,
        temp=50.0,
        humidity=45,
        wind_speed=6.0,
        description="clear sky",
        icon="01d",
    )
    return FakeWeatherProvider(current=current, forecast=_mild_forecast())


@pytest.fixture()
async def db_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


@pytest.fixture()
async def app(db_session, db_engine, config_engine, fake_provider, monkeypatch) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, prefix="/api/v1", tags=["Health"])
    app.include_router(weather.router, prefix="/api/v1/weather", tags=["Weather"])
    app.include_router(projects.router, prefix="/api/v1", tags=["Projects"])
    app.include_router(work_log.router, prefix="/api/v1/work-log", tags=["Work Log"])

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db
    monkeypatch.setattr(database, "engine", db_engine)

    app.state.config_engine = config_engine
    app.state.outlook_service = SiteOutlookService(
        provider=fake_provider,
        catalog=config_engine.catalog,
        tz=project_tz("America/Denver"),
    )
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
