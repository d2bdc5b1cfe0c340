"""
FastAPI Main Application
Weather-compliance decisions for roofing job sites
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weathercraft.api.routes import health, projects, weather, work_log
from weathercraft.config import settings
from weathercraft.core.logging import get_logger, setup_logging
from weathercraft.domain.services.config_engine import ConfigEngine
from weathercraft.infrastructure.db.database import close_db, init_db
from weathercraft.infrastructure.weather.openweathermap_provider import OpenWeatherMapProvider
from weathercraft.services.site_outlook_service import SiteOutlookService
from weathercraft.utils.time import project_tz

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def _config_dir() -> Path:
    config_dir = Path(settings.CONFIG_DIR)
    if not config_dir.is_absolute():
        config_dir = Path(__file__).resolve().parent.parent / config_dir
    return config_dir


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Loads catalogs, database and weather provider once
    """
    logger.info("=" * 60)
    logger.info("Starting Weathercraft")
    logger.info("=" * 60)

    # 1. Database
    await init_db()
    logger.info("Database initialized")

    # 2. Catalogs
    config_engine = ConfigEngine(_config_dir())
    config_engine.load_all()
    app.state.config_engine = config_engine

    # 3. Weather provider and engines
    provider = OpenWeatherMapProvider(
        api_key=settings.OPENWEATHERMAP_API_KEY,
        base_url=settings.OPENWEATHERMAP_BASE_URL,
        current_ttl_seconds=settings.WEATHER_CURRENT_TTL_SECONDS,
        forecast_ttl_seconds=settings.WEATHER_FORECAST_TTL_SECONDS,
        timeout_seconds=settings.WEATHER_TIMEOUT_SECONDS,
    )
    if not provider.api_key:
        logger.warning("OPENWEATHERMAP_API_KEY not set; weather routes will fail")
    app.state.outlook_service = SiteOutlookService(
        provider=provider,
        catalog=config_engine.catalog,
        tz=project_tz(settings.PROJECT_TIMEZONE),
        forecast_days=settings.FORECAST_DAYS,
    )

    logger.info(f"API Server: http://{settings.API_HOST}:{settings.API_PORT}")
    logger.info(f"Project timezone: {settings.PROJECT_TIMEZONE}")

    yield

    logger.info("Shutting down Weathercraft")
    await close_db()


app = FastAPI(
    title="Weathercraft - Roofing Weather Compliance",
    description="Go / hold decisions for roofing assemblies from site weather",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(weather.router, prefix="/api/v1/weather", tags=["Weather"])
app.include_router(projects.router, prefix="/api/v1", tags=["Projects"])
app.include_router(work_log.router, prefix="/api/v1/work-log", tags=["Work Log"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weathercraft.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
