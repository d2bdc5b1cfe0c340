"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # ======================
    # Database (work log)
    # ======================
    DATABASE_URL: str = "sqlite+aiosqlite:///./weathercraft.db"
    AUTO_CREATE_TABLES: bool = True

    # ======================
    # Weather provider
    # ======================
    OPENWEATHERMAP_API_KEY: Optional[str] = None
    OPENWEATHERMAP_BASE_URL: str = "https://api.openweathermap.org/data/2.5"
    WEATHER_CURRENT_TTL_SECONDS: int = 300
    WEATHER_FORECAST_TTL_SECONDS: int = 1800
    WEATHER_TIMEOUT_SECONDS: float = 15.0

    # ======================
    # Catalogs & planning
    # ======================
    CONFIG_DIR: str = "config"
    PROJECT_TIMEZONE: str = "America/Denver"
    FORECAST_DAYS: int = 5

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
