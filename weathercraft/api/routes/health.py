from fastapi import APIRouter, Request
from sqlalchemy import text

from weathercraft.infrastructure.db import database

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    db_status = "connected"
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as exc:
        db_status = f"error: {exc}"

    return {
        "status": "ok",
        "service": "weathercraft",
        "config_loaded": getattr(request.app.state, "config_engine", None) is not None,
        "weather_configured": getattr(request.app.state, "outlook_service", None) is not None,
        "database": db_status,
    }
