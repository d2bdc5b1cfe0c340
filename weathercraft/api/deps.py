"""
Route dependencies
Engines are built once in the lifespan and parked on app.state
"""

from fastapi import HTTPException, Request

from weathercraft.domain.models import Project
from weathercraft.domain.services.config_engine import ConfigEngine
from weathercraft.services.site_outlook_service import SiteOutlookService


def get_config_engine(request: Request) -> ConfigEngine:
    config_engine = getattr(request.app.state, "config_engine", None)
    if config_engine is None:
        raise HTTPException(status_code=500, detail="Configuration not loaded")
    return config_engine


def get_outlook_service(request: Request) -> SiteOutlookService:
    service = getattr(request.app.state, "outlook_service", None)
    if service is None:
        raise HTTPException(status_code=500, detail="Weather service not configured")
    return service


def require_project(config_engine: ConfigEngine, project_id: str) -> Project:
    project = config_engine.get_project(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail=f"Project not found: {project_id}")
    return project
