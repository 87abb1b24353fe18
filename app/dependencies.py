"""
GeoBrasil - Dependencies (FastAPI Depends)
Servicios compartidos guardados en app.state por create_app().
"""
from fastapi import Request

from app.config import Settings
from app.services.query_service import LocationQueryService


def get_query_service(request: Request) -> LocationQueryService:
    return request.app.state.query_service


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
