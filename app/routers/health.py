"""
GeoBrasil - Router: Health
"""
from fastapi import APIRouter

from app.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Verifica que la API está funcionando."""
    return HealthResponse(status="ok", message="API de Geolocalización Brasil funcionando")
