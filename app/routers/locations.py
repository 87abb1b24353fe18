"""
GeoBrasil - Router: Localizaciones

Endpoints:
  GET  /location/{municipio}?estado=XX         → Buscar municipio por nombre
  GET  /nearby?lat=XX&lon=YY&distance=50       → Municipios dentro de un radio (km)
"""
import logging
import math
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.config import Settings
from app.dependencies import get_app_settings, get_query_service
from app.schemas.location import LocationResponse
from app.services.geo.geo_base import GeoStoreError
from app.services.normalizer import normalize_name
from app.services.query_service import LocationQueryService

logger = logging.getLogger("locations")

router = APIRouter(tags=["Localizaciones"])


def _parse_float(raw: str, label: str) -> float:
    """Convierte un parámetro a float finito o responde 400."""
    try:
        value = float(raw)
    except ValueError:
        raise HTTPException(400, f"{label} inválida")
    if not math.isfinite(value):
        raise HTTPException(400, f"{label} inválida")
    return value


@router.get("/location/{municipio}", response_model=LocationResponse)
async def get_location_by_name(
    municipio: str,
    estado: Optional[str] = Query(None),
    service: LocationQueryService = Depends(get_query_service),
):
    """
    Busca un municipio por nombre (se normaliza igual que al importar).
    Si hay homónimos, retorna el de mayor población.
    """
    name = normalize_name(municipio)
    region = estado.strip().upper() if estado else None

    try:
        location = await service.get_location_by_name(name, region)
    except GeoStoreError as e:
        logger.error(f"Error al buscar localización '{name}': {e}")
        raise HTTPException(500, "Error al buscar localización")

    if location is None:
        raise HTTPException(404, "Localización no encontrada")

    if location.point is None:
        logger.error(f"Localización sin coordenadas: {location.name} ({location.region})")
        raise HTTPException(500, "Localización sin coordenadas válidas")

    return LocationResponse.from_location(location)


@router.get("/nearby", response_model=List[LocationResponse])
async def get_nearby_locations(
    lat: Optional[str] = Query(None),
    lon: Optional[str] = Query(None),
    distance: Optional[str] = Query(None),
    service: LocationQueryService = Depends(get_query_service),
    settings: Settings = Depends(get_app_settings),
):
    """Municipios dentro de `distance` km del punto, del más cercano al más lejano."""
    if not lat or not lon:
        raise HTTPException(400, "Parámetros lat y lon son obligatorios")

    latitude = _parse_float(lat, "Latitud")
    longitude = _parse_float(lon, "Longitud")

    distance_km = settings.DEFAULT_NEARBY_DISTANCE_KM
    if distance:
        distance_km = _parse_float(distance, "Distancia")

    try:
        locations = await service.get_nearby_locations(longitude, latitude, distance_km)
    except GeoStoreError as e:
        logger.error(f"Error al buscar localizaciones cercanas: {e}")
        raise HTTPException(500, "Error al buscar localizaciones")

    return [LocationResponse.from_location(loc) for loc in locations if loc.point is not None]
