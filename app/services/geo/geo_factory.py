"""
GeoBrasil - Geo Store Factory
Crea el driver de almacenamiento según GEO_STORE_BACKEND.
"""
import logging

from app.config import Settings
from app.services.geo.geo_base import GeoStoreBase, GeoStoreError
from app.services.geo.drivers.memory_store import InMemoryGeoStore
from app.services.geo.drivers.postgis_store import PostgisGeoStore

logger = logging.getLogger("geo_factory")

DRIVERS = {
    "postgis": PostgisGeoStore,
    "memory": InMemoryGeoStore,
}

BACKEND_ALIASES = {
    "postgis": "postgis",
    "postgres": "postgis",
    "postgresql": "postgis",
    "memory": "memory",
    "mem": "memory",
}


def get_geo_store(settings: Settings) -> GeoStoreBase:
    """
    Crea y retorna el driver correcto según la configuración.

    Raises:
        GeoStoreError: Si el backend no tiene driver disponible
    """
    backend = settings.GEO_STORE_BACKEND.lower().strip()
    normalized = BACKEND_ALIASES.get(backend, backend)

    driver_class = DRIVERS.get(normalized)
    if not driver_class:
        available = ", ".join(DRIVERS.keys())
        raise GeoStoreError(
            f"No hay driver para backend '{settings.GEO_STORE_BACKEND}'. "
            f"Backends soportados: {available}"
        )

    logger.info(f"Creando geo store: {normalized}")
    return driver_class(settings)


def get_supported_backends() -> list:
    return list(DRIVERS.keys())
