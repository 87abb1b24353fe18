"""
GeoBrasil - Almacenamiento geoespacial
Drivers: PostGIS, memoria.
"""
from app.services.geo.geo_base import (
    GeoPoint,
    GeoStoreBase,
    GeoStoreConnectionError,
    GeoStoreError,
    GeoStoreTimeoutError,
    Location,
)
from app.services.geo.geo_factory import get_geo_store, get_supported_backends

__all__ = [
    "GeoPoint",
    "GeoStoreBase",
    "GeoStoreConnectionError",
    "GeoStoreError",
    "GeoStoreTimeoutError",
    "Location",
    "get_geo_store",
    "get_supported_backends",
]
