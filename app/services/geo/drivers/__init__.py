from app.services.geo.drivers.memory_store import InMemoryGeoStore
from app.services.geo.drivers.postgis_store import PostgisGeoStore

__all__ = ["InMemoryGeoStore", "PostgisGeoStore"]
