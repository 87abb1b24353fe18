"""
GeoBrasil - Driver en memoria
Implementación de GeoStoreBase sobre una lista.
Se usa en pruebas y para levantar la API sin base de datos.
"""
import logging
import math
from typing import List, Optional, Set

from app.services.geo.geo_base import GeoStoreBase, GeoStoreError, Location

logger = logging.getLogger("memory_store")

EARTH_RADIUS_KM = 6371.0088

GEO_INDEX = "point_geo"
TEXT_INDEX = "name_region_text"


def great_circle_km(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """Distancia haversine sobre una esfera, en kilómetros."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(min(1.0, math.sqrt(a)))


class InMemoryGeoStore(GeoStoreBase):
    """Almacén en memoria. El orden de inserción es el orden natural."""

    def __init__(self, settings=None):
        self.settings = settings
        self._locations: List[Location] = []
        self.indexes: Set[str] = set()
        self.connected = False

    async def connect(self):
        self.connected = True

    async def close(self):
        self.connected = False

    async def insert_batch(self, locations: List[Location]):
        for loc in locations:
            if not loc.name or not loc.region or loc.point is None:
                raise GeoStoreError(f"Localización inválida: {loc!r}")
        self._locations.extend(
            Location(name=loc.name, region=loc.region, point=loc.point, population=loc.population)
            for loc in locations
        )

    async def reset_collection(self):
        self._locations = []
        self.indexes = set()
        await self.ensure_indexes()
        logger.info("Colección en memoria reiniciada")

    async def query_by_name(self, name: str, region: Optional[str] = None) -> Optional[Location]:
        best = None
        for loc in self._locations:
            if loc.name != name:
                continue
            if region and loc.region != region:
                continue
            if best is None or loc.population > best.population:
                best = loc
        return best

    async def query_near(
        self,
        longitude: float,
        latitude: float,
        max_distance_km: float
    ) -> List[Location]:
        hits = []
        for order, loc in enumerate(self._locations):
            d = great_circle_km(longitude, latitude, loc.point.longitude, loc.point.latitude)
            if d <= max_distance_km:
                hits.append((d, order, loc))
        hits.sort(key=lambda h: (h[0], h[1]))
        return [loc for _, _, loc in hits]

    async def ensure_geo_index(self):
        self.indexes.add(GEO_INDEX)

    async def ensure_text_index(self):
        self.indexes.add(TEXT_INDEX)

    def __len__(self):
        return len(self._locations)
