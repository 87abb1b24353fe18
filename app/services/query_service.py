"""
GeoBrasil - Servicio de consultas
Capa delgada entre los routers y el geo store.
Cada consulta tiene límite de QUERY_TIMEOUT_SECONDS.
"""
import logging
from typing import List, Optional

from app.config import Settings
from app.services.geo.geo_base import GeoStoreBase, Location
from app.services.geo.geo_helper import with_timeout

logger = logging.getLogger("query_service")


class LocationQueryService:

    def __init__(self, store: GeoStoreBase, settings: Settings):
        self.store = store
        self.timeout = settings.QUERY_TIMEOUT_SECONDS

    async def get_location_by_name(self, name: str, region: Optional[str] = None) -> Optional[Location]:
        return await with_timeout(
            self.store.query_by_name(name, region or None),
            self.timeout,
            "query_by_name",
        )

    async def get_nearby_locations(
        self,
        longitude: float,
        latitude: float,
        distance_km: float
    ) -> List[Location]:
        return await with_timeout(
            self.store.query_near(longitude, latitude, distance_km),
            self.timeout,
            "query_near",
        )
