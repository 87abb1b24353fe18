"""
GeoBrasil - Schemas: Localizaciones
"""
from pydantic import BaseModel

from app.services.geo.geo_base import Location


class LocationResponse(BaseModel):
    municipio: str
    estado: str
    latitude: float
    longitude: float

    @classmethod
    def from_location(cls, location: Location) -> "LocationResponse":
        return cls(
            municipio=location.name,
            estado=location.region,
            latitude=location.point.latitude,
            longitude=location.point.longitude,
        )
