"""
GeoBrasil - Services
Normalización, importación GeoNames y consultas geoespaciales.
"""
from app.services.importer import GeoNamesImporter, ImportOptions, ImportReport, ImportSourceError
from app.services.normalizer import normalize_name
from app.services.query_service import LocationQueryService

__all__ = [
    "GeoNamesImporter",
    "ImportOptions",
    "ImportReport",
    "ImportSourceError",
    "LocationQueryService",
    "normalize_name",
]
