"""
GeoBrasil - Schemas
"""
from app.schemas.common import ErrorResponse, HealthResponse
from app.schemas.location import LocationResponse
