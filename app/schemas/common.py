"""
GeoBrasil - Schemas comunes
"""
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    message: str


class HealthResponse(BaseModel):
    status: str
    message: str
