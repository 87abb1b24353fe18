"""
GeoBrasil - Models
"""
from app.models.location import build_locations_table
