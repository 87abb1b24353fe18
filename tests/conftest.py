"""
GeoBrasil - Pytest Configuration and Fixtures

Shared fixtures for all tests:
- Settings for the in-memory backend
- In-memory geo store (empty and seeded)
- FastAPI app + httpx client
- GeoNames row builder
"""
from typing import Callable

import httpx
import pytest

from app.config import Settings
from app.main import create_app
from app.services.geo.drivers.memory_store import InMemoryGeoStore
from app.services.importer import GeoNamesImporter


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: memory backend, no .env."""
    return Settings(_env_file=None, GEO_STORE_BACKEND="memory")


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store() -> InMemoryGeoStore:
    return InMemoryGeoStore()


@pytest.fixture
def importer(store, settings) -> GeoNamesImporter:
    return GeoNamesImporter(store, settings)


@pytest.fixture
async def seeded_store(store, importer) -> InMemoryGeoStore:
    """Store loaded with the 30 fixed demo cities."""
    await importer.seed_fixed_cities()
    return store


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def app(settings, seeded_store):
    return create_app(settings, seeded_store)


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# =============================================================================
# GeoNames Fixtures
# =============================================================================

HEADER = "\t".join(
    [
        "geonameid", "name", "asciiname", "alternatenames", "latitude", "longitude",
        "feature_class", "feature_code", "country_code", "cc2", "admin1", "admin2",
        "admin3", "admin4", "population", "elevation", "dem", "timezone", "modification_date",
    ]
)


@pytest.fixture
def geonames_header() -> str:
    return HEADER


@pytest.fixture
def geonames_row() -> Callable[..., str]:
    """Builds one 19-column GeoNames line."""

    def _row(
        name: str,
        lat="-23.5505",
        lon="-46.6333",
        country: str = "BR",
        admin1: str = "27",
        population="1000",
        geonameid: int = 1,
    ) -> str:
        fields = [
            str(geonameid), name, name, "", str(lat), str(lon),
            "P", "PPLA2", country, "", admin1, "", "", "",
            str(population), "", "760", "America/Sao_Paulo", "2024-01-01",
        ]
        return "\t".join(fields)

    return _row
