"""
GeoBrasil - Conexión a base de datos (SQLAlchemy async + asyncpg)
"""
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from app.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Crea el engine async. No abre conexiones hasta el primer uso."""
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        pool_pre_ping=True,
    )
