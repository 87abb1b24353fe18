"""
GeoBrasil - Geo Helper
Límite de tiempo para llamadas al almacenamiento.
"""
import asyncio
import logging
from typing import Awaitable, TypeVar

from app.services.geo.geo_base import GeoStoreTimeoutError

logger = logging.getLogger("geo_helper")

T = TypeVar("T")


async def with_timeout(awaitable: Awaitable[T], seconds: float, operation: str) -> T:
    """
    Espera awaitable como máximo `seconds`. Al vencer, la llamada se cancela
    y se lanza GeoStoreTimeoutError.
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        logger.error(f"Timeout en {operation} ({seconds}s)")
        raise GeoStoreTimeoutError(f"{operation} excedió {seconds}s") from e
