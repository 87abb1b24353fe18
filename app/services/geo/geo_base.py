"""
GeoBrasil - Geo Store Base (Clase Abstracta)
Define la interfaz que todos los drivers de almacenamiento geoespacial
deben implementar. El importador y el servicio de consultas solo dependen
de esta interfaz.

Drivers: PostGIS (producción), memoria (pruebas y demo local).
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, NamedTuple, Optional
import logging

logger = logging.getLogger("geo_base")


class GeoPoint(NamedTuple):
    """Punto geográfico en orden (longitud, latitud)."""
    longitude: float
    latitude: float


@dataclass
class Location:
    """Un municipio o lugar con su punto geográfico."""
    name: str
    region: str
    point: Optional[GeoPoint]
    population: int = 0


class GeoStoreError(Exception):
    """Error del almacenamiento geoespacial (conexión, consulta o inserción)."""
    pass


class GeoStoreConnectionError(GeoStoreError):
    """No se pudo conectar al almacenamiento."""
    pass


class GeoStoreTimeoutError(GeoStoreError):
    """La operación excedió su tiempo límite."""
    pass


class GeoStoreBase(ABC):
    """
    Clase base abstracta para drivers de almacenamiento geoespacial.

    Uso:
        store = PostgisGeoStore(settings)
        await store.connect()
        await store.insert_batch(locations)
        nearby = await store.query_near(-46.6333, -23.5505, 50)
        await store.close()
    """

    # ================================================================
    # CONEXIÓN
    # ================================================================

    @abstractmethod
    async def connect(self):
        """Abre y verifica la conexión. Lanza GeoStoreConnectionError si falla."""
        pass

    @abstractmethod
    async def close(self):
        """Libera la conexión."""
        pass

    # ================================================================
    # ESCRITURA
    # ================================================================

    @abstractmethod
    async def insert_batch(self, locations: List[Location]):
        """
        Inserta un lote completo en una sola operación.
        No deduplica. Cualquier fallo lanza GeoStoreError.
        """
        pass

    @abstractmethod
    async def reset_collection(self):
        """Elimina todas las localizaciones y recrea ambos índices."""
        pass

    # ================================================================
    # CONSULTAS
    # ================================================================

    @abstractmethod
    async def query_by_name(self, name: str, region: Optional[str] = None) -> Optional[Location]:
        """
        Busca por nombre exacto (ya normalizado), opcionalmente por estado.
        Si hay varios, retorna el de mayor población. None si no existe.
        """
        pass

    @abstractmethod
    async def query_near(
        self,
        longitude: float,
        latitude: float,
        max_distance_km: float
    ) -> List[Location]:
        """
        Localizaciones dentro de max_distance_km (distancia de gran círculo),
        ordenadas de la más cercana a la más lejana.
        """
        pass

    # ================================================================
    # ÍNDICES
    # ================================================================

    @abstractmethod
    async def ensure_geo_index(self):
        """Crea el índice geoespacial. Si ya existe no hace nada."""
        pass

    @abstractmethod
    async def ensure_text_index(self):
        """Crea el índice de texto sobre nombre y estado. Si ya existe no hace nada."""
        pass

    async def ensure_indexes(self):
        await self.ensure_geo_index()
        await self.ensure_text_index()
