"""
GeoBrasil - Driver PostGIS
Implementación de GeoStoreBase sobre PostgreSQL + PostGIS
(SQLAlchemy async + asyncpg + GeoAlchemy2).

Las distancias se calculan sobre la esfera (use_spheroid = false),
la búsqueda por radio la resuelve ST_DWithin con el índice GiST.
"""
import logging
from typing import List, Optional

from geoalchemy2 import Geometry
from sqlalchemy import Float, cast, false, func, insert, select, text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from app.config import Settings
from app.database import build_engine
from app.models.location import build_locations_table
from app.services.geo.geo_base import (
    GeoPoint, GeoStoreBase, GeoStoreConnectionError, GeoStoreError, Location
)

logger = logging.getLogger("postgis_store")


def _ewkt(longitude: float, latitude: float) -> str:
    return f"SRID=4326;POINT({longitude!r} {latitude!r})"


def _is_already_exists(error: DBAPIError) -> bool:
    return "already exists" in str(error.orig).lower()


class PostgisGeoStore(GeoStoreBase):
    """
    Almacén geoespacial sobre PostGIS.

    Uso:
        store = PostgisGeoStore(settings)
        await store.connect()
        loc = await store.query_by_name("São Paulo", "SP")
    """

    def __init__(self, settings: Settings, engine: Optional[AsyncEngine] = None):
        self.settings = settings
        self.engine = engine or build_engine(settings)
        self.table = build_locations_table(settings.LOCATIONS_TABLE)
        self.geo_index_name = f"ix_{self.table.name}_point"
        self.text_index_name = f"ix_{self.table.name}_name_region_fts"

    # ================================================================
    # CONEXIÓN
    # ================================================================

    async def connect(self):
        try:
            async with self.engine.begin() as conn:
                await conn.execute(text("CREATE EXTENSION IF NOT EXISTS postgis"))
                await conn.run_sync(self.table.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise GeoStoreConnectionError(f"No se pudo conectar a PostgreSQL: {e}") from e
        logger.info(f"Conectado a PostgreSQL (tabla '{self.table.name}')")

    async def close(self):
        await self.engine.dispose()

    # ================================================================
    # ESCRITURA
    # ================================================================

    async def insert_batch(self, locations: List[Location]):
        if not locations:
            return

        rows = [
            {
                "name": loc.name,
                "region": loc.region,
                "point": _ewkt(loc.point.longitude, loc.point.latitude),
                "population": loc.population or 0,
            }
            for loc in locations
        ]
        try:
            async with self.engine.begin() as conn:
                await conn.execute(insert(self.table), rows)
        except (SQLAlchemyError, OSError) as e:
            raise GeoStoreError(f"Error al insertar lote de {len(rows)} localizaciones: {e}") from e

    async def reset_collection(self):
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(lambda sync_conn: self.table.drop(sync_conn, checkfirst=True))
                await conn.run_sync(lambda sync_conn: self.table.create(sync_conn))
        except (SQLAlchemyError, OSError) as e:
            raise GeoStoreError(f"Error al reiniciar tabla '{self.table.name}': {e}") from e

        logger.info(f"Tabla '{self.table.name}' reiniciada")
        await self.ensure_indexes()

    # ================================================================
    # CONSULTAS
    # ================================================================

    def _select_locations(self):
        t = self.table
        geom = cast(t.c.point, Geometry(geometry_type="POINT", srid=4326))
        return select(
            t.c.name,
            t.c.region,
            t.c.population,
            func.ST_X(geom, type_=Float).label("longitude"),
            func.ST_Y(geom, type_=Float).label("latitude"),
        )

    @staticmethod
    def _to_location(row) -> Location:
        point = None
        if row.longitude is not None and row.latitude is not None:
            point = GeoPoint(row.longitude, row.latitude)
        return Location(
            name=row.name,
            region=row.region,
            point=point,
            population=row.population or 0,
        )

    async def query_by_name(self, name: str, region: Optional[str] = None) -> Optional[Location]:
        t = self.table
        q = self._select_locations().where(t.c.name == name)
        if region:
            q = q.where(t.c.region == region)
        q = q.order_by(t.c.population.desc(), t.c.id).limit(1)

        try:
            async with self.engine.connect() as conn:
                row = (await conn.execute(q)).first()
        except (SQLAlchemyError, OSError) as e:
            raise GeoStoreError(f"Error al buscar '{name}': {e}") from e

        return self._to_location(row) if row else None

    async def query_near(
        self,
        longitude: float,
        latitude: float,
        max_distance_km: float
    ) -> List[Location]:
        t = self.table
        origin = func.ST_GeogFromText(_ewkt(longitude, latitude))
        q = (
            self._select_locations()
            .where(func.ST_DWithin(t.c.point, origin, max_distance_km * 1000.0, false()))
            .order_by(func.ST_Distance(t.c.point, origin, false()), t.c.id)
        )

        try:
            async with self.engine.connect() as conn:
                rows = (await conn.execute(q)).all()
        except (SQLAlchemyError, OSError) as e:
            raise GeoStoreError(f"Error en búsqueda por radio: {e}") from e

        return [self._to_location(row) for row in rows]

    # ================================================================
    # ÍNDICES
    # ================================================================

    async def _create_index(self, index_name: str, ddl: str):
        try:
            async with self.engine.begin() as conn:
                await conn.execute(text(ddl))
        except DBAPIError as e:
            # Otra sesión pudo crearlo en paralelo
            if _is_already_exists(e):
                logger.debug(f"Índice {index_name} ya existe")
                return
            raise GeoStoreError(f"Error al crear índice {index_name}: {e}") from e
        except (SQLAlchemyError, OSError) as e:
            raise GeoStoreError(f"Error al crear índice {index_name}: {e}") from e
        logger.info(f"Índice {index_name} listo")

    async def ensure_geo_index(self):
        preparer = self.engine.dialect.identifier_preparer
        await self._create_index(
            self.geo_index_name,
            f"CREATE INDEX IF NOT EXISTS {preparer.quote(self.geo_index_name)} "
            f"ON {preparer.quote(self.table.name)} USING GIST (point)",
        )

    async def ensure_text_index(self):
        preparer = self.engine.dialect.identifier_preparer
        await self._create_index(
            self.text_index_name,
            f"CREATE INDEX IF NOT EXISTS {preparer.quote(self.text_index_name)} "
            f"ON {preparer.quote(self.table.name)} "
            f"USING GIN (to_tsvector('simple', name || ' ' || region))",
        )
