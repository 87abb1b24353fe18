"""
GeoBrasil - Tabla de localizaciones
Cada fila es un municipio con su punto (geography POINT, WGS84).
El nombre de la tabla es configurable, por eso se construye con una función.
"""
from typing import Optional

from geoalchemy2 import Geography
from sqlalchemy import Column, Integer, MetaData, String, Table


def build_locations_table(name: str = "locations", metadata: Optional[MetaData] = None) -> Table:
    metadata = metadata if metadata is not None else MetaData()
    return Table(
        name, metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", String(200), nullable=False),          # Municipio (normalizado)
        Column("region", String(10), nullable=False),         # Sigla del estado
        # El índice GiST se crea aparte con ensure_geo_index()
        Column("point", Geography(geometry_type="POINT", srid=4326, spatial_index=False), nullable=False),
        Column("population", Integer, nullable=False, server_default="0"),
    )
