"""
GeoBrasil - Importador GeoNames
Lee un archivo TSV en formato GeoNames, valida cada registro
y lo inserta en el geo store en lotes.

Columnas usadas (base 0):
  1  name          → municipio
  4  latitude
  5  longitude
  8  country code  → filtro de país
  10 admin1 code   → estado (código numérico de GeoNames)
  14 population

Modos:
  - Completo (filter_records=True): filtra país, resuelve estado y
    valida bounding box.
  - Simple (filter_records=False): para archivos ya depurados; guarda el
    código de estado tal cual viene.

Un registro inválido se cuenta y se salta, nunca aborta la importación.
Un fallo del store sí aborta; los lotes ya insertados quedan guardados.
"""
import csv
import logging
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, List, Optional

from app.config import Settings
from app.services.geo.geo_base import GeoPoint, GeoStoreBase, GeoStoreError, Location
from app.services.geo.geo_helper import with_timeout
from app.services.geonames_download import fetch_country_dump
from app.services.normalizer import normalize_name
from app.services.region_codes import resolve_state
from app.services.seed_cities import seed_locations

logger = logging.getLogger("importer")

FIELD_NAME = 1
FIELD_LATITUDE = 4
FIELD_LONGITUDE = 5
FIELD_COUNTRY = 8
FIELD_ADMIN1 = 10
FIELD_POPULATION = 14
MIN_FIELDS = 18


class ImportSourceError(Exception):
    """No se pudo abrir o leer el archivo de origen."""
    pass


@dataclass
class ImportOptions:
    filter_records: bool = True


@dataclass
class ImportReport:
    """Contadores de una importación."""
    processed: int = 0
    malformed: int = 0
    rejected_country: int = 0
    rejected_region_missing: int = 0
    rejected_region_unknown: int = 0
    rejected_coordinates: int = 0
    rejected_bounds: int = 0
    accepted: int = 0
    batches: int = 0

    @property
    def rejected(self) -> int:
        return (
            self.malformed
            + self.rejected_country
            + self.rejected_region_missing
            + self.rejected_region_unknown
            + self.rejected_coordinates
            + self.rejected_bounds
        )

    def log_summary(self, log: logging.Logger = logger):
        log.info(f"Resumen de importación: {self.accepted} registros en {self.batches} lotes")
        log.info(f"  - Líneas procesadas: {self.processed}")
        log.info(f"  - Líneas mal formadas: {self.malformed}")
        log.info(f"  - Rechazadas por país: {self.rejected_country}")
        log.info(f"  - Rechazadas por estado vacío: {self.rejected_region_missing}")
        log.info(f"  - Rechazadas por estado desconocido: {self.rejected_region_unknown}")
        log.info(f"  - Rechazadas por coordenadas inválidas: {self.rejected_coordinates}")
        log.info(f"  - Rechazadas por fuera del bounding box: {self.rejected_bounds}")
        log.info(f"  - Aceptadas: {self.accepted}")


def _parse_population(raw: str) -> int:
    """Best effort: vacío o inválido → 0."""
    try:
        value = int(raw.strip())
    except ValueError:
        return 0
    return max(value, 0)


def _parse_point(raw_lat: str, raw_lon: str) -> Optional[GeoPoint]:
    try:
        lat = float(raw_lat)
        lon = float(raw_lon)
    except ValueError:
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        return None
    return GeoPoint(lon, lat)


class GeoNamesImporter:
    """
    Importa localizaciones al geo store.

    Uso:
        importer = GeoNamesImporter(store, settings)
        report = await importer.import_file("BR.txt")
        await importer.seed_fixed_cities()
    """

    def __init__(self, store: GeoStoreBase, settings: Settings):
        self.store = store
        self.settings = settings
        self.bounding_box = settings.bounding_box

    # ================================================================
    # VALIDACIÓN
    # ================================================================

    def _parse_row(self, row: List[str], options: ImportOptions, report: ImportReport) -> Optional[Location]:
        """Valida una fila. Retorna la Location o None (y suma al contador)."""
        if len(row) < MIN_FIELDS:
            report.malformed += 1
            return None

        name = row[FIELD_NAME]

        if options.filter_records and row[FIELD_COUNTRY] != self.settings.IMPORT_COUNTRY_CODE:
            report.rejected_country += 1
            return None

        # En modo simple el estado se guarda tal cual viene en el archivo
        region = row[FIELD_ADMIN1]
        admin1 = region.strip()
        if not admin1:
            report.rejected_region_missing += 1
            return None

        if options.filter_records:
            region = resolve_state(admin1)
            if region is None:
                logger.warning(f"Estado inválido ignorado: {admin1} (municipio: {name})")
                report.rejected_region_unknown += 1
                return None

        point = _parse_point(row[FIELD_LATITUDE], row[FIELD_LONGITUDE])
        if point is None:
            report.rejected_coordinates += 1
            return None

        if options.filter_records and not self.bounding_box.contains(point.longitude, point.latitude):
            logger.debug(
                f"Coordenadas fuera del bounding box: lat={point.latitude}, lon={point.longitude} "
                f"(municipio={name}, estado={region})"
            )
            report.rejected_bounds += 1
            return None

        normalized = normalize_name(name)
        if not normalized.strip():
            report.malformed += 1
            return None

        return Location(
            name=normalized,
            region=region,
            point=point,
            population=_parse_population(row[FIELD_POPULATION]),
        )

    # ================================================================
    # IMPORTACIÓN
    # ================================================================

    async def _flush(self, batch: List[Location], report: ImportReport):
        await with_timeout(
            self.store.insert_batch(batch),
            self.settings.ADMIN_TIMEOUT_SECONDS,
            "insert_batch",
        )
        report.batches += 1
        logger.debug(f"Lote {report.batches} insertado ({len(batch)} registros)")

    async def import_stream(
        self,
        stream: Iterable[str],
        options: Optional[ImportOptions] = None,
    ) -> ImportReport:
        """
        Importa desde cualquier iterable de líneas de texto.
        La primera línea se descarta como encabezado.
        """
        options = options or ImportOptions()
        report = ImportReport()
        batch: List[Location] = []
        batch_size = self.settings.IMPORT_BATCH_SIZE

        reader = csv.reader(stream, delimiter="\t", quoting=csv.QUOTE_NONE)
        header_skipped = False

        try:
            while True:
                try:
                    row = next(reader)
                except StopIteration:
                    break
                except csv.Error as e:
                    logger.warning(f"Error al leer línea {reader.line_num}: {e}")
                    if not header_skipped:
                        # La línea ilegible era el encabezado
                        header_skipped = True
                        continue
                    report.processed += 1
                    report.malformed += 1
                    continue
                except (OSError, UnicodeDecodeError) as e:
                    raise ImportSourceError(f"Error al leer archivo: {e}") from e

                if not header_skipped:
                    header_skipped = True
                    continue

                report.processed += 1
                location = self._parse_row(row, options, report)
                if location is None:
                    continue

                batch.append(location)
                report.accepted += 1

                if len(batch) >= batch_size:
                    await self._flush(batch, report)
                    batch = []

            if batch:
                await self._flush(batch, report)
        except (GeoStoreError, ImportSourceError) as e:
            logger.error(f"Importación abortada tras {report.batches} lotes confirmados: {e}")
            report.log_summary()
            raise

        report.log_summary()
        return report

    async def import_file(self, path, options: Optional[ImportOptions] = None) -> ImportReport:
        """Abre el archivo (UTF-8) e importa. Error de apertura → ImportSourceError."""
        try:
            handle = open(path, "r", encoding="utf-8", newline="")
        except OSError as e:
            raise ImportSourceError(f"Error al abrir archivo {path}: {e}") from e

        logger.info(f"Importando archivo: {path}")
        with handle:
            return await self.import_stream(handle, options)

    async def seed_fixed_cities(self) -> int:
        """Reinicia la colección e inserta las 30 ciudades de ejemplo."""
        await self.reset_collection()

        locations = [replace(loc, name=normalize_name(loc.name)) for loc in seed_locations()]
        await with_timeout(
            self.store.insert_batch(locations),
            self.settings.ADMIN_TIMEOUT_SECONDS,
            "insert_batch",
        )
        logger.info(f"{len(locations)} ciudades de ejemplo importadas")
        return len(locations)

    async def import_full_dataset(self, work_dir) -> ImportReport:
        """
        Importación completa: reinicia la colección, descarga el dump del
        país desde GeoNames, lo descomprime, lo importa y crea los índices.
        """
        await self.reset_collection()

        country = self.settings.IMPORT_COUNTRY_CODE
        logger.info(f"Descargando {country}.zip de GeoNames...")
        txt_path = await fetch_country_dump(
            self.settings.GEONAMES_URL,
            country,
            Path(work_dir),
            timeout=self.settings.DOWNLOAD_TIMEOUT_SECONDS,
        )

        report = await self.import_file(txt_path, ImportOptions(filter_records=True))
        await self.ensure_indexes()
        return report

    # ================================================================
    # ADMINISTRACIÓN
    # ================================================================

    async def reset_collection(self):
        await with_timeout(
            self.store.reset_collection(),
            self.settings.ADMIN_TIMEOUT_SECONDS,
            "reset_collection",
        )

    async def ensure_indexes(self):
        await with_timeout(
            self.store.ensure_geo_index(),
            self.settings.ADMIN_TIMEOUT_SECONDS,
            "ensure_geo_index",
        )
        await with_timeout(
            self.store.ensure_text_index(),
            self.settings.ADMIN_TIMEOUT_SECONDS,
            "ensure_text_index",
        )
