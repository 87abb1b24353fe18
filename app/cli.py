"""
GeoBrasil - CLI

    python -m app --import                      # 30 ciudades de ejemplo
    python -m app --import --file BR.txt        # archivo GeoNames
    python -m app --import --file limpio.txt --simple
    python -m app --importall                   # descarga BR.zip e importa todo
    python -m app --serve --port 8080
    python -m app --import --serve              # importar y luego servir
"""
import argparse
import asyncio
import logging
from typing import Optional

import uvicorn

from app.config import Settings, get_settings
from app.main import create_app
from app.services.geo.geo_base import GeoStoreBase, GeoStoreError
from app.services.geo.geo_factory import get_geo_store
from app.services.geonames_download import GeoNamesDownloadError
from app.services.importer import GeoNamesImporter, ImportOptions, ImportSourceError

logger = logging.getLogger("cli")


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="geobrasil",
        description="API de Geolocalización - Brasil",
    )
    ap.add_argument(
        "--import",
        dest="do_import",
        action="store_true",
        help="Importar datos: ciudades de ejemplo, o --file si se indica",
    )
    ap.add_argument("--file", help="Archivo TSV en formato GeoNames para importar")
    ap.add_argument(
        "--simple",
        action="store_true",
        help="Con --file: no filtrar país/estado/bounding box y guardar el código de estado tal cual",
    )
    ap.add_argument(
        "--importall",
        action="store_true",
        help="Descargar el dump de GeoNames del país, descomprimir e importar todo",
    )
    ap.add_argument("--work-dir", default=".", help="Directorio para BR.zip / BR.txt (con --importall)")
    ap.add_argument("--serve", action="store_true", help="Iniciar servidor API")
    ap.add_argument("--host", help="Host del servidor")
    ap.add_argument("--port", type=int, help="Puerto del servidor")
    ap.add_argument("--database-url", help="URL de PostgreSQL (postgresql+asyncpg://...)")
    ap.add_argument("--backend", help="Geo store: postgis o memory")
    ap.add_argument("--log-level", help="Nivel de logging (DEBUG, INFO, ...)")
    return ap


def settings_from_args(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    base = base or get_settings()
    overrides = {}
    if args.host:
        overrides["HOST"] = args.host
    if args.port:
        overrides["PORT"] = args.port
    if args.database_url:
        overrides["DATABASE_URL"] = args.database_url
    if args.backend:
        overrides["GEO_STORE_BACKEND"] = args.backend
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    return base.model_copy(update=overrides)


async def run_imports(args: argparse.Namespace, store: GeoStoreBase, settings: Settings) -> int:
    importer = GeoNamesImporter(store, settings)

    try:
        await store.connect()

        if args.importall:
            logger.info("Iniciando importación completa de GeoNames...")
            await importer.import_full_dataset(args.work_dir)

        if args.do_import:
            if args.file:
                options = ImportOptions(filter_records=not args.simple)
                await importer.import_file(args.file, options)
            else:
                logger.info("Importando ciudades de ejemplo (30 principales)")
                await importer.seed_fixed_cities()
            await importer.ensure_indexes()

    except (GeoStoreError, ImportSourceError, GeoNamesDownloadError) as e:
        logger.error(f"Error al importar datos: {e}")
        return 1
    finally:
        await store.close()

    logger.info("Importación concluida con éxito")
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.do_import or args.importall or args.serve):
        parser.print_help()
        return 2

    if args.simple and not args.file:
        parser.error("--simple requiere --file")

    settings = settings_from_args(args)
    configure_logging(settings.LOG_LEVEL)

    try:
        store = get_geo_store(settings)
    except GeoStoreError as e:
        logger.error(str(e))
        return 1

    if args.do_import or args.importall:
        code = asyncio.run(run_imports(args, store, settings))
        if code != 0:
            return code

    if args.serve:
        logger.info(f"Servidor en {settings.HOST}:{settings.PORT}")
        logger.info("  GET /health")
        logger.info("  GET /location/{municipio}?estado=XX")
        logger.info("  GET /nearby?lat=XX&lon=YY&distance=50")
        app = create_app(settings, store)
        uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())

    return 0
