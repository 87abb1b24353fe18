"""
GeoBrasil - Descarga de GeoNames
Descarga el dump por país (BR.zip) y extrae el .txt del país.

URL: http://download.geonames.org/export/dump/{PAIS}.zip
"""
import logging
import zipfile
from pathlib import Path

import httpx

logger = logging.getLogger("geonames_download")


class GeoNamesDownloadError(Exception):
    """Error al descargar o descomprimir el dump de GeoNames."""
    pass


async def download_file(url: str, destination: Path, timeout: float = 120.0) -> Path:
    """Descarga url a destination en streaming. Retorna la ruta escrita."""
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            async with client.stream("GET", url) as response:
                if response.status_code != 200:
                    raise GeoNamesDownloadError(
                        f"Error al descargar {url}: status {response.status_code}"
                    )
                with open(destination, "wb") as out:
                    async for chunk in response.aiter_bytes():
                        out.write(chunk)
    except httpx.HTTPError as e:
        raise GeoNamesDownloadError(f"Error al descargar {url}: {e}") from e
    except OSError as e:
        raise GeoNamesDownloadError(f"Error al guardar {destination}: {e}") from e

    logger.info(f"Descargado {url} → {destination}")
    return destination


def extract_member(zip_path: Path, member: str, destination_dir: Path) -> Path:
    """
    Extrae un solo archivo del zip.
    Solo se escribe el miembro pedido, dentro de destination_dir.
    """
    destination_dir = Path(destination_dir)
    target = destination_dir / Path(member).name

    try:
        with zipfile.ZipFile(zip_path) as zf:
            if member not in zf.namelist():
                raise GeoNamesDownloadError(f"'{member}' no existe en {zip_path}")
            destination_dir.mkdir(parents=True, exist_ok=True)
            with zf.open(member) as src, open(target, "wb") as out:
                while True:
                    chunk = src.read(1024 * 1024)
                    if not chunk:
                        break
                    out.write(chunk)
    except zipfile.BadZipFile as e:
        raise GeoNamesDownloadError(f"Archivo zip inválido {zip_path}: {e}") from e
    except OSError as e:
        raise GeoNamesDownloadError(f"Error al descomprimir {zip_path}: {e}") from e

    logger.info(f"Extraído {member} → {target}")
    return target


async def fetch_country_dump(url: str, country_code: str, work_dir: Path, timeout: float = 120.0) -> Path:
    """Descarga {PAIS}.zip y retorna la ruta del {PAIS}.txt extraído."""
    work_dir = Path(work_dir)
    zip_path = await download_file(url, work_dir / f"{country_code}.zip", timeout=timeout)
    return extract_member(zip_path, f"{country_code}.txt", work_dir)
