"""
GeoBrasil - Ciudades de ejemplo
30 municipios principales para demo y pruebas (--import sin archivo).
"""
from typing import List

from app.services.geo.geo_base import GeoPoint, Location

# (municipio, estado, longitud, latitud)
SEED_CITIES = (
    ("São Paulo", "SP", -46.6333, -23.5505),
    ("Rio de Janeiro", "RJ", -43.1729, -22.9068),
    ("Brasília", "DF", -47.9292, -15.7801),
    ("Salvador", "BA", -38.5108, -12.9714),
    ("Fortaleza", "CE", -38.5434, -3.7172),
    ("Belo Horizonte", "MG", -43.9378, -19.9208),
    ("Manaus", "AM", -60.0217, -3.1190),
    ("Curitiba", "PR", -49.2643, -25.4284),
    ("Recife", "PE", -34.8813, -8.0476),
    ("Goiânia", "GO", -49.2532, -16.6864),
    ("Porto Alegre", "RS", -51.2302, -30.0346),
    ("Belém", "PA", -48.5044, -1.4558),
    ("Guarulhos", "SP", -46.5333, -23.4625),
    ("Campinas", "SP", -47.0608, -22.9099),
    ("São Luís", "MA", -44.3028, -2.5387),
    ("São Gonçalo", "RJ", -43.0539, -22.8268),
    ("Maceió", "AL", -35.7353, -9.6658),
    ("Duque de Caxias", "RJ", -43.3055, -22.7858),
    ("Natal", "RN", -35.2094, -5.7945),
    ("Teresina", "PI", -42.8034, -5.0892),
    ("Campo Grande", "MS", -54.6295, -20.4697),
    ("João Pessoa", "PB", -34.8631, -7.1195),
    ("Jaboatão dos Guararapes", "PE", -35.0147, -8.1130),
    ("Osasco", "SP", -46.7917, -23.5329),
    ("Santo André", "SP", -46.5386, -23.6639),
    ("São Bernardo do Campo", "SP", -46.5650, -23.6914),
    ("Ribeirão Preto", "SP", -47.8103, -21.1704),
    ("Uberlândia", "MG", -48.2772, -18.9186),
    ("Contagem", "MG", -44.0539, -19.9320),
    ("Aracaju", "SE", -37.0731, -10.9091),
)


def seed_locations() -> List[Location]:
    """Lista nueva de Location (sin normalizar) a partir de SEED_CITIES."""
    return [
        Location(name=name, region=region, point=GeoPoint(lon, lat))
        for name, region, lon, lat in SEED_CITIES
    ]
