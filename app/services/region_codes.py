"""
GeoBrasil - Códigos de estado
Mapa admin1 de GeoNames (código numérico) → sigla del estado (2 letras).
"""
from types import MappingProxyType
from typing import Optional

BR_ADMIN1_TO_STATE = MappingProxyType({
    "01": "AC",  # Acre
    "02": "AL",  # Alagoas
    "03": "AP",  # Amapá
    "04": "AM",  # Amazonas
    "05": "BA",  # Bahia
    "06": "CE",  # Ceará
    "07": "DF",  # Distrito Federal
    "08": "ES",  # Espírito Santo
    "11": "MS",  # Mato Grosso do Sul
    "13": "MA",  # Maranhão
    "14": "MT",  # Mato Grosso
    "15": "MG",  # Minas Gerais
    "16": "PA",  # Pará
    "17": "PB",  # Paraíba
    "18": "PR",  # Paraná
    "20": "PI",  # Piauí
    "21": "RJ",  # Rio de Janeiro
    "22": "RN",  # Rio Grande do Norte
    "23": "RS",  # Rio Grande do Sul
    "24": "RO",  # Rondônia
    "25": "RR",  # Roraima
    "26": "SC",  # Santa Catarina
    "27": "SP",  # São Paulo
    "28": "SE",  # Sergipe
    "29": "GO",  # Goiás
    "30": "PE",  # Pernambuco
    "31": "TO",  # Tocantins
})

STATE_CODES = frozenset(BR_ADMIN1_TO_STATE.values())


def resolve_state(admin1_code: str) -> Optional[str]:
    """Retorna la sigla del estado o None si el código no existe."""
    return BR_ADMIN1_TO_STATE.get(admin1_code)
