"""
GeoBrasil - Normalizador de nombres de municipios
"""


def _map_char(ch: str, mapped: str) -> str:
    # Conversión de un solo carácter; si se expande ("ß" → "SS") se conserva el original
    return mapped if len(mapped) == 1 else ch


def normalize_name(raw: str) -> str:
    """
    Capitaliza cada palabra de 3 o más caracteres y deja intactas las cortas.

    "SÃO PAULO" → "São Paulo"
    "rio de janeiro" → "Rio de Janeiro"

    Se separa solo por el carácter espacio, así que espacios dobles
    se conservan tal cual. Mayúsculas y minúsculas se aplican carácter
    a carácter, por lo que el nombre nunca cambia de longitud.
    """
    words = raw.split(" ")

    for i, word in enumerate(words):
        if len(word) < 3:
            continue
        first = _map_char(word[0], word[0].upper())
        rest = "".join(_map_char(ch, ch.lower()) for ch in word[1:])
        words[i] = first + rest

    return " ".join(words)
