"""
GeoBrasil - API de Geolocalización de municipios de Brasil
"""
