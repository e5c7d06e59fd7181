"""Núcleo del cliente: configuración, errores, dominio y paginación.

Por qué:
- Nada aquí conoce httpx ni XML; los adaptadores dependen del núcleo, no al revés.
"""
