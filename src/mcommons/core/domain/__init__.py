"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2): credenciales y registros.
- El dominio no conoce HTTP ni XML: solo conceptos de la API.
"""
