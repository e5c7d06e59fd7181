"""Jerarquía de errores del cliente.

Por qué una jerarquía propia:
- El llamador solo necesita capturar `MobileCommonsError`; la subclase indica
  qué capa rechazó la operación.
- Los errores se lanzan donde ocurren y se encadenan (`from exc`) a la
  excepción original de `httpx` / `xml` / `pydantic`.
"""

from __future__ import annotations


class MobileCommonsError(Exception):
    """Base de todos los errores del cliente."""


class TransportError(MobileCommonsError):
    """Fallo de red, timeout o respuesta HTTP fuera de 2xx."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(MobileCommonsError):
    """XML mal formado o envelope sin la forma esperada."""


class ApiError(MobileCommonsError):
    """El envelope llegó con `success="false"`."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(f"[{code}] {message}" if code else message)
        self.code = code
        self.message = message


class ValidationError(MobileCommonsError):
    """Argumento del llamador mal formado."""
