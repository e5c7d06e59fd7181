"""Contrato del transporte HTTP.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los métodos de recurso solo necesitan `send`; en tests se puede sustituir
  por un doble que devuelva envelopes ya parseados.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class RequestSender(Protocol):
    """Contrato mínimo para enviar una petición a la API.

    Reglas de diseño:
    - `send` es asíncrono porque hace I/O (HTTP).
    - Devuelve el elemento `response` ya parseado, nunca bytes.
    """

    async def send(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Envía la petición y devuelve el envelope `response`."""

        ...
