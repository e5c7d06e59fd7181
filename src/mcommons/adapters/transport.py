"""Transporte HTTP hacia la API de Mobile Commons.

Implementa `RequestSender`: una petición, una respuesta XML parseada. Sin
reintentos: un timeout o un fallo de red llegan al llamador como
`TransportError` en el primer intento.
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx
from loguru import logger

from mcommons.adapters.http_client import build_async_client
from mcommons.adapters.xml_response import parse_envelope
from mcommons.core.config import ClientSettings
from mcommons.core.domain.credentials import Credentials
from mcommons.core.errors import TransportError


def _drop_none(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    if params is None:
        return None
    return {k: v for k, v in params.items() if v is not None}


class Transport:
    """Cliente HTTP autenticado ligado a una base URL y un timeout fijos."""

    def __init__(
        self,
        credentials: Credentials,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        # `transport` solo sustituye la red; auth, base URL y timeout salen siempre
        # de `credentials` y `settings`.
        self._settings = settings or ClientSettings()
        self._client = build_async_client(credentials, self._settings, transport=transport)

    async def send(
        self,
        method: str,
        path: str,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Envía la petición y devuelve el elemento `response` parseado.

        - `query` va como query string, `body` como formulario urlencoded.
        - Las claves con valor `None` no se envían.
        """

        method = method.upper()
        logger.debug("{} {} params={}", method, path, _drop_none(query))
        try:
            response = await self._client.request(
                method,
                path,
                params=_drop_none(query),
                data=_drop_none(body),
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"{method} {path} timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{method} {path} failed: {exc}") from exc

        logger.debug("{} {} -> HTTP {}", method, path, response.status_code)
        if not response.is_success:
            snippet = response.text[:200] if response.text else "No response body"
            raise TransportError(
                f"Mobile Commons API error {response.status_code}: {snippet}",
                status_code=response.status_code,
            )

        return parse_envelope(response.content)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
