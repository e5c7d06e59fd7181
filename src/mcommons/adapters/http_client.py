"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza base URL, timeout, headers y autenticación en un solo sitio.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from mcommons.core.config import ClientSettings
from mcommons.core.domain.credentials import BasicAuth, BearerToken, Credentials
from mcommons.core.errors import ValidationError


def build_auth(credentials: Credentials) -> tuple[httpx.Auth | None, dict[str, str]]:
    """Traduce las credenciales a (auth de httpx, headers extra).

    Cada variante se trata explícitamente; cualquier otra cosa es un error del
    llamador, no un cliente sin autenticar.
    """

    if isinstance(credentials, BasicAuth):
        return httpx.BasicAuth(credentials.username, credentials.password), {}
    if isinstance(credentials, BearerToken):
        return None, {"Authorization": f"Bearer {credentials.token}"}
    raise ValidationError(
        f"Unsupported credentials type: {type(credentials).__name__} "
        "(expected BasicAuth or BearerToken)"
    )


def build_async_client(
    credentials: Credentials,
    settings: ClientSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` autenticado y ligado a la base URL.

    Por qué un builder:
    - Centraliza timeout/headers para que todos los endpoints se comporten igual.
    - `transport` permite a los tests sustituir la red por un `MockTransport`.
    """

    settings = settings or ClientSettings()
    auth, auth_headers = build_auth(credentials)
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/xml, text/xml;q=0.9, */*;q=0.8",
    }
    headers.update(auth_headers)
    return httpx.AsyncClient(
        base_url=settings.base_url.rstrip("/") + "/",
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers=headers,
        auth=auth,
        transport=transport,
    )
