"""Parser de respuestas XML de la API.

Por qué un módulo aparte:
- Toda respuesta (éxito o error) es XML bajo un elemento raíz `response`,
  sin importar el Content-Type declarado.
- La rareza "un hijo -> objeto, varios hijos -> lista" se normaliza aquí,
  una sola vez (`as_list`), y no en cada endpoint.

Forma del árbol:
- Atributos y elementos hijos comparten el mismo dict (sin prefijo `@`).
- Atributos "true"/"false" se convierten a `bool`.
- El texto de un elemento con atributos queda en la clave `#text`.
"""

from __future__ import annotations

from typing import Any
from xml.parsers.expat import ExpatError

import xmltodict

from mcommons.core.errors import ApiError, ParseError

_ATTR_PREFIX = "@"
_BOOLEANS = {"true": True, "false": False}


def _merge_attribute(path: Any, key: str, value: Any) -> tuple[str, Any]:
    if not key.startswith(_ATTR_PREFIX):
        return key, value
    name = key[len(_ATTR_PREFIX):]
    if isinstance(value, str):
        value = _BOOLEANS.get(value.strip().lower(), value)
    return name, value


def parse_envelope(content: bytes | str) -> dict[str, Any]:
    """Parsea el documento y devuelve el elemento `response`.

    Lanza `ParseError` si el XML está mal formado o no hay `response`, y
    `ApiError` si el envelope trae `success="false"`.
    """

    try:
        document = xmltodict.parse(
            content,
            attr_prefix=_ATTR_PREFIX,
            postprocessor=_merge_attribute,
        )
    except ExpatError as exc:
        raise ParseError(f"Malformed XML response: {exc}") from exc

    if not isinstance(document, dict) or "response" not in document:
        raise ParseError("XML document has no <response> root element")

    envelope = document["response"]
    if envelope is None:
        return {}
    if not isinstance(envelope, dict):
        # <response>texto</response>
        return {"#text": envelope}

    if envelope.get("success") is False:
        error = envelope.get("error")
        if isinstance(error, dict):
            raise ApiError(
                str(error.get("message") or error.get("#text") or "Request rejected by the API"),
                code=None if error.get("id") is None else str(error.get("id")),
            )
        raise ApiError(str(error or "Request rejected by the API"))

    return envelope


def as_list(value: Any) -> list[Any]:
    """`None` -> `[]`, lista -> lista, cualquier otra cosa -> `[value]`."""

    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def unwrap(envelope: dict[str, Any], container: str, item: str) -> Any:
    """Baja de `response` a `response.<container>.<item>`.

    Devuelve `None` si el contenedor existe pero no trae `item` (página vacía).
    Si falta el contenedor, la respuesta no tiene la forma esperada.
    """

    if container not in envelope:
        raise ParseError(f"Response envelope has no <{container}> element")

    node = envelope[container]
    if not isinstance(node, dict):
        return None
    return node.get(item)
