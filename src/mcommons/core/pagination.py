"""Paginación por número de página.

La API no devuelve totales ni cursores: una página vacía (o ausente) es la
única señal de fin. Las páginas se piden una detrás de otra porque la
existencia de la página N+1 depende de que la N no esté vacía.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Sequence, TypeVar, Union

from loguru import logger

from mcommons.core.errors import ValidationError

T = TypeVar("T")

PageResult = Union[Sequence[T], T, None]


async def paginate(
    fetch_page: Callable[[int], Awaitable[PageResult[T]]],
    *,
    max_pages: int | None = None,
) -> list[T]:
    """Llama a `fetch_page(1)`, `fetch_page(2)`, ... y concatena los resultados.

    Reglas:
    - `None` o una secuencia vacía terminan el bucle (esa llamada cuenta).
    - Un objeto suelto (la API omite la lista cuando hay un solo elemento) se
      añade como un único item.
    - Un error de `fetch_page` se propaga tal cual; lo acumulado se descarta.
    - `max_pages` es un tope opcional para servidores que nunca devuelven una
      página vacía. Sin tope el bucle depende solo del servidor.
    """

    if max_pages is not None and max_pages < 1:
        raise ValidationError("max_pages must be a positive integer")

    results: list[T] = []
    page = 1
    while True:
        if max_pages is not None and page > max_pages:
            logger.warning("Pagination stopped at max_pages={} with {} items", max_pages, len(results))
            break

        batch = await fetch_page(page)
        if batch is None:
            break
        if isinstance(batch, (list, tuple)):
            if not batch:
                break
            results.extend(batch)
        else:
            results.append(batch)

        logger.debug("Fetched page {} ({} items so far)", page, len(results))
        page += 1

    return results
