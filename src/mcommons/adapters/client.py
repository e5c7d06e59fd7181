"""Cliente de la API de Mobile Commons.

Un método por endpoint remoto. Dos formas:
- Listados (GET): desenvuelven `response.<contenedor>.<item>`, normalizan el
  caso "un solo elemento" con `as_list` y construyen registros tipados. Los
  endpoints paginados se recorren con `paginate`.
- Acciones (POST): envían un formulario y devuelven el envelope tal cual;
  son acuses de recibo, no listados.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping, Sequence, TypeVar

import httpx
import pydantic

from mcommons.adapters.transport import Transport
from mcommons.adapters.xml_response import as_list, unwrap
from mcommons.core.config import ClientSettings
from mcommons.core.domain.credentials import Credentials
from mcommons.core.domain.models import (
    Broadcast,
    Campaign,
    Click,
    Group,
    GroupMember,
    Profile,
    Record,
    Subscriber,
    TinyUrl,
)
from mcommons.core.errors import ParseError, ValidationError
from mcommons.core.interfaces.transport import RequestSender
from mcommons.core.pagination import paginate

R = TypeVar("R", bound=Record)

GROUP_MEMBERS_PAGE_SIZE = 100
PROFILES_LIMIT = 5


def _iso_utc(value: datetime) -> str:
    """ISO-8601 en UTC con milisegundos y sufijo `Z` (naive = UTC)."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def _to_records(model: type[R], items: Any) -> list[R]:
    try:
        return [model.model_validate(item) for item in as_list(items)]
    except pydantic.ValidationError as exc:
        raise ParseError(f"Unexpected {model.__name__} shape: {exc}") from exc


class MobileCommonsClient:
    """Cliente asíncrono tipado.

    Uso:
        async with MobileCommonsClient(BearerToken(token="...")) as client:
            groups = await client.list_groups()

    Varios métodos pueden ejecutarse en paralelo sobre la misma instancia: la
    única pieza compartida es el pool de conexiones de httpx.
    """

    def __init__(
        self,
        credentials: Credentials,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sender: RequestSender | None = None,
    ) -> None:
        self._transport: RequestSender = sender or Transport(
            credentials, settings, transport=transport
        )

    async def aclose(self) -> None:
        close = getattr(self._transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "MobileCommonsClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_items(
        self, path: str, container: str, item: str, query: Mapping[str, Any] | None = None
    ) -> Any:
        envelope = await self._transport.send("GET", path, query=query)
        return unwrap(envelope, container, item)

    async def _get_all_pages(
        self,
        path: str,
        container: str,
        item: str,
        query: Mapping[str, Any] | None = None,
        *,
        max_pages: int | None = None,
    ) -> list[Any]:
        async def fetch_page(page: int) -> Any:
            return await self._get_items(path, container, item, {**(query or {}), "page": page})

        return await paginate(fetch_page, max_pages=max_pages)

    async def _post(self, path: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self._transport.send("POST", path, body=body)

    # ------------------------------------------------------------------
    # Campaigns
    # ------------------------------------------------------------------

    async def list_campaigns(self) -> list[Campaign]:
        items = await self._get_items("/campaigns", "campaigns", "campaign")
        return _to_records(Campaign, items)

    async def list_campaign_subscribers(
        self, campaign_id: str, *, max_pages: int | None = None
    ) -> list[Subscriber]:
        items = await self._get_all_pages(
            "/campaign_subscribers",
            "subscriptions",
            "sub",
            {"campaign_id": campaign_id},
            max_pages=max_pages,
        )
        return _to_records(Subscriber, items)

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    async def list_groups(self, *, max_pages: int | None = None) -> list[Group]:
        items = await self._get_all_pages("/groups", "groups", "group", max_pages=max_pages)
        return _to_records(Group, items)

    async def list_group_members(
        self,
        group_id: str,
        updated_since: datetime | None = None,
        *,
        limit: int = GROUP_MEMBERS_PAGE_SIZE,
        max_pages: int | None = None,
    ) -> list[GroupMember]:
        """Miembros de un grupo; `updated_since` filtra por fecha de actualización."""

        query = {
            "group_id": group_id,
            "limit": limit,
            "from": _iso_utc(updated_since) if updated_since is not None else None,
        }
        items = await self._get_all_pages(
            "/group_members", "group", "profile", query, max_pages=max_pages
        )
        return _to_records(GroupMember, items)

    async def add_group_members(self, group_id: str, phone_numbers: Sequence[str]) -> list[Any]:
        if isinstance(phone_numbers, str):
            phone_numbers = [phone_numbers]
        if not phone_numbers:
            raise ValidationError("add_group_members requires at least one phone number")

        envelope = await self._post(
            "/group_members",
            {"group_id": group_id, "phone_numbers": list(phone_numbers)},
        )
        return as_list(unwrap(envelope, "group_members", "member"))

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    async def list_profiles(self, *, limit: int = PROFILES_LIMIT) -> list[Profile]:
        items = await self._get_items("/profiles", "profiles", "profile", {"limit": limit})
        return _to_records(Profile, items)

    async def profile_update(
        self,
        opt_in_path_id: str,
        phone_number: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        postal_code: str | None = None,
        **fields: Any,
    ) -> dict[str, Any]:
        """Crea o actualiza un perfil; `fields` admite columnas adicionales."""

        body = {
            **fields,
            "opt_in_path_id": opt_in_path_id,
            "phone_number": phone_number,
            "first_name": first_name,
            "last_name": last_name,
            "postal_code": postal_code,
        }
        return await self._post("/profile_update", body)

    # ------------------------------------------------------------------
    # Messaging
    # ------------------------------------------------------------------

    async def send_sms(self, campaign_id: str, phone_number: str, body: str) -> dict[str, Any]:
        return await self._post(
            "/send_sms",
            {"campaign_id": campaign_id, "phone_number": phone_number, "body": body},
        )

    async def send_mms(
        self, campaign_id: str, phone_number: str, body: str, media_url: str
    ) -> dict[str, Any]:
        return await self._post(
            "/send_mms",
            {
                "campaign_id": campaign_id,
                "phone_number": phone_number,
                "body": body,
                "media_url": media_url,
            },
        )

    async def schedule_broadcast(
        self, campaign_id: str, body: str, time: str | datetime
    ) -> dict[str, Any]:
        if isinstance(time, datetime):
            time = _iso_utc(time)
        if not isinstance(time, str) or not time.strip():
            raise ValidationError("schedule_broadcast requires a delivery time")
        return await self._post(
            "/schedule_broadcast",
            {"campaign_id": campaign_id, "body": body, "time": time},
        )

    async def list_broadcasts(
        self, campaign_id: str | None = None, *, max_pages: int | None = None
    ) -> list[Broadcast]:
        items = await self._get_all_pages(
            "/broadcasts",
            "broadcasts",
            "broadcast",
            {"campaign_id": campaign_id},
            max_pages=max_pages,
        )
        return _to_records(Broadcast, items)

    # ------------------------------------------------------------------
    # Short URLs
    # ------------------------------------------------------------------

    async def list_tiny_urls(self) -> list[TinyUrl]:
        items = await self._get_items("/tinyurls", "tinyurls", "tinyurl")
        return _to_records(TinyUrl, items)

    async def list_clicks(self, *, url_id: str | None = None, url: str | None = None) -> list[Click]:
        """Clicks de una URL corta, por `url_id` o por `url` (exactamente uno)."""

        if (url_id is None) == (url is None):
            raise ValidationError("list_clicks requires exactly one of url_id or url")
        query = {"url_id": url_id} if url_id is not None else {"url": url}
        items = await self._get_items("/clicks", "clicks", "click", query)
        return _to_records(Click, items)
