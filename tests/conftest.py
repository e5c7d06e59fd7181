"""Fixtures compartidas: un cliente real sobre `httpx.MockTransport`."""

from __future__ import annotations

from typing import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from mcommons import BearerToken, ClientSettings, MobileCommonsClient


def xml_response(body: str, status_code: int = 200) -> httpx.Response:
    content = '<?xml version="1.0" encoding="UTF-8"?>\n' + body
    # La API a veces declara text/html; el cliente debe ignorarlo.
    return httpx.Response(status_code, content=content.encode("utf-8"), headers={"Content-Type": "text/html"})


def form_fields(request: httpx.Request) -> dict[str, list[str]]:
    return parse_qs(request.content.decode("utf-8"))


class RecordingHandler:
    """Handler de MockTransport que guarda cada request recibida."""

    def __init__(self, route: Callable[[httpx.Request], httpx.Response]) -> None:
        self.route = route
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.route(request)

    @property
    def pages(self) -> list[int]:
        return [int(r.url.params["page"]) for r in self.requests]


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(base_url="https://secure.mcommons.com/api", timeout_seconds=10)


@pytest.fixture
def make_client(settings: ClientSettings):
    def _make(route, credentials=None) -> tuple[MobileCommonsClient, RecordingHandler]:
        credentials = credentials or BearerToken(token="test-token")
        handler = route if isinstance(route, RecordingHandler) else RecordingHandler(route)
        client = MobileCommonsClient(credentials, settings, transport=httpx.MockTransport(handler))
        return client, handler

    return _make
