"""Tests del transporte: autenticación, errores y codificación de parámetros."""

from __future__ import annotations

import base64

import httpx
import pytest

from mcommons import BasicAuth, BearerToken, MobileCommonsClient, TransportError, ValidationError
from mcommons.adapters.http_client import build_async_client, build_auth
from mcommons.adapters.transport import Transport
from tests.conftest import RecordingHandler, form_fields, xml_response

OK = '<response success="true"><campaigns/></response>'


def make_transport(handler: RecordingHandler, credentials, settings) -> Transport:
    return Transport(credentials, settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_bearer_credentials_send_bearer_header_only(settings):
    handler = RecordingHandler(lambda request: xml_response(OK))
    async with make_transport(handler, BearerToken(token="abc123"), settings) as transport:
        await transport.send("GET", "/campaigns")

    (request,) = handler.requests
    assert request.headers["Authorization"] == "Bearer abc123"
    assert not request.headers["Authorization"].startswith("Basic ")


@pytest.mark.asyncio
async def test_basic_credentials_send_basic_header_only(settings):
    handler = RecordingHandler(lambda request: xml_response(OK))
    async with make_transport(handler, BasicAuth(username="user", password="pass"), settings) as transport:
        await transport.send("GET", "/campaigns")

    (request,) = handler.requests
    expected = base64.b64encode(b"user:pass").decode("ascii")
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert "Bearer" not in request.headers["Authorization"]


def test_build_auth_rejects_unknown_credentials():
    with pytest.raises(ValidationError):
        build_auth({"apiKey": "abc"})  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_request_targets_base_url_and_drops_none_params(settings):
    handler = RecordingHandler(lambda request: xml_response(OK))
    async with make_transport(handler, BearerToken(token="t"), settings) as transport:
        await transport.send("get", "/broadcasts", query={"page": 2, "campaign_id": None})

    (request,) = handler.requests
    assert request.method == "GET"
    assert request.url.path == "/api/broadcasts"
    assert request.url.host == "secure.mcommons.com"
    assert dict(request.url.params) == {"page": "2"}


@pytest.mark.asyncio
async def test_post_body_is_form_encoded(settings):
    handler = RecordingHandler(lambda request: xml_response('<response success="true"/>'))
    async with make_transport(handler, BearerToken(token="t"), settings) as transport:
        envelope = await transport.send(
            "POST", "/send_sms", body={"campaign_id": "1", "phone_number": "5551234", "body": "hi", "x": None}
        )

    (request,) = handler.requests
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert form_fields(request) == {"campaign_id": ["1"], "phone_number": ["5551234"], "body": ["hi"]}
    assert envelope == {"success": True}


@pytest.mark.asyncio
async def test_timeout_surfaces_as_transport_error_without_retry(settings):
    def route(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    handler = RecordingHandler(route)
    async with make_transport(handler, BearerToken(token="t"), settings) as transport:
        with pytest.raises(TransportError) as excinfo:
            await transport.send("GET", "/groups", query={"page": 1})

    assert len(handler.requests) == 1
    assert isinstance(excinfo.value.__cause__, httpx.TimeoutException)


@pytest.mark.asyncio
async def test_network_failure_surfaces_as_transport_error(settings):
    def route(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    handler = RecordingHandler(route)
    async with make_transport(handler, BearerToken(token="t"), settings) as transport:
        with pytest.raises(TransportError):
            await transport.send("GET", "/campaigns")

    assert len(handler.requests) == 1


@pytest.mark.asyncio
async def test_non_2xx_status_is_transport_error(settings):
    handler = RecordingHandler(lambda request: xml_response("<response/>", status_code=401))
    async with make_transport(handler, BearerToken(token="t"), settings) as transport:
        with pytest.raises(TransportError) as excinfo:
            await transport.send("GET", "/campaigns")

    assert excinfo.value.status_code == 401


def test_transport_uses_configured_timeout(settings):
    client = build_async_client(BearerToken(token="t"), settings)
    assert client.timeout.read == 10
    assert client.timeout.connect == 10


@pytest.mark.asyncio
async def test_injected_transport_keeps_auth_user_agent_and_timeout(settings):
    seen: list[httpx.Request] = []

    def route(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return xml_response(OK)

    credentials = BasicAuth(username="u", password="p")
    client = MobileCommonsClient(credentials, settings, transport=httpx.MockTransport(route))
    async with client:
        await client.list_campaigns()

    (request,) = seen
    expected = base64.b64encode(b"u:p").decode("ascii")
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.headers["User-Agent"] == settings.user_agent
    assert str(request.url) == "https://secure.mcommons.com/api/campaigns"
    assert request.extensions["timeout"]["read"] == 10
