"""
Tests unitaires pour le client upstream HTTPX.
"""
import httpx
import pytest

from gamehub_proxy.proxy.client import (
    UpstreamClient,
    create_upstream_client,
    forwardable_headers,
    response_headers,
)


class TestHeaderFilters:
    """Filtrage des headers relayés."""

    def test_forwardable_headers(self):
        headers = {
            "host": "proxy.example",
            "content-length": "12",
            "accept-encoding": "gzip, br",
            "connection": "keep-alive",
            "content-type": "application/json",
            "token": "abc",
        }
        assert forwardable_headers(headers) == [
            ("content-type", "application/json"),
            ("token", "abc"),
        ]

    def test_forwardable_headers_keeps_repeated_values(self):
        headers = httpx.Headers([("x-a", "1"), ("host", "proxy.example"), ("x-a", "2")])
        assert forwardable_headers(headers) == [("x-a", "1"), ("x-a", "2")]

    def test_response_headers_drops_hop_by_hop(self):
        headers = httpx.Headers({
            "content-type": "text/plain",
            "transfer-encoding": "chunked",
            "etag": "W/\"1\"",
        })
        assert response_headers(headers) == {"content-type": "text/plain", "etag": "W/\"1\""}


class TestUpstreamClient:
    """Tests du client upstream."""

    def test_init_default_values(self):
        client = UpstreamClient()
        assert client.timeout == 30.0

    def test_factory_custom(self):
        client = create_upstream_client(timeout=5.0)
        assert isinstance(client, UpstreamClient)
        assert client.timeout == 5.0

    def test_build_request(self):
        client = UpstreamClient()
        req = client.build_request(
            "POST",
            "https://meta.test/card/getGameDetail",
            {"Content-Type": "application/json"},
            b'{"id":1}'
        )
        assert req.method == "POST"
        assert str(req.url) == "https://meta.test/card/getGameDetail"
        assert req.headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_custom_transport(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"path": request.url.path})

        async with create_upstream_client(transport=httpx.MockTransport(handler)) as client:
            response = await client.get("https://static.test/base/getBaseInfo")

        assert response.json() == {"path": "/base/getBaseInfo"}

    @pytest.mark.asyncio
    async def test_aclose_reopens(self):
        client = UpstreamClient()
        first = client.open()
        await client.aclose()
        assert client.open() is not first
        await client.aclose()
