"""Tests for the HTTP catalog client, using httpx.MockTransport."""

import json

import httpx
import pytest

from partfit.catalog.http import HttpCatalogClient
from partfit.exceptions import CatalogDecodeError, CatalogUnavailableError

BASE_URL = "https://catalog.test/api"


def make_client(handler):
    transport = httpx.MockTransport(handler)
    return HttpCatalogClient(
        client=httpx.AsyncClient(transport=transport, base_url=BASE_URL)
    )


def json_response(payload, status=200):
    return httpx.Response(status, content=json.dumps(payload).encode())


class TestEndpoints:
    @pytest.mark.asyncio
    async def test_brands(self):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return json_response({"data": [{"id": 5, "name": "Volkswagen"}]})

        brands = await make_client(handler).list_brands()
        assert seen == ["/api/brand/all-brand"]
        assert brands[0].id == "5"

    @pytest.mark.asyncio
    async def test_models_query(self):
        seen = []

        def handler(request):
            seen.append((request.url.path, request.url.params.get("brand_id")))
            return json_response({"data": [{"id": 9, "model_name": "Golf"}]})

        models = await make_client(handler).list_models("5")
        assert seen == [("/api/getModelByBrandId", "5")]
        assert models[0].name == "Golf"

    @pytest.mark.asyncio
    async def test_engines_query(self):
        seen = []

        def handler(request):
            seen.append((request.url.path, request.url.params.get("model_id")))
            return json_response({"data": {"sub_models": [{"id": 2, "name": "2.0 TDI"}]}})

        engines = await make_client(handler).list_engines("9")
        assert seen == [("/api/getSubModelByModelId", "9")]
        assert engines[0].name == "2.0 TDI"

    @pytest.mark.asyncio
    async def test_manufacturers_and_products(self):
        def handler(request):
            if request.url.path.endswith("/manufacturers"):
                return json_response({"data": [{"id": 1, "name": "Bosch"}]})
            return json_response({"data": [{"id": 100, "part_name": "Pad"}]})

        client = make_client(handler)
        makers = await client.list_manufacturers()
        products = await client.list_products()

        assert makers[0].name == "Bosch"
        assert products == [{"id": 100, "part_name": "Pad"}]

    @pytest.mark.asyncio
    async def test_fetch_manufacturers(self):
        client = make_client(lambda request: json_response([{"id": 2, "name": "Brembo"}]))
        assert [m.name for m in await client.fetch_manufacturers()] == ["Brembo"]


class TestFailuresBecomeEmptyLists:
    @pytest.mark.asyncio
    async def test_server_error(self):
        client = make_client(lambda request: httpx.Response(500))
        assert await client.list_brands() == []

    @pytest.mark.asyncio
    async def test_not_found(self):
        client = make_client(lambda request: httpx.Response(404))
        assert await client.list_models("5") == []

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        assert await make_client(handler).list_engines("9") == []

    @pytest.mark.asyncio
    async def test_body_not_json(self):
        client = make_client(lambda request: httpx.Response(200, content=b"<html>"))
        assert await client.list_brands() == []

    @pytest.mark.asyncio
    async def test_unexpected_envelope(self):
        client = make_client(lambda request: json_response({"message": "maintenance"}))
        assert await client.list_products() == []


class TestFetchManufacturersRaises:
    @pytest.mark.asyncio
    async def test_server_error(self):
        client = make_client(lambda request: httpx.Response(500))
        with pytest.raises(CatalogUnavailableError) as exc_info:
            await client.fetch_manufacturers()
        assert exc_info.value.details == "HTTP 500"

    @pytest.mark.asyncio
    async def test_unexpected_envelope(self):
        client = make_client(lambda request: json_response({"message": "maintenance"}))
        with pytest.raises(CatalogDecodeError):
            await client.fetch_manufacturers()


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self):
        inner = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: json_response([])),
            base_url=BASE_URL,
        )

        async with HttpCatalogClient(client=inner) as catalog:
            await catalog.list_brands()

        assert inner.is_closed is False
        await inner.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self):
        catalog = HttpCatalogClient(base_url=BASE_URL, timeout=1.0)
        await catalog.aclose()
        assert catalog._client.is_closed is True
