"""Tests for the storefront menu client."""

import httpx
import pytest

from storefront.core.money import format_cents, format_delta
from storefront.services.menu_client import MenuClient, MenuFetchError

MENU_BODY = {
    "tenant": {"id": "t1", "slug": "estafeten", "name": "Estafeten", "branding": {}, "settings": {}},
    "categories": [
        {
            "id": "c1",
            "name": "Hamburguesas",
            "slug": "hamburguesas",
            "sortOrder": 1,
            "isFeatured": True,
            "products": [
                {"id": "p1", "name": "Clásica", "description": "", "basePriceCents": 1150},
            ],
        }
    ],
    "modifierGroups": [],
}


def make_client(handler) -> MenuClient:
    return MenuClient(base_url="http://menu.test", transport=httpx.MockTransport(handler))


class TestMenuClient:
    def test_fetches_and_parses_menu(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=MENU_BODY)

        with make_client(handler) as client:
            menu = client.fetch_menu("estafeten")

        assert requests[0].url.path == "/api/menu/estafeten"
        assert menu.tenant.name == "Estafeten"
        assert menu.categories[0].products[0].base_price_cents == 1150
        assert menu.find_product("p1").name == "Clásica"

    def test_tenant_slug_is_quoted_into_one_path_segment(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(404, json={"error": "Tenant not found"})

        with make_client(handler) as client:
            with pytest.raises(MenuFetchError):
                client.fetch_menu("a/b?c")

        assert requests[0].url.raw_path == b"/api/menu/a%2Fb%3Fc"
        assert requests[0].url.query == b""

    def test_not_found(self):
        def handler(request):
            return httpx.Response(404, json={"error": "Tenant not found"})

        with make_client(handler) as client:
            with pytest.raises(MenuFetchError) as exc_info:
                client.fetch_menu("ghost")

        assert exc_info.value.status_code == 404
        assert exc_info.value.is_not_found
        assert "Tenant not found" in str(exc_info.value)

    def test_server_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, json={"error": "Internal error"})

        with make_client(handler) as client:
            with pytest.raises(MenuFetchError) as exc_info:
                client.fetch_menu("estafeten")

        assert exc_info.value.status_code == 500
        assert not exc_info.value.is_not_found
        assert len(calls) == 1

    def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with make_client(handler) as client:
            with pytest.raises(MenuFetchError) as exc_info:
                client.fetch_menu("estafeten")

        assert exc_info.value.status_code is None
        assert exc_info.value.tenant == "estafeten"

    def test_malformed_body(self):
        def handler(request):
            return httpx.Response(200, json={"categories": "nope"})

        with make_client(handler) as client:
            with pytest.raises(MenuFetchError, match="malformed"):
                client.fetch_menu("estafeten")


class TestMoneyFormatting:
    @pytest.mark.parametrize("cents,expected", [
        (0, "0,00 €"),
        (None, "0,00 €"),
        (5, "0,05 €"),
        (1120, "11,20 €"),
        (123456, "1.234,56 €"),
        (-250, "-2,50 €"),
    ])
    def test_format_cents(self, cents, expected):
        assert format_cents(cents) == expected

    def test_format_delta(self):
        assert format_delta(120) == "+ 1,20 €"
        assert format_delta(0) == "Incluido"
