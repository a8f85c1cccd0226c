"""
Tests for the HTTP application (asset_tracker/api).

Covers:
- /api/scrape-silver and /api/scrape-gold: 200 / 404 / 500 payloads
- /api/health and the /api/* not-found handler
- Tenant market-price sync, manual entry, listing, deletion, portfolio
- Tenant asset create / edit / delete and passcode change
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from asset_tracker.api import create_app
from asset_tracker.api.dependencies import get_fetcher
from asset_tracker.extractor.profiles import GOLD_PNJ_PROFILE, SILVER_PROFILE
from tests.conftest import StubFetcher

TENANT = "passcode-1234"


@pytest.fixture
def client(stub_fetcher: StubFetcher) -> Iterator[TestClient]:
    app = create_app(database_url="sqlite+aiosqlite:///:memory:")
    app.dependency_overrides[get_fetcher] = lambda: stub_fetcher
    with TestClient(app) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Scrape endpoints
# ---------------------------------------------------------------------------


class TestScrapeEndpoints:
    def test_scrape_silver_found(
        self, client: TestClient, stub_fetcher: StubFetcher, silver_page: str
    ) -> None:
        stub_fetcher.pages[SILVER_PROFILE.source_url] = silver_page

        response = client.get("/api/scrape-silver")

        assert response.status_code == 200
        assert response.json() == {"price": 1372000, "success": True}
        assert stub_fetcher.requested == [SILVER_PROFILE.source_url]

    def test_scrape_gold_found(
        self, client: TestClient, stub_fetcher: StubFetcher, gold_page: str
    ) -> None:
        stub_fetcher.pages[GOLD_PNJ_PROFILE.source_url] = gold_page

        response = client.get("/api/scrape-gold")

        assert response.status_code == 200
        assert response.json() == {"price": 18380000, "success": True}

    def test_scrape_silver_not_found(self, client: TestClient) -> None:
        response = client.get("/api/scrape-silver")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Could not find silver price on page",
            "success": False,
        }

    def test_scrape_gold_not_found(self, client: TestClient) -> None:
        response = client.get("/api/scrape-gold")

        assert response.status_code == 404
        assert response.json()["error"] == "Could not find PNJ gold price on page"
        assert response.json()["success"] is False

    def test_scrape_silver_fetch_timeout(
        self, client: TestClient, stub_fetcher: StubFetcher
    ) -> None:
        stub_fetcher.errors[SILVER_PROFILE.source_url] = "timeout of 10s exceeded"

        response = client.get("/api/scrape-silver")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch silver price: timeout of 10s exceeded",
            "success": False,
        }


class TestServiceRoutes:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert "T" in body["timestamp"]

    def test_unknown_api_route(self, client: TestClient) -> None:
        response = client.get("/api/scrape-platinum")

        assert response.status_code == 404
        assert response.json() == {"error": "API route not found: /api/scrape-platinum"}


# ---------------------------------------------------------------------------
# Tenant market prices
# ---------------------------------------------------------------------------


class TestMarketPriceRoutes:
    def test_sync_stores_scraped_price(
        self, client: TestClient, stub_fetcher: StubFetcher, gold_page: str
    ) -> None:
        stub_fetcher.pages[GOLD_PNJ_PROFILE.source_url] = gold_page

        response = client.post(f"/api/tenants/{TENANT}/market-prices/gold/sync")

        assert response.status_code == 200
        assert response.json() == {
            "symbol": "Gold",
            "price": 18380000,
            "updated_assets": 0,
            "success": True,
        }

        listed = client.get(f"/api/tenants/{TENANT}/market-prices").json()
        assert [p["symbol"] for p in listed["market_prices"]] == ["Gold"]
        assert Decimal(listed["market_prices"][0]["price"]) == Decimal("18380000")

    def test_sync_not_found_stores_nothing(self, client: TestClient) -> None:
        response = client.post(f"/api/tenants/{TENANT}/market-prices/silver/sync")

        assert response.status_code == 404
        assert response.json()["success"] is False
        assert client.get(f"/api/tenants/{TENANT}/market-prices").json()["market_prices"] == []

    def test_sync_fetch_error(self, client: TestClient, stub_fetcher: StubFetcher) -> None:
        stub_fetcher.errors[SILVER_PROFILE.source_url] = "Request failed with status code 503"

        response = client.post(f"/api/tenants/{TENANT}/market-prices/silver/sync")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch silver price: Request failed with status code 503",
            "success": False,
        }

    def test_sync_unknown_profile(self, client: TestClient) -> None:
        response = client.post(f"/api/tenants/{TENANT}/market-prices/platinum/sync")

        assert response.status_code == 404
        assert response.json() == {"error": "Unknown price source: platinum", "success": False}

    def test_manual_price_then_delete(self, client: TestClient) -> None:
        put = client.put(f"/api/tenants/{TENANT}/market-prices/Silver", json={"price": 1372000})
        assert put.status_code == 200
        assert put.json()["success"] is True

        deleted = client.delete(f"/api/tenants/{TENANT}/market-prices/Silver")
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True}

        again = client.delete(f"/api/tenants/{TENANT}/market-prices/Silver")
        assert again.status_code == 404
        assert again.json()["success"] is False

    def test_manual_price_response_renders_decimal_as_string(self, client: TestClient) -> None:
        """PUT and GET both render stored prices as JSON strings."""
        put = client.put(f"/api/tenants/{TENANT}/market-prices/Silver", json={"price": 1372000})

        body = put.json()
        assert body["symbol"] == "Silver"
        assert body["price"] == "1372000"
        assert body["updated_assets"] == 0
        assert body["updated_at"] is not None

        listed = client.get(f"/api/tenants/{TENANT}/market-prices").json()["market_prices"]
        assert isinstance(listed[0]["price"], str)

    def test_manual_price_rejects_negative(self, client: TestClient) -> None:
        response = client.put(f"/api/tenants/{TENANT}/market-prices/Gold", json={"price": -1})
        assert response.status_code == 422

    def test_prices_are_tenant_scoped(self, client: TestClient) -> None:
        client.put(f"/api/tenants/{TENANT}/market-prices/Gold", json={"price": 100})

        other = client.get("/api/tenants/someone-else/market-prices").json()
        assert other["market_prices"] == []

    def test_empty_portfolio(self, client: TestClient) -> None:
        response = client.get(f"/api/tenants/{TENANT}/portfolio")

        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["total_value"]) == Decimal("0")
        assert Decimal(body["profit_loss_percentage"]) == Decimal("0")
        assert body["category_distribution"] == []
        assert body["success"] is True


# ---------------------------------------------------------------------------
# Tenant assets
# ---------------------------------------------------------------------------


class TestAssetRoutes:
    def create(self, client: TestClient, **fields) -> dict:
        body = {"name": "Silver bar", "category": "Silver", "units": "10", "buy_price": "1300000"}
        body.update(fields)
        response = client.post(f"/api/tenants/{TENANT}/assets", json=body)
        assert response.status_code == 201
        return response.json()["asset"]

    def test_create_inherits_market_price_and_feeds_portfolio(self, client: TestClient) -> None:
        client.put(f"/api/tenants/{TENANT}/market-prices/Silver", json={"price": 1372000})

        asset = self.create(client)

        assert Decimal(asset["current_price"]) == Decimal("1372000")
        assert asset["category"] == "Silver"
        portfolio = client.get(f"/api/tenants/{TENANT}/portfolio").json()
        assert Decimal(portfolio["total_value"]) == Decimal("13720000")
        assert Decimal(portfolio["total_profit_loss"]) == Decimal("720000")

    def test_create_defaults(self, client: TestClient) -> None:
        response = client.post(f"/api/tenants/{TENANT}/assets", json={})

        asset = response.json()["asset"]
        assert asset["name"] == "Unnamed Asset"
        assert asset["category"] == "Other"
        assert asset["type"] == "N/A"

    def test_create_rejects_unknown_category(self, client: TestClient) -> None:
        response = client.post(f"/api/tenants/{TENANT}/assets", json={"category": "Platinum"})
        assert response.status_code == 422

    def test_sync_updates_created_assets(
        self, client: TestClient, stub_fetcher: StubFetcher, gold_page: str
    ) -> None:
        self.create(client, name="PNJ ring", category="Gold", units="3", buy_price="17000000")
        stub_fetcher.pages[GOLD_PNJ_PROFILE.source_url] = gold_page

        synced = client.post(f"/api/tenants/{TENANT}/market-prices/gold/sync").json()

        assert synced["updated_assets"] == 1
        (asset,) = client.get(f"/api/tenants/{TENANT}/assets").json()["assets"]
        assert Decimal(asset["current_price"]) == Decimal("18380000")

    def test_patch_and_delete(self, client: TestClient) -> None:
        asset = self.create(client)

        patched = client.patch(
            f"/api/tenants/{TENANT}/assets/{asset['id']}", json={"note": "vault"}
        )
        assert patched.status_code == 200
        assert patched.json()["asset"]["note"] == "vault"
        assert patched.json()["asset"]["name"] == "Silver bar"

        deleted = client.delete(f"/api/tenants/{TENANT}/assets/{asset['id']}")
        assert deleted.json() == {"success": True}

        missing = client.get(f"/api/tenants/{TENANT}/assets/{asset['id']}")
        assert missing.status_code == 404
        assert missing.json() == {"error": f"No asset with id {asset['id']}", "success": False}

    def test_assets_are_tenant_scoped(self, client: TestClient) -> None:
        asset = self.create(client)

        response = client.patch(
            f"/api/tenants/someone-else/assets/{asset['id']}", json={"note": "x"}
        )

        assert response.status_code == 404
        assert client.get("/api/tenants/someone-else/assets").json()["assets"] == []

    def test_rename_moves_data(self, client: TestClient) -> None:
        self.create(client)
        client.put(f"/api/tenants/{TENANT}/market-prices/Silver", json={"price": 1372000})

        response = client.post(
            f"/api/tenants/{TENANT}/rename", json={"new_tenant_id": "  new-passcode  "}
        )

        assert response.status_code == 200
        assert response.json() == {
            "tenant_id": "new-passcode",
            "moved": {"assets": 1, "market_prices": 1},
            "success": True,
        }
        assert client.get(f"/api/tenants/{TENANT}/assets").json()["assets"] == []
        assert len(client.get("/api/tenants/new-passcode/assets").json()["assets"]) == 1

    def test_rename_rejects_blank_id(self, client: TestClient) -> None:
        response = client.post(f"/api/tenants/{TENANT}/rename", json={"new_tenant_id": "   "})
        assert response.status_code == 422
