"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from portfolio_tracker.api.app import create_app
from portfolio_tracker.config import Settings
from portfolio_tracker.core.portfolio.store import HoldingStore


@pytest.fixture
def client(quotes):
    settings = Settings(persist_holdings=False, max_holdings=3, valuation_timeout_seconds=2)
    app = create_app(settings=settings, quote_source=quotes)
    return TestClient(app)


def add(client, symbol, shares=10, purchase_price=100.0, **extra):
    return client.post(
        "/api/portfolio/",
        json={"symbol": symbol, "shares": shares, "purchase_price": purchase_price, **extra},
    )


class TestHoldingRoutes:
    """Tests for add/get/delete holdings."""

    def test_add_holding(self, client):
        response = add(client, "aapl", name="Apple Inc.")

        assert response.status_code == 201
        body = response.json()
        assert body["symbol"] == "AAPL"
        assert body["name"] == "Apple Inc."
        assert body["shares"] == 10
        assert body["purchase_price"] == 100.0

    def test_invalid_symbol_is_400(self, client):
        response = add(client, "TOOLONG")

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_symbol"

    def test_invalid_shares_is_400(self, client):
        response = add(client, "AAPL", shares=0)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_shares"

    def test_invalid_price_is_400(self, client):
        response = add(client, "AAPL", purchase_price=-1)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_price"

    def test_duplicate_is_409(self, client):
        add(client, "AAPL")
        response = add(client, "aapl")

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "duplicate_symbol"

    def test_capacity_is_409(self, client):
        for symbol in ["AAPL", "MSFT", "NVDA"]:
            assert add(client, symbol).status_code == 201

        response = add(client, "TSLA")

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "capacity_exceeded"

    def test_boolean_shares_is_400(self, client):
        response = add(client, "MSFT", shares=True)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_shares"
        assert client.get("/api/portfolio/MSFT").status_code == 404

    def test_boolean_price_is_400(self, client):
        response = add(client, "MSFT", purchase_price=True)

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalid_price"

    def test_missing_field_is_422(self, client):
        response = client.post("/api/portfolio/", json={"symbol": "AAPL"})
        assert response.status_code == 422

    def test_get_holding(self, client):
        add(client, "AAPL")

        assert client.get("/api/portfolio/aapl").json()["symbol"] == "AAPL"
        assert client.get("/api/portfolio/MSFT").status_code == 404

    def test_delete_holding(self, client):
        add(client, "AAPL")

        assert client.delete("/api/portfolio/aapl").status_code == 204
        assert client.get("/api/portfolio/").json() == []

    def test_delete_missing_holding_is_404(self, client):
        response = client.delete("/api/portfolio/AAPL")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "not_found"


class TestValuationRoutes:
    """Tests for enriched listing, summary and quotes."""

    def test_list_enriched_with_partial_failure(self, client, quotes):
        add(client, "AAPL", shares=10, purchase_price=100.0)
        add(client, "MSFT", shares=5, purchase_price=50.0)
        quotes.prices = {"AAPL": 110.0}

        response = client.get("/api/portfolio/")

        assert response.status_code == 200
        aapl, msft = response.json()
        assert aapl["current_price"] == 110.0
        assert aapl["gain_loss"] == pytest.approx(100.0)
        assert aapl["percent_change"] == pytest.approx(10.0)
        assert msft["current_price"] is None
        assert msft["gain_loss"] is None
        assert msft["percent_change"] is None

    def test_summary(self, client, quotes):
        add(client, "AAPL", shares=10, purchase_price=100.0)
        add(client, "MSFT", shares=5, purchase_price=50.0)
        quotes.prices = {"AAPL": 110.0, "MSFT": 40.0}

        summary = client.get("/api/portfolio/summary").json()

        assert summary["total_investment"] == pytest.approx(1250.0)
        assert summary["total_value"] == pytest.approx(1300.0)
        assert summary["total_gain_loss"] == pytest.approx(50.0)
        assert summary["gain_loss_percentage"] == pytest.approx(4.0)
        assert summary["top_performer"]["symbol"] == "AAPL"

    def test_summary_of_empty_portfolio(self, client):
        summary = client.get("/api/portfolio/summary").json()

        assert summary["total_value"] == 0.0
        assert summary["top_performer"] is None

    def test_valuation_reports_unpriced_symbols(self, client, quotes):
        add(client, "AAPL")
        add(client, "MSFT")
        quotes.prices = {"MSFT": 120.0}

        body = client.get("/api/portfolio/valuation").json()

        assert body["partial"] is True
        assert body["unpriced_symbols"] == ["AAPL"]
        assert len(body["holdings"]) == 2

    def test_quote(self, client, quotes):
        quotes.prices = {"TSLA": 250.0}

        body = client.get("/api/quotes/tsla").json()

        assert body["symbol"] == "TSLA"
        assert body["price"] == 250.0

    def test_quote_failure_is_502(self, client):
        response = client.get("/api/quotes/ZZZZ")

        assert response.status_code == 502
        assert response.json()["detail"]["error"] == "quote_unavailable"


class TestAppState:
    """Each app owns its own store."""

    def test_apps_do_not_share_holdings(self, quotes):
        settings = Settings(persist_holdings=False)
        first = TestClient(create_app(settings=settings, quote_source=quotes))
        second = TestClient(create_app(settings=settings, quote_source=quotes))

        add(first, "AAPL")

        assert len(first.get("/api/portfolio/").json()) == 1
        assert second.get("/api/portfolio/").json() == []

    def test_uses_injected_store(self, quotes):
        store = HoldingStore(max_holdings=1)
        client = TestClient(
            create_app(settings=Settings(persist_holdings=False), store=store, quote_source=quotes)
        )

        add(client, "AAPL")

        assert store.symbols() == ["AAPL"]
        assert add(client, "MSFT").status_code == 409

    def test_health(self, client):
        assert client.get("/api/health").json()["status"] == "ok"
