"""
API tests for holdings, valuation and BUY/SELL transactions.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


def post_transaction(client: TestClient, headers: dict, **body):
    payload = {"transactionDate": "2024-03-01", **body}
    return client.post("/api/stocks/transaction", headers=headers, json=payload)


class TestTransactionAPI:
    """Tests for POST /api/stocks/transaction."""

    def test_first_buy_adds_stock(self, client: TestClient, auth_headers: dict):
        """
        GIVEN no AAPL holding
        WHEN I POST a BUY with camelCase fields
        THEN response is 200 and the holding is created
        """
        response = post_transaction(
            client, auth_headers,
            ticker="aapl", shares="10", pricePerShare="100", transactionType="BUY",
            companyName="Apple Inc.",
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Stock added successfully"
        assert data["holding"]["ticker"] == "AAPL"
        assert data["holding"]["company_name"] == "Apple Inc."
        assert Decimal(data["holding"]["total_shares"]) == Decimal("10")

    def test_second_buy_updates_stock(self, client: TestClient, auth_headers: dict):
        post_transaction(
            client, auth_headers,
            ticker="AAPL", shares=10, pricePerShare=100, transactionType="BUY",
        )

        response = post_transaction(
            client, auth_headers,
            ticker="AAPL", shares=10, pricePerShare=200, transactionType="buy",
        )

        data = response.json()
        assert data["message"] == "Stock updated successfully"
        assert Decimal(data["holding"]["average_cost"]) == Decimal("150")

    def test_snake_case_body_accepted(self, client: TestClient, auth_headers: dict):
        response = client.post(
            "/api/stocks/transaction",
            headers=auth_headers,
            json={
                "ticker": "KO",
                "shares": "5",
                "price_per_share": "60",
                "transaction_type": "BUY",
                "transaction_date": "03/01/2024",
            },
        )

        assert response.status_code == 200

    def test_sell_returns_realized_gain(self, client: TestClient, auth_headers: dict):
        """
        GIVEN 20 AAPL at an average of $150
        WHEN I SELL 5 @ $180
        THEN realized gain is 150 and 15 shares remain
        """
        post_transaction(client, auth_headers, ticker="AAPL", shares=10, pricePerShare=100, transactionType="BUY")
        post_transaction(client, auth_headers, ticker="AAPL", shares=10, pricePerShare=200, transactionType="BUY")

        response = post_transaction(
            client, auth_headers,
            ticker="AAPL", shares=5, pricePerShare=180, transactionType="SELL",
        )

        data = response.json()
        assert response.status_code == 200
        assert data["message"] == "Stock sold successfully"
        assert Decimal(data["realized_gain_loss"]) == Decimal("150")
        assert Decimal(data["holding"]["total_shares"]) == Decimal("15")

    def test_full_sell_removes_holding(self, client: TestClient, auth_headers: dict):
        post_transaction(client, auth_headers, ticker="AAPL", shares=2, pricePerShare=100, transactionType="BUY")

        response = post_transaction(
            client, auth_headers,
            ticker="AAPL", shares=2, pricePerShare=120, transactionType="SELL",
        )

        assert response.json()["message"] == "Stock sold completely"
        assert response.json()["holding"] is None
        assert client.get("/api/stocks", headers=auth_headers).json() == []

    def test_oversell_is_400(self, client: TestClient, auth_headers: dict):
        post_transaction(client, auth_headers, ticker="AAPL", shares=2, pricePerShare=100, transactionType="BUY")

        response = post_transaction(
            client, auth_headers,
            ticker="AAPL", shares=3, pricePerShare=120, transactionType="SELL",
        )

        assert response.status_code == 400
        assert response.json()["error"] == "INSUFFICIENT_SHARES"

    def test_sell_unknown_ticker_is_404(self, client: TestClient, auth_headers: dict):
        response = post_transaction(
            client, auth_headers,
            ticker="TSLA", shares=1, pricePerShare=100, transactionType="SELL",
        )

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    @pytest.mark.parametrize(
        "body",
        [
            {"ticker": "AAPL", "shares": 0, "pricePerShare": 100, "transactionType": "BUY"},
            {"ticker": "AAPL", "shares": 1, "pricePerShare": -5, "transactionType": "BUY"},
            {"ticker": "AAPL", "shares": 1, "pricePerShare": 100, "transactionType": "HOLD"},
            {"ticker": "AAPL", "pricePerShare": 100, "transactionType": "BUY"},
            {"ticker": "AAPL", "shares": "abc", "pricePerShare": 100, "transactionType": "BUY"},
            {"ticker": "AAPL", "shares": 1, "pricePerShare": 100, "transactionType": "BUY",
             "transactionDate": "not a date"},
        ],
    )
    def test_invalid_body_is_400(self, client: TestClient, auth_headers: dict, body: dict):
        response = client.post("/api/stocks/transaction", headers=auth_headers, json=body)

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"
        assert client.get("/api/transactions", headers=auth_headers).json() == []


class TestStocksAPI:
    """Tests for GET /api/stocks and /api/stocks/summary."""

    def test_list_stocks_is_enriched(self, client: TestClient, auth_headers: dict):
        """
        GIVEN 15 AAPL at $150 average, $150 realized and $10 dividends
        WHEN I GET /api/stocks with AAPL quoted at $200
        THEN valuation fields are present and snake_case
        """
        post_transaction(client, auth_headers, ticker="AAPL", shares=10, pricePerShare=100, transactionType="BUY")
        post_transaction(client, auth_headers, ticker="AAPL", shares=10, pricePerShare=200, transactionType="BUY")
        post_transaction(client, auth_headers, ticker="AAPL", shares=5, pricePerShare=180, transactionType="SELL")
        client.post(
            "/api/dividends",
            headers=auth_headers,
            json={"ticker": "AAPL", "sharesHeld": 20, "amountPerShare": 0.5, "paymentDate": "2024-05-01"},
        )

        response = client.get("/api/stocks", headers=auth_headers)

        assert response.status_code == 200
        [aapl] = response.json()
        assert Decimal(aapl["current_price"]) == Decimal("200")
        assert Decimal(aapl["current_value"]) == Decimal("3000")
        assert Decimal(aapl["unrealized_gain_loss"]) == Decimal("750")
        assert Decimal(aapl["total_dividends"]) == Decimal("10")
        assert aapl["dividend_count"] == 1
        assert Decimal(aapl["total_realized_gains"]) == Decimal("150")
        assert Decimal(aapl["total_return"]) == Decimal("910")
        assert Decimal(aapl["total_return_percent"]) == Decimal("40.44")

    def test_summary(self, client: TestClient, auth_headers: dict):
        post_transaction(client, auth_headers, ticker="AAPL", shares=1, pricePerShare=100, transactionType="BUY")
        post_transaction(client, auth_headers, ticker="MSFT", shares=1, pricePerShare=300, transactionType="BUY")

        response = client.get("/api/stocks/summary", headers=auth_headers)

        data = response.json()
        assert data["holding_count"] == 2
        assert Decimal(data["total_cost"]) == Decimal("400")
        assert Decimal(data["current_value"]) == Decimal("600")
        assert Decimal(data["total_return_percent"]) == Decimal("50")

    def test_empty_summary(self, client: TestClient, auth_headers: dict):
        data = client.get("/api/stocks/summary", headers=auth_headers).json()

        assert data["holding_count"] == 0
        assert Decimal(data["total_return_percent"]) == Decimal("0")
