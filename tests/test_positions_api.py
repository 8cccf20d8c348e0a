from decimal import Decimal

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.positions.dto import RecordTransactionDto

TOKEN = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"


def trade_body(action, amount, price="100", value="1000", tx="0x1", **overrides):
    body = {
        "token_address": TOKEN,
        "chain": "eth",
        "token_symbol": "USDC",
        "token_name": "USD Coin",
        "action": action,
        "amount": amount,
        "price_per_token": price,
        "total_value_usd": value,
        "transaction_hash": tx,
        "wallet_address": "0x742d35Cc6634C0532925a3b844Bc454e4438f44e",
    }
    body.update(overrides)
    return body


async def post_trade(client, user_id, body):
    return await client.post(f"/api/v1/trade/position/{user_id}", json=body)


async def test_buy_buy_sell_over_http(client, sample_user):
    uid = sample_user.telegram_id

    response = await post_trade(client, uid, trade_body("buy", 10, price=100, tx="0x1"))
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["amount"] == "10"
    assert data["average_basis"] == "100"

    await post_trade(client, uid, trade_body("buy", 10, price=200, tx="0x2"))
    response = await post_trade(client, uid, trade_body("sell", 5, price=220, tx="0x3"))

    body = response.json()
    assert body["statusCode"] == 200
    assert body["message"] == "OK"
    assert body["data"]["amount"] == "15"
    assert body["data"]["average_basis"] == "150"
    assert body["data"]["chain"] == "ETH"
    assert body["data"]["token_address"] == TOKEN.lower()
    assert [t["action"] for t in body["data"]["transactions"]] == ["buy", "buy", "sell"]
    assert body["data"]["transactions"][2]["amount"] == "5"


async def test_oversell_reports_available_amount(client, sample_user):
    uid = sample_user.telegram_id
    await post_trade(client, uid, trade_body("buy", 15, price=150))

    response = await post_trade(client, uid, trade_body("sell", 100, price=150, tx="0x2"))

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Insufficient balance"
    assert body["data"]["availableAmount"] == "15"

    position = await client.get(f"/api/v1/trade/position/{uid}/{TOKEN}/ETH")
    assert position.json()["data"]["amount"] == "15"
    assert len(position.json()["data"]["transactions"]) == 1


async def test_invalid_amounts_are_rejected(client, sample_user):
    uid = sample_user.telegram_id

    for bad in (0, -5, "NaN", "Infinity", "abc"):
        response = await post_trade(client, uid, trade_body("buy", bad))
        assert response.status_code == 400, bad
        assert response.json()["message"] == "Validation Error"

    response = await post_trade(client, uid, trade_body("hold", 1))
    assert response.status_code == 400


async def test_exactly_one_basis_required(client, sample_user):
    uid = sample_user.telegram_id

    both = trade_body("buy", 1, mcap="1000000")
    assert (await post_trade(client, uid, both)).status_code == 400

    neither = trade_body("buy", 1)
    del neither["price_per_token"]
    assert (await post_trade(client, uid, neither)).status_code == 400

    mcap_only = trade_body("buy", 1)
    del mcap_only["price_per_token"]
    mcap_only["mcap"] = 2500000
    response = await post_trade(client, uid, mcap_only)
    assert response.status_code == 200
    assert response.json()["data"]["basis_type"] == "mcap"
    assert response.json()["data"]["average_basis"] == "2500000"


async def test_unknown_user_gets_404(client):
    response = await post_trade(client, "404404", trade_body("buy", 1))
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"

    response = await client.get("/api/v1/trade/positions/404404")
    assert response.status_code == 404


async def test_positions_status_filter(client, sample_user):
    uid = sample_user.telegram_id
    await post_trade(client, uid, trade_body("buy", 2))
    await post_trade(client, uid, trade_body("buy", 1, token_address="0xdead", tx="0x2"))
    await post_trade(client, uid, trade_body("sell", 1, token_address="0xdead", tx="0x3"))

    open_ = (await client.get(f"/api/v1/trade/positions/{uid}?status=open")).json()["data"]
    closed = (await client.get(f"/api/v1/trade/positions/{uid}?status=closed")).json()["data"]
    everything = (await client.get(f"/api/v1/trade/positions/{uid}")).json()["data"]

    assert [p["token_address"] for p in open_] == [TOKEN.lower()]
    assert [p["token_address"] for p in closed] == ["0xdead"]
    assert closed[0]["amount"] == "0"
    assert len(everything) == 2

    response = await client.get(f"/api/v1/trade/positions/{uid}?status=pending")
    assert response.status_code == 400


async def test_missing_position_is_404(client, sample_user):
    response = await client.get(f"/api/v1/trade/position/{sample_user.telegram_id}/0xnone/ETH")
    assert response.status_code == 404
    assert response.json()["message"] == "Position not found"


async def test_history_endpoint(client, sample_user):
    uid = sample_user.telegram_id

    empty = (await client.get(f"/api/v1/trade/history/{uid}?timeframe=day")).json()["data"]
    assert empty["total_trades"] == 0
    assert empty["win_rate"] == "0"
    assert empty["average_trade_size"] == "0"
    assert "trades" not in empty

    await post_trade(client, uid, trade_body("buy", 20, price=150, value=3000))
    await post_trade(client, uid, trade_body("sell", 5, price=180, value=900, tx="0x2"))
    await post_trade(client, uid, trade_body("sell", 5, price=120, value=600, tx="0x3"))

    response = await client.get(f"/api/v1/trade/history/{uid}?timeframe=week&detailed=true")
    data = response.json()["data"]

    assert data["timeframe"] == "week"
    assert data["total_trades"] == 2
    assert data["winning_trades"] == 1
    assert data["losing_trades"] == 1
    assert data["total_volume"] == "1500"
    assert data["realized_pnl"] == "0"
    assert data["win_rate"] == "50"
    assert data["average_trade_size"] == "750"
    assert [t["profit"] for t in data["trades"]] == ["150", "-150"]
    assert data["trades"][0]["symbol"] == "USDC"


async def test_api_key_required(client, sample_user):
    response = await client.get(
        f"/api/v1/trade/positions/{sample_user.telegram_id}", headers={"X-API-Key": "wrong"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Unauthorized"

    health = await client.get("/api/v1/health", headers={"X-API-Key": ""})
    assert health.status_code == 200
    assert health.json()["data"] == "pong"


async def test_decimals_beyond_column_range_are_rejected(client, sample_user):
    uid = sample_user.telegram_id

    too_large = await post_trade(client, uid, trade_body("buy", 1, price="1e50"))
    assert too_large.status_code == 400
    assert too_large.json()["message"] == "Validation Error"

    huge_mcap = trade_body("buy", 1)
    del huge_mcap["price_per_token"]
    huge_mcap["mcap"] = "100000000000000000000"
    assert (await post_trade(client, uid, huge_mcap)).status_code == 400

    for bad in ("0.1234567890123456789123", "0.0000000000000000001"):
        response = await post_trade(client, uid, trade_body("buy", bad))
        assert response.status_code == 400, bad
        assert response.json()["message"] == "Validation Error"

    response = await client.get(f"/api/v1/trade/positions/{uid}")
    assert response.json()["data"] == []


def test_trade_dto_accepts_full_column_precision():
    dto = RecordTransactionDto(**trade_body(
        "buy", "99999999999999999999.999999999999999999", price="0.000000000000000001"
    ))
    assert dto.amount == Decimal("99999999999999999999.999999999999999999")
    assert dto.price_basis == Decimal("1e-18")

    with pytest.raises(PydanticValidationError):
        RecordTransactionDto(**trade_body("buy", "1", value="0.0000000000000000001"))
