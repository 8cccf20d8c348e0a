USER = "555000111"


def wallet_body(name="main", **overrides):
    body = {
        "telegram_id": USER,
        "name": name,
        "address": "0x742d35Cc6634C0532925a3b844Bc454e4438f44e",
        "private_key": "0x4c0883a69102937d6231471b5dbb6204fe512961708279f3e2a4a1d5a3c6d1f2",
        "seed_phrase": "test test test test test test test test test test test junk",
    }
    body.update(overrides)
    return body


async def test_create_wallet_creates_user_with_default_settings(client):
    response = await client.post("/api/v1/wallet/evm", json=wallet_body())

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "main"
    assert data["settings"] == {"slippage": "10", "gas_limit": 300000}
    assert "private_key" not in data
    assert "seed_phrase" not in data

    # The lazily created user can now trade
    trade = await client.get(f"/api/v1/trade/positions/{USER}")
    assert trade.status_code == 200
    assert trade.json()["data"] == []


async def test_duplicate_wallet_name_rejected(client):
    await client.post("/api/v1/wallet/evm", json=wallet_body())
    response = await client.post("/api/v1/wallet/evm", json=wallet_body())

    assert response.status_code == 400
    assert response.json()["message"] == "Wallet with this name already exists"

    wallets = (await client.get(f"/api/v1/wallet/evm/{USER}")).json()["data"]
    assert len(wallets) == 1


async def test_settings_ranges(client):
    response = await client.post(
        "/api/v1/wallet/evm", json=wallet_body(settings={"slippage": 0.05})
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Slippage must be between 0.1 and 100 percent"

    response = await client.post(
        "/api/v1/wallet/evm", json=wallet_body(settings={"gas_limit": 20999})
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Gas limit must be between 21000 and 1000000"

    response = await client.post(
        "/api/v1/wallet/evm", json=wallet_body(settings={"slippage": 2.5, "gas_limit": 21000})
    )
    assert response.status_code == 201
    assert response.json()["data"]["settings"] == {"slippage": "2.5", "gas_limit": 21000}


async def test_missing_fields_rejected(client):
    body = wallet_body()
    del body["seed_phrase"]
    response = await client.post("/api/v1/wallet/evm", json=body)
    assert response.status_code == 400


async def test_get_update_delete_wallet(client):
    await client.post("/api/v1/wallet/evm", json=wallet_body())
    await client.post("/api/v1/wallet/evm", json=wallet_body(name="sniper"))

    response = await client.get(f"/api/v1/wallet/evm/{USER}/sniper")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "sniper"

    response = await client.put(
        f"/api/v1/wallet/evm/{USER}/sniper", json={"address": "0x0000000000000000000000000000000000000001"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["address"] == "0x0000000000000000000000000000000000000001"

    response = await client.put(
        f"/api/v1/wallet/evm/{USER}/sniper/settings", json={"slippage": 25}
    )
    assert response.status_code == 200
    assert response.json()["data"] == {"slippage": "25", "gas_limit": 300000}

    response = await client.put(
        f"/api/v1/wallet/evm/{USER}/sniper/settings", json={"gas_limit": 5000000}
    )
    assert response.status_code == 400

    settings = await client.get(f"/api/v1/wallet/evm/{USER}/sniper/settings")
    assert settings.json()["data"]["slippage"] == "25"

    response = await client.delete(f"/api/v1/wallet/evm/{USER}/sniper")
    assert response.status_code == 200
    assert response.json()["message"] == "Wallet deleted successfully"

    response = await client.get(f"/api/v1/wallet/evm/{USER}/sniper")
    assert response.status_code == 404
    assert response.json()["message"] == "Wallet not found"

    wallets = (await client.get(f"/api/v1/wallet/evm/{USER}")).json()["data"]
    assert [w["name"] for w in wallets] == ["main"]


async def test_unknown_user_wallets_404(client):
    response = await client.get("/api/v1/wallet/evm/nobody")
    assert response.status_code == 404
    assert response.json()["message"] == "User not found"
