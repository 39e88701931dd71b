import pytest

from helpers import PASSWORD, register


@pytest.mark.asyncio
async def test_first_user_is_super_admin(make_client):
    first = await make_client()
    second = await make_client()

    alice = await register(first, "alice")
    bob = await register(second, "bob")

    assert alice["role"] == "super_admin"
    assert bob["role"] == "user"
    assert bob["initial_capital"] == pytest.approx(10000)


@pytest.mark.asyncio
async def test_current_user_requires_login(client):
    resp = await client.get("/api/auth/user")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_register_logs_in(client):
    await register(client, "alice", email="alice@example.com")

    resp = await client.get("/api/auth/user")

    assert resp.status_code == 200
    body = resp.json()
    assert body["username"] == "alice"
    assert body["email"] == "alice@example.com"
    assert "password_hash" not in body


@pytest.mark.asyncio
async def test_duplicate_username_conflicts(make_client):
    await register(await make_client(), "alice")

    resp = await (await make_client()).post(
        "/api/register",
        json={"username": "alice", "password": PASSWORD},
    )

    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_short_password_is_a_validation_error(client):
    resp = await client.post("/api/register", json={"username": "alice", "password": "123"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Validation error"
    assert body["errors"]


@pytest.mark.asyncio
async def test_login_and_logout(make_client):
    await register(await make_client(), "alice")
    client = await make_client()

    bad = await client.post("/api/login", json={"username": "alice", "password": "wrong-pass"})
    assert bad.status_code == 401

    good = await client.post("/api/login", json={"username": "alice", "password": PASSWORD})
    assert good.status_code == 200
    assert (await client.get("/api/auth/user")).status_code == 200

    out = await client.post("/api/logout")
    assert out.json() == {"success": True}
    assert (await client.get("/api/auth/user")).status_code == 401


@pytest.mark.asyncio
async def test_update_capital(client):
    await register(client, "alice")

    resp = await client.patch("/api/auth/user/capital", json={"initial_capital": 2500})
    assert resp.status_code == 200
    assert resp.json()["initial_capital"] == pytest.approx(2500)

    bad = await client.patch("/api/auth/user/capital", json={"initial_capital": -1})
    assert bad.status_code == 400
