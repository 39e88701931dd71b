import pytest

from helpers import register, trade_payload


@pytest.mark.asyncio
async def test_admin_endpoints_reject_regular_users(make_client):
    await register(await make_client(), "root")
    user = await make_client()
    await register(user, "alice")

    assert (await user.get("/api/admin/users")).status_code == 403
    assert (await user.get("/api/admin/trades")).status_code == 403
    assert (await user.get("/api/admin/leaderboard")).status_code == 403


@pytest.mark.asyncio
async def test_super_admin_sees_everyone(make_client):
    root = await make_client()
    alice = await make_client()
    await register(root, "root")
    await register(alice, "alice")

    await alice.post("/api/trades", json=trade_payload())
    await root.post("/api/trades", json=trade_payload(pair="XAUUSD"))

    users = (await root.get("/api/admin/users")).json()
    trades = (await root.get("/api/admin/trades")).json()

    assert {u["username"] for u in users} == {"root", "alice"}
    assert {t["pair"] for t in trades} == {"EURUSD", "XAUUSD"}


@pytest.mark.asyncio
async def test_promotion_to_admin(make_client):
    root = await make_client()
    alice = await make_client()
    await register(root, "root")
    alice_id = (await register(alice, "alice"))["id"]

    resp = await root.patch(f"/api/admin/users/{alice_id}/role", json={"role": "admin"})
    assert resp.status_code == 200
    assert resp.json()["role"] == "admin"

    # admins can read the dashboard but not manage roles
    assert (await alice.get("/api/admin/users")).status_code == 200
    demote = await alice.patch(f"/api/admin/users/{alice_id}/role", json={"role": "user"})
    assert demote.status_code == 403


@pytest.mark.asyncio
async def test_super_admin_cannot_be_assigned_or_removed(make_client):
    root = await make_client()
    alice = await make_client()
    root_id = (await register(root, "root"))["id"]
    alice_id = (await register(alice, "alice"))["id"]

    grant = await root.patch(f"/api/admin/users/{alice_id}/role", json={"role": "super_admin"})
    assert grant.status_code == 400

    demote_self = await root.patch(f"/api/admin/users/{root_id}/role", json={"role": "user"})
    assert demote_self.status_code == 403

    me = (await root.get("/api/auth/user")).json()
    assert me["role"] == "super_admin"


@pytest.mark.asyncio
async def test_role_change_for_missing_user(client):
    await register(client, "root")

    resp = await client.patch("/api/admin/users/999/role", json={"role": "admin"})

    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_leaderboard(make_client):
    root = await make_client()
    alice = await make_client()
    bob = await make_client()
    await register(root, "root")
    await register(alice, "alice")
    await register(bob, "bob")

    await alice.post("/api/trades", json=trade_payload(pnl=100.0))
    await alice.post("/api/trades", json=trade_payload(result="stop_loss", pnl=-40.0))
    await bob.post("/api/trades", json=trade_payload(pnl=20.0))

    board = (await root.get("/api/admin/leaderboard")).json()

    assert [r["username"] for r in board["by_win_rate"]] == ["bob", "alice"]
    assert [r["username"] for r in board["by_pnl"]] == ["alice", "bob"]
    assert board["totals"]["total_users"] == 3
    assert board["totals"]["total_trades"] == 3
    assert board["totals"]["total_wins"] == 2
    assert board["activity"][0]["name"] == "alice"
