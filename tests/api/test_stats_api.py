import pytest

from helpers import register, trade_payload


@pytest.mark.asyncio
async def test_summary_and_monthly(client):
    await register(client, "alice")
    await client.patch("/api/auth/user/capital", json={"initial_capital": 1000})

    await client.post("/api/trades", json=trade_payload(date="2024-02-10", pnl=100.0))
    await client.post(
        "/api/trades",
        json=trade_payload(date="2024-03-01", result="stop_loss", pnl=-50.0),
    )
    await client.post(
        "/api/trades",
        json=trade_payload(date="2024-03-02", result="breakeven", pnl=0.0),
    )

    summary = (await client.get("/api/stats/summary")).json()

    assert summary["total_trades"] == 3
    assert summary["wins"] == 1
    assert summary["win_rate"] == pytest.approx(33.33)
    assert summary["pnl"] == pytest.approx(50.0)
    assert summary["equity"] == pytest.approx(1050.0)
    assert summary["return_pct"] == pytest.approx(5.0)

    monthly = (await client.get("/api/stats/monthly")).json()

    assert [m["month"] for m in monthly] == ["2024-02", "2024-03"]
    assert monthly[1]["losses"] == 1


@pytest.mark.asyncio
async def test_stats_require_login(client):
    assert (await client.get("/api/stats/summary")).status_code == 401


@pytest.mark.asyncio
async def test_health(client):
    assert (await client.get("/health")).json() == {"status": "ok"}
