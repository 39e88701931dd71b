PASSWORD = "secret123"


async def register(client, username, password=PASSWORD, **extra):
    resp = await client.post(
        "/api/register",
        json={"username": username, "password": password, **extra},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def trade_payload(**overrides):
    payload = {
        "date": "2024-03-05",
        "time": "09:30",
        "pair": "EURUSD",
        "direction": "long",
        "target": 1.5,
        "stop_loss": 0.5,
        "result": "target",
        "pnl": 150.0,
        "emotion": "Calm",
        "confluences_pro": ["Strong trend"],
        "confluences_contro": [],
        "image_urls": [],
        "notes": "clean breakout",
    }
    payload.update(overrides)
    return payload
