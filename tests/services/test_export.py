from datetime import date, time
from types import SimpleNamespace

from tradebook.services.export import EXPORT_COLUMNS, trades_to_frame


def test_trades_to_frame_flattens_lists():
    trade = SimpleNamespace(
        id=1,
        user_id=3,
        date=date(2024, 3, 5),
        time=time(9, 30),
        pair="XAUUSD",
        direction="short",
        target=1.2,
        stop_loss=0.4,
        result="target",
        pnl=240.0,
        emotion="Calm",
        confluences_pro=["Key level", "Volume"],
        confluences_contro=[],
        image_urls=None,
        notes=None,
    )

    df = trades_to_frame([trade], {3: "alice"})

    assert list(df.columns) == EXPORT_COLUMNS
    row = df.iloc[0]
    assert row["username"] == "alice"
    assert row["date"] == "2024-03-05"
    assert row["time"] == "09:30"
    assert row["confluences_pro"] == "Key level; Volume"
    assert row["image_urls"] == ""


def test_empty_export_keeps_header():
    df = trades_to_frame([])

    assert df.empty
    assert list(df.columns) == EXPORT_COLUMNS
