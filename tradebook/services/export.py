from typing import Iterable, Mapping, Optional

import pandas as pd

EXPORT_COLUMNS = [
    "id",
    "username",
    "date",
    "time",
    "pair",
    "direction",
    "target",
    "stop_loss",
    "result",
    "pnl",
    "emotion",
    "confluences_pro",
    "confluences_contro",
    "image_urls",
    "notes",
]

# list columns are flattened into one cell
_LIST_SEPARATOR = "; "


def trades_to_frame(trades: Iterable, usernames: Optional[Mapping[int, str]] = None) -> pd.DataFrame:
    """
    Flatten trades into a DataFrame, one row per trade, in EXPORT_COLUMNS order.
    """
    usernames = usernames or {}
    rows = []
    for t in trades:
        rows.append(
            {
                "id": t.id,
                "username": usernames.get(t.user_id, str(t.user_id)),
                "date": t.date.isoformat(),
                "time": t.time.strftime("%H:%M") if t.time else None,
                "pair": t.pair,
                "direction": t.direction,
                "target": t.target,
                "stop_loss": t.stop_loss,
                "result": t.result,
                "pnl": t.pnl,
                "emotion": t.emotion,
                "confluences_pro": _LIST_SEPARATOR.join(t.confluences_pro or []),
                "confluences_contro": _LIST_SEPARATOR.join(t.confluences_contro or []),
                "image_urls": _LIST_SEPARATOR.join(t.image_urls or []),
                "notes": t.notes,
            }
        )

    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)
