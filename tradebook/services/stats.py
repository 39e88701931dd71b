from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Sequence

from tradebook.models.enums import TradeResult


def _round2(x: float) -> float:
    return round(float(x), 2)


def _result(trade: Any) -> str:
    r = trade.result
    return r.value if isinstance(r, TradeResult) else r


def compute_trade_stats(trades: Iterable[Any]) -> Dict[str, Any]:
    """
    Aggregate a list of trades.

    - wins: result == target
    - losses: result == stop_loss
    - win_rate: wins / ALL trades * 100 (breakeven, partial and unfilled
      trades count in the denominator)
    - pnl: SUM(pnl), missing pnl counts as 0
    """
    total = wins = losses = breakeven = 0
    pnl = 0.0

    for t in trades:
        total += 1
        result = _result(t)
        if result == TradeResult.TARGET.value:
            wins += 1
        elif result == TradeResult.STOP_LOSS.value:
            losses += 1
        elif result == TradeResult.BREAKEVEN.value:
            breakeven += 1
        pnl += t.pnl or 0.0

    win_rate = (wins / total) * 100.0 if total else 0.0

    return {
        "total_trades": total,
        "wins": wins,
        "losses": losses,
        "breakeven": breakeven,
        "win_rate": _round2(win_rate),
        "pnl": _round2(pnl),
    }


def _trades_by_user(trades: Iterable[Any]) -> Dict[int, List[Any]]:
    buckets: Dict[int, List[Any]] = defaultdict(list)
    for t in trades:
        buckets[t.user_id].append(t)
    return buckets


def stats_by_user(users: Sequence[Any], trades: Iterable[Any]) -> Dict[int, Dict[str, Any]]:
    buckets = _trades_by_user(trades)
    return {u.id: compute_trade_stats(buckets.get(u.id, [])) for u in users}


def leaderboard(
    users: Sequence[Any],
    trades: Iterable[Any],
    *,
    by: str = "win_rate",
    limit: int = 10,
) -> List[Dict[str, Any]]:
    """
    Rank users with at least one trade by `win_rate` or `pnl`, best first.
    """
    if by not in ("win_rate", "pnl"):
        raise ValueError(f"Unsupported leaderboard metric: {by}")

    per_user = stats_by_user(users, trades)
    ranked = [
        {
            "user_id": u.id,
            "username": u.username,
            "display_name": u.display_name,
            "stats": per_user[u.id],
        }
        for u in users
        if per_user[u.id]["total_trades"] >= 1
    ]
    ranked.sort(key=lambda row: row["stats"][by], reverse=True)

    out = ranked[:limit]
    for idx, row in enumerate(out, start=1):
        row["rank"] = idx
    return out


def activity_chart(users: Sequence[Any], trades: Iterable[Any], *, limit: int = 8) -> List[Dict[str, Any]]:
    """Most active users by trade count, with their win rate (bar chart data)."""
    per_user = stats_by_user(users, trades)
    rows = [
        {
            "name": u.display_name,
            "trades": per_user[u.id]["total_trades"],
            "win_rate": per_user[u.id]["win_rate"],
        }
        for u in users
        if per_user[u.id]["total_trades"] > 0
    ]
    rows.sort(key=lambda r: r["trades"], reverse=True)
    return rows[:limit]


def platform_totals(users: Sequence[Any], trades: Sequence[Any]) -> Dict[str, Any]:
    per_user = stats_by_user(users, trades)

    # Average of per-user win rates (users without trades count as 0)
    avg_win_rate = (
        sum(s["win_rate"] for s in per_user.values()) / len(users) if users else 0.0
    )

    overall = compute_trade_stats(trades)

    return {
        "total_users": len(users),
        "total_trades": len(trades),
        "avg_win_rate": _round2(avg_win_rate),
        "total_wins": overall["wins"],
        "total_losses": overall["losses"],
        "total_pnl": overall["pnl"],
    }


def monthly_breakdown(trades: Iterable[Any]) -> List[Dict[str, Any]]:
    """Stats bucketed by trade date month (YYYY-MM), oldest first."""
    buckets: Dict[str, List[Any]] = defaultdict(list)
    for t in trades:
        buckets[t.date.strftime("%Y-%m")].append(t)

    return [
        {"month": month, **compute_trade_stats(month_trades)}
        for month, month_trades in sorted(buckets.items())
    ]


def goal_progress(goal: Any, trades: Iterable[Any]) -> Dict[str, Any]:
    """
    Compare a monthly goal's targets with what the trades of that month
    actually produced. `*_met` is None when the goal sets no target.
    """
    month_trades = [
        t for t in trades if t.date.year == goal.year and t.date.month == goal.month
    ]
    actual = compute_trade_stats(month_trades)

    def _met(target, value):
        if target is None:
            return None
        return value >= target

    return {
        "goal_id": goal.id,
        "month": goal.month,
        "year": goal.year,
        "target_trades": goal.target_trades,
        "target_win_rate": goal.target_win_rate,
        "target_profit": goal.target_profit,
        "actual": actual,
        "trades_met": _met(goal.target_trades, actual["total_trades"]),
        "win_rate_met": _met(goal.target_win_rate, actual["win_rate"]),
        "profit_met": _met(goal.target_profit, actual["pnl"]),
    }
