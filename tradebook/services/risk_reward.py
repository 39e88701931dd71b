from typing import Dict, Optional

from tradebook.models.enums import TradeDirection


class RiskRewardError(ValueError):
    """Raised when price levels cannot produce a risk/reward pair."""


def derive_risk_reward(
    *,
    direction: TradeDirection | str,
    entry_price: float,
    stop_loss_price: float,
    take_profit_price: float,
) -> Dict[str, float]:
    """
    Express stop-loss and take-profit distances as percentages of entry.

    - risk   = |entry - stop_loss|
    - reward = |take_profit - entry|
    - both divided by entry, * 100, rounded to 2 decimals

    A short needs its take-profit below entry, a long above it.
    """
    direction = TradeDirection(direction)

    if entry_price == 0:
        raise RiskRewardError("Entry price must be non-zero.")

    if direction == TradeDirection.SHORT and take_profit_price > entry_price:
        raise RiskRewardError("Take-profit must be below entry for a short.")
    if direction == TradeDirection.LONG and take_profit_price < entry_price:
        raise RiskRewardError("Take-profit must be above entry for a long.")

    risk = abs(entry_price - stop_loss_price)
    reward = abs(take_profit_price - entry_price)

    risk_pct = round(risk / entry_price * 100, 2)
    reward_pct = round(reward / entry_price * 100, 2)

    return {
        "risk_pct": risk_pct,
        "reward_pct": reward_pct,
        "ratio": risk_reward_ratio(reward_pct, risk_pct),
    }


def risk_reward_ratio(target_pct: Optional[float], stop_pct: Optional[float]) -> float:
    """Displayed R:R, target / stop. 0.0 unless both sides are positive."""
    if target_pct and stop_pct and target_pct > 0 and stop_pct > 0:
        return round(target_pct / stop_pct, 2)
    return 0.0


def resolve_trade_percentages(
    *,
    direction: TradeDirection | str,
    target: Optional[float],
    stop_loss: Optional[float],
    entry_price: Optional[float] = None,
    stop_loss_price: Optional[float] = None,
    take_profit_price: Optional[float] = None,
) -> Dict[str, float]:
    """
    Pick the target / stop-loss percentages for a new trade.

    Explicit percentages win; otherwise they are derived from the three
    price levels. Raises RiskRewardError when neither source is usable.
    """
    derived: Dict[str, float] = {}
    if None not in (entry_price, stop_loss_price, take_profit_price):
        try:
            derived = derive_risk_reward(
                direction=direction,
                entry_price=entry_price,
                stop_loss_price=stop_loss_price,
                take_profit_price=take_profit_price,
            )
        except RiskRewardError:
            if target is None or stop_loss is None:
                raise

    final_target = target if target is not None else derived.get("reward_pct")
    final_stop = stop_loss if stop_loss is not None else derived.get("risk_pct")

    if final_target is None or final_stop is None:
        raise RiskRewardError("Enter valid values for target and stop loss.")

    return {"target": final_target, "stop_loss": final_stop}
