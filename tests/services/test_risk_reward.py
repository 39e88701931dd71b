import pytest

from tradebook.services.risk_reward import (
    RiskRewardError,
    derive_risk_reward,
    resolve_trade_percentages,
    risk_reward_ratio,
)


def test_long_percentages_from_prices():
    result = derive_risk_reward(
        direction="long",
        entry_price=100.0,
        stop_loss_price=98.0,
        take_profit_price=106.0,
    )

    assert result["risk_pct"] == pytest.approx(2.0)
    assert result["reward_pct"] == pytest.approx(6.0)
    assert result["ratio"] == pytest.approx(3.0)


def test_short_percentages_from_prices():
    result = derive_risk_reward(
        direction="short",
        entry_price=1.2000,
        stop_loss_price=1.2060,
        take_profit_price=1.1880,
    )

    assert result["risk_pct"] == pytest.approx(0.5)
    assert result["reward_pct"] == pytest.approx(1.0)
    assert result["ratio"] == pytest.approx(2.0)


def test_short_with_target_above_entry_is_rejected():
    with pytest.raises(RiskRewardError):
        derive_risk_reward(
            direction="short",
            entry_price=100.0,
            stop_loss_price=102.0,
            take_profit_price=105.0,
        )


def test_long_with_target_below_entry_is_rejected():
    with pytest.raises(RiskRewardError):
        derive_risk_reward(
            direction="long",
            entry_price=100.0,
            stop_loss_price=98.0,
            take_profit_price=95.0,
        )


def test_zero_entry_is_rejected():
    with pytest.raises(RiskRewardError):
        derive_risk_reward(
            direction="long",
            entry_price=0,
            stop_loss_price=1,
            take_profit_price=2,
        )


@pytest.mark.parametrize(
    "direction,entry,stop,take",
    [
        ("long", 1.08452, 1.08210, 1.09100),
        ("long", 2350.5, 2341.2, 2372.9),
        ("short", 151.32, 151.80, 150.10),
        ("short", 43250.0, 43900.0, 41000.0),
    ],
)
def test_ratio_matches_displayed_percentages(direction, entry, stop, take):
    result = derive_risk_reward(
        direction=direction,
        entry_price=entry,
        stop_loss_price=stop,
        take_profit_price=take,
    )

    assert result["ratio"] == pytest.approx(round(result["reward_pct"] / result["risk_pct"], 2))


def test_ratio_needs_both_sides_positive():
    assert risk_reward_ratio(3.0, 1.5) == pytest.approx(2.0)
    assert risk_reward_ratio(3.0, 0) == 0.0
    assert risk_reward_ratio(None, 1.0) == 0.0


def test_explicit_percentages_win_over_prices():
    levels = resolve_trade_percentages(
        direction="long",
        target=4.0,
        stop_loss=1.0,
        entry_price=100.0,
        stop_loss_price=98.0,
        take_profit_price=106.0,
    )

    assert levels == {"target": 4.0, "stop_loss": 1.0}


def test_missing_percentages_are_derived():
    levels = resolve_trade_percentages(
        direction="long",
        target=None,
        stop_loss=None,
        entry_price=100.0,
        stop_loss_price=98.0,
        take_profit_price=106.0,
    )

    assert levels["target"] == pytest.approx(6.0)
    assert levels["stop_loss"] == pytest.approx(2.0)


def test_nothing_to_resolve_from():
    with pytest.raises(RiskRewardError):
        resolve_trade_percentages(direction="long", target=None, stop_loss=1.0)
