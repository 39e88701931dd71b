from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradebook import storage
from tradebook.api.deps import get_current_user
from tradebook.db.database import get_db
from tradebook.models.trade import Trade
from tradebook.models.user import User
from tradebook.schemas.trade import TradeCreate, TradeOut, TradeUpdate
from tradebook.services.risk_reward import (
    RiskRewardError,
    resolve_trade_percentages,
    risk_reward_ratio,
)

router = APIRouter(prefix="/api/trades", tags=["trades"])

# Columns that cannot be cleared through PATCH
_REQUIRED_FIELDS = ("date", "pair", "direction", "result")
_LIST_FIELDS = ("confluences_pro", "confluences_contro", "image_urls")

# Price levels only feed the percentage derivation, they are not stored
_PRICE_FIELDS = ("entry_price", "stop_loss_price", "take_profit_price")


# =================================================
# Helpers
# =================================================
def _plain(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in values.items()}


def serialize_trade(trade: Trade) -> TradeOut:
    out = TradeOut.model_validate(trade)
    out.rr = risk_reward_ratio(trade.target, trade.stop_loss)
    return out


async def _get_owned_trade_or_404(db: AsyncSession, trade_id: int, user: User) -> Trade:
    # Another user's trade is reported exactly like a missing one
    trade = await storage.get_user_trade(db, trade_id, user.id)
    if not trade:
        raise HTTPException(status_code=404, detail="Trade not found")
    return trade


# =================================================
# LIST / CREATE
# =================================================
@router.get("", response_model=List[TradeOut])
async def list_trades(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    trades = await storage.list_trades_by_user(db, user.id)
    return [serialize_trade(t) for t in trades]


@router.post("", response_model=TradeOut, status_code=status.HTTP_201_CREATED)
async def create_trade(
    payload: TradeCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Log a trade.

    target / stop_loss are percentages of entry. Send them directly or
    send entry_price, stop_loss_price and take_profit_price and let the
    server derive them.
    """
    try:
        levels = resolve_trade_percentages(
            direction=payload.direction,
            target=payload.target,
            stop_loss=payload.stop_loss,
            entry_price=payload.entry_price,
            stop_loss_price=payload.stop_loss_price,
            take_profit_price=payload.take_profit_price,
        )
    except RiskRewardError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    values = payload.model_dump(exclude=set(_PRICE_FIELDS))
    values.update(levels)

    trade = await storage.create_trade(db, user.id, _plain(values))
    return serialize_trade(trade)


# =================================================
# READ / UPDATE / DELETE (OWNER ONLY)
# =================================================
@router.get("/{trade_id}", response_model=TradeOut)
async def get_trade(
    trade_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    trade = await _get_owned_trade_or_404(db, trade_id, user)
    return serialize_trade(trade)


@router.patch("/{trade_id}", response_model=TradeOut)
async def update_trade(
    trade_id: int,
    payload: TradeUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    updates = payload.model_dump(exclude_unset=True)

    for field in _REQUIRED_FIELDS:
        if field in updates and updates[field] is None:
            raise HTTPException(status_code=400, detail=f"{field} cannot be null")

    for field in _LIST_FIELDS:
        if field in updates and updates[field] is None:
            updates[field] = []

    trade = await storage.update_trade(db, trade_id, user.id, _plain(updates))
    if trade is None:
        raise HTTPException(status_code=404, detail="Trade not found")

    return serialize_trade(trade)


@router.delete("/{trade_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trade(
    trade_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await storage.delete_trade(db, trade_id, user.id):
        raise HTTPException(status_code=404, detail="Trade not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
