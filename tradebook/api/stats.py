from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tradebook import storage
from tradebook.api.deps import get_current_user
from tradebook.db.database import get_db
from tradebook.models.user import User
from tradebook.services.stats import compute_trade_stats, monthly_breakdown

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/summary")
async def summary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    All-time stats for the logged-in user.

    - win_rate: target hits / all trades
    - pnl: SUM(pnl)
    - equity: initial capital + pnl
    """
    trades = await storage.list_trades_by_user(db, user.id)
    out = compute_trade_stats(trades)

    capital = user.initial_capital or 0.0
    out["initial_capital"] = capital
    out["equity"] = round(capital + out["pnl"], 2)
    out["return_pct"] = round(out["pnl"] / capital * 100.0, 2) if capital else 0.0
    return out


@router.get("/monthly")
async def monthly(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> List[Dict[str, Any]]:
    """Stats per trade-date month (YYYY-MM), oldest first."""
    trades = await storage.list_trades_by_user(db, user.id)
    return monthly_breakdown(trades)
