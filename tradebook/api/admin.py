import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradebook import storage
from tradebook.api.deps import require_admin, require_super_admin
from tradebook.api.trades import serialize_trade
from tradebook.db.database import get_db
from tradebook.models.enums import Role
from tradebook.models.user import User
from tradebook.schemas.trade import TradeOut
from tradebook.schemas.user import RoleUpdate, UserOut
from tradebook.services import stats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=List[UserOut])
async def list_users(
    _: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await storage.list_users(db)


@router.get("/trades", response_model=List[TradeOut])
async def list_trades(
    _: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    trades = await storage.list_all_trades(db)
    return [serialize_trade(t) for t in trades]


@router.get("/leaderboard")
async def leaderboard(
    _: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
) -> Dict[str, Any]:
    """
    Cross-user dashboard data: platform totals, top 10 by win rate and by
    P&L (users with at least one trade), and the 8 most active users.
    """
    users = await storage.list_users(db)
    trades = await storage.list_all_trades(db)

    return {
        "totals": stats.platform_totals(users, trades),
        "by_win_rate": stats.leaderboard(users, trades, by="win_rate"),
        "by_pnl": stats.leaderboard(users, trades, by="pnl"),
        "activity": stats.activity_chart(users, trades),
    }


@router.patch("/users/{user_id}/role", response_model=UserOut)
async def update_user_role(
    user_id: int,
    payload: RoleUpdate,
    current: User = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    Promote / demote between user and admin. super_admin can neither be
    granted nor taken away here.
    """
    if payload.role == Role.SUPER_ADMIN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="super_admin role cannot be assigned",
        )

    target = await storage.get_user(db, user_id)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if target.is_super_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="super_admin role is immutable",
        )

    previous = target.role
    updated = await storage.update_user_role(db, user_id, payload.role)

    logger.info(
        "role change user_id=%s %s -> %s by user_id=%s",
        user_id,
        previous,
        updated.role,
        current.id,
    )
    return updated
