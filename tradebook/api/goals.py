from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradebook import storage
from tradebook.api.deps import get_current_user
from tradebook.db.database import get_db
from tradebook.models.user import User
from tradebook.schemas.journal import GoalOut, GoalUpsert
from tradebook.services.stats import goal_progress

router = APIRouter(
    prefix="/api/goals",
    tags=["goals"],
)


@router.get("", response_model=List[GoalOut])
async def list_goals(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await storage.list_goals(db, user.id)


@router.post("", response_model=GoalOut)
async def upsert_goal(
    payload: GoalUpsert,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await storage.upsert_goal(
        db,
        user_id=user.id,
        month=payload.month,
        year=payload.year,
        target_trades=payload.target_trades,
        target_win_rate=payload.target_win_rate,
        target_profit=payload.target_profit,
    )


@router.get("/{goal_id}/progress")
async def get_goal_progress(
    goal_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Targets of a monthly goal next to what the month's trades produced.
    """
    goal = await storage.get_user_goal(db, goal_id, user.id)
    if goal is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Goal not found",
        )

    trades = await storage.list_trades_by_user(db, user.id)
    return goal_progress(goal, trades)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(
    goal_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await storage.delete_goal(db, goal_id, user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Goal not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
