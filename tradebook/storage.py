"""
Async repository over the journal tables.

One function per query. Callers own the session (FastAPI injects one per
request through `get_db`); every write commits and refreshes so server
defaults are loaded before the object leaves the session.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tradebook.config import config
from tradebook.models.enums import Role
from tradebook.models.journal import DiaryEntry, Goal
from tradebook.models.trade import Trade
from tradebook.models.user import User

logger = logging.getLogger(__name__)


# =================================================
# USERS
# =================================================
async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def is_first_user(db: AsyncSession) -> bool:
    count = (await db.execute(select(func.count()).select_from(User))).scalar_one()
    return int(count) == 0


async def create_user(
    db: AsyncSession,
    *,
    username: str,
    password_hash: str,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    profile_image_url: Optional[str] = None,
) -> User:
    """
    Insert a user. The very first account becomes super_admin, every
    later one starts as a plain user.
    """
    role = Role.SUPER_ADMIN if await is_first_user(db) else Role.USER

    user = User(
        username=username,
        password_hash=password_hash,
        email=email,
        first_name=first_name,
        last_name=last_name,
        profile_image_url=profile_image_url,
        role=role.value,
        initial_capital=config.DEFAULT_INITIAL_CAPITAL,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    if role is Role.SUPER_ADMIN:
        # Concurrent first registrations can both see an empty table;
        # only the lowest id keeps super_admin
        earlier = (
            await db.execute(
                select(func.count())
                .select_from(User)
                .where(User.role == Role.SUPER_ADMIN.value, User.id < user.id)
            )
        ).scalar_one()
        if earlier:
            logger.warning("lost first-user race, user id=%s demoted to user", user.id)
            user.role = Role.USER.value
            await db.commit()
            await db.refresh(user)

    logger.info("created user id=%s username=%s role=%s", user.id, user.username, user.role)
    return user


async def list_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(desc(User.created_at), desc(User.id)))
    return list(result.scalars().all())


async def update_user_role(db: AsyncSession, user_id: int, role: Role) -> Optional[User]:
    user = await get_user(db, user_id)
    if user is None:
        return None
    user.role = role.value
    await db.commit()
    await db.refresh(user)
    return user


async def update_user_capital(db: AsyncSession, user_id: int, initial_capital: float) -> Optional[User]:
    user = await get_user(db, user_id)
    if user is None:
        return None
    user.initial_capital = initial_capital
    await db.commit()
    await db.refresh(user)
    return user


# =================================================
# TRADES
# =================================================
def _trade_order():
    return (desc(Trade.date), desc(Trade.time), desc(Trade.id))


async def list_trades_by_user(db: AsyncSession, user_id: int) -> List[Trade]:
    result = await db.execute(
        select(Trade).where(Trade.user_id == user_id).order_by(*_trade_order())
    )
    return list(result.scalars().all())


async def list_all_trades(db: AsyncSession) -> List[Trade]:
    result = await db.execute(select(Trade).order_by(*_trade_order()))
    return list(result.scalars().all())


async def get_user_trade(db: AsyncSession, trade_id: int, user_id: int) -> Optional[Trade]:
    result = await db.execute(
        select(Trade).where(Trade.id == trade_id, Trade.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def create_trade(db: AsyncSession, user_id: int, values: Dict[str, Any]) -> Trade:
    trade = Trade(user_id=user_id, **values)
    db.add(trade)
    await db.commit()
    await db.refresh(trade)
    return trade


async def update_trade(
    db: AsyncSession,
    trade_id: int,
    user_id: int,
    updates: Dict[str, Any],
) -> Optional[Trade]:
    """Apply `updates` to the trade only if `user_id` owns it."""
    trade = await get_user_trade(db, trade_id, user_id)
    if trade is None:
        return None

    for field, value in updates.items():
        setattr(trade, field, value)

    await db.commit()
    await db.refresh(trade)
    return trade


async def delete_trade(db: AsyncSession, trade_id: int, user_id: int) -> bool:
    result = await db.execute(
        delete(Trade).where(Trade.id == trade_id, Trade.user_id == user_id)
    )
    await db.commit()
    return result.rowcount > 0


# =================================================
# TRADING DIARY
# =================================================
async def list_diary(db: AsyncSession, user_id: int) -> List[DiaryEntry]:
    result = await db.execute(
        select(DiaryEntry)
        .where(DiaryEntry.user_id == user_id)
        .order_by(desc(DiaryEntry.date))
    )
    return list(result.scalars().all())


async def get_diary_by_date(db: AsyncSession, user_id: int, entry_date: date) -> Optional[DiaryEntry]:
    result = await db.execute(
        select(DiaryEntry).where(
            DiaryEntry.user_id == user_id,
            DiaryEntry.date == entry_date,
        )
    )
    return result.scalar_one_or_none()


async def _upsert(db: AsyncSession, lookup, build, fields: Dict[str, Any]):
    """
    Read-then-write upsert on a natural key.

    `lookup` returns the existing row (or None), `build` creates a new one.
    The unique constraint on the natural key turns a lost insert race into
    an IntegrityError; the loser re-reads and updates the winner's row.
    """
    existing = await lookup()
    if existing is None:
        row = build()
        db.add(row)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            existing = await lookup()
            if existing is None:
                raise
            logger.warning(
                "upsert race on %s, updating row id=%s instead",
                row.__tablename__,
                existing.id,
            )
        else:
            await db.refresh(row)
            return row

    for field, value in fields.items():
        setattr(existing, field, value)
    await db.commit()
    await db.refresh(existing)
    return existing


async def upsert_diary(
    db: AsyncSession,
    *,
    user_id: int,
    entry_date: date,
    content: Optional[str],
    mood: Optional[str],
) -> DiaryEntry:
    fields = {"content": content, "mood": mood}
    return await _upsert(
        db,
        lambda: get_diary_by_date(db, user_id, entry_date),
        lambda: DiaryEntry(user_id=user_id, date=entry_date, **fields),
        fields,
    )


async def delete_diary(db: AsyncSession, entry_id: int, user_id: int) -> bool:
    result = await db.execute(
        delete(DiaryEntry).where(DiaryEntry.id == entry_id, DiaryEntry.user_id == user_id)
    )
    await db.commit()
    return result.rowcount > 0


# =================================================
# GOALS
# =================================================
async def list_goals(db: AsyncSession, user_id: int) -> List[Goal]:
    result = await db.execute(
        select(Goal)
        .where(Goal.user_id == user_id)
        .order_by(desc(Goal.year), desc(Goal.month))
    )
    return list(result.scalars().all())


async def get_goal_by_month(db: AsyncSession, user_id: int, month: int, year: int) -> Optional[Goal]:
    result = await db.execute(
        select(Goal).where(
            Goal.user_id == user_id,
            Goal.month == month,
            Goal.year == year,
        )
    )
    return result.scalar_one_or_none()


async def get_user_goal(db: AsyncSession, goal_id: int, user_id: int) -> Optional[Goal]:
    result = await db.execute(
        select(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def upsert_goal(
    db: AsyncSession,
    *,
    user_id: int,
    month: int,
    year: int,
    target_trades: Optional[int],
    target_win_rate: Optional[float],
    target_profit: Optional[float],
) -> Goal:
    fields = {
        "target_trades": target_trades,
        "target_win_rate": target_win_rate,
        "target_profit": target_profit,
    }
    return await _upsert(
        db,
        lambda: get_goal_by_month(db, user_id, month, year),
        lambda: Goal(user_id=user_id, month=month, year=year, **fields),
        fields,
    )


async def delete_goal(db: AsyncSession, goal_id: int, user_id: int) -> bool:
    result = await db.execute(
        delete(Goal).where(Goal.id == goal_id, Goal.user_id == user_id)
    )
    await db.commit()
    return result.rowcount > 0
