# tradebook/models/journal.py

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from tradebook.db.database import Base


# -------------------------
# TRADING DIARY
# -------------------------
class DiaryEntry(Base):
    __tablename__ = "trading_diary"
    __table_args__ = (
        # one entry per user per day
        UniqueConstraint("user_id", "date", name="uq_trading_diary_user_date"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    content = Column(Text)
    mood = Column(String(50))

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


# -------------------------
# MONTHLY GOALS
# -------------------------
class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        UniqueConstraint("user_id", "month", "year", name="uq_goals_user_month_year"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)

    target_trades = Column(Integer)
    target_win_rate = Column(Float)
    target_profit = Column(Float)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
