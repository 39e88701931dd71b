import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# -------------------------
# TRADING DIARY
# -------------------------
class DiaryUpsert(BaseModel):
    date: dt.date
    content: Optional[str] = None
    mood: Optional[str] = Field(default=None, max_length=50)


class DiaryOut(DiaryUpsert):
    id: int
    user_id: int
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


# -------------------------
# MONTHLY GOALS
# -------------------------
class GoalUpsert(BaseModel):
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=1970, le=9999)

    target_trades: Optional[int] = Field(default=None, ge=0)
    target_win_rate: Optional[float] = Field(default=None, ge=0, le=100)
    target_profit: Optional[float] = None


class GoalOut(GoalUpsert):
    id: int
    user_id: int
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)
