import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tradebook.models.enums import TradeDirection, TradeResult


def _clean_tags(values: Optional[List[str]]) -> Optional[List[str]]:
    """Strip, drop blanks and duplicates while keeping entry order."""
    if values is None:
        return None
    out: List[str] = []
    for v in values:
        v = v.strip()
        if v and v not in out:
            out.append(v)
    return out


def _normalize_pair(v):
    # Non-strings fall through to the str type check
    return v.strip().upper() if isinstance(v, str) else v


class TradeBase(BaseModel):
    date: dt.date
    time: Optional[dt.time] = None
    pair: str = Field(..., min_length=1, max_length=30)
    direction: TradeDirection
    result: TradeResult
    pnl: Optional[float] = None
    emotion: Optional[str] = Field(default=None, max_length=50)
    confluences_pro: List[str] = Field(default_factory=list)
    confluences_contro: List[str] = Field(default_factory=list)
    image_urls: List[str] = Field(default_factory=list)
    notes: Optional[str] = None

    # Runs before the length check so a blank pair is rejected
    @field_validator("pair", mode="before")
    @classmethod
    def _upper_pair(cls, v):
        return _normalize_pair(v)

    @field_validator("confluences_pro", "confluences_contro", "image_urls")
    @classmethod
    def _tags(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)


class TradeCreate(TradeBase):
    # Percentages of entry price. When omitted they are derived from the
    # three price levels below.
    target: Optional[float] = Field(default=None, ge=0)
    stop_loss: Optional[float] = Field(default=None, ge=0)

    entry_price: Optional[float] = Field(default=None, gt=0)
    stop_loss_price: Optional[float] = Field(default=None, gt=0)
    take_profit_price: Optional[float] = Field(default=None, gt=0)


class TradeUpdate(BaseModel):
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    pair: Optional[str] = Field(default=None, min_length=1, max_length=30)
    direction: Optional[TradeDirection] = None
    target: Optional[float] = Field(default=None, ge=0)
    stop_loss: Optional[float] = Field(default=None, ge=0)
    result: Optional[TradeResult] = None
    pnl: Optional[float] = None
    emotion: Optional[str] = Field(default=None, max_length=50)
    confluences_pro: Optional[List[str]] = None
    confluences_contro: Optional[List[str]] = None
    image_urls: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator("pair", mode="before")
    @classmethod
    def _upper_pair(cls, v):
        return _normalize_pair(v)

    @field_validator("confluences_pro", "confluences_contro", "image_urls")
    @classmethod
    def _tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(v)


class TradeOut(BaseModel):
    id: int
    user_id: int
    date: dt.date
    time: Optional[dt.time] = None
    pair: str
    direction: TradeDirection
    target: Optional[float] = None
    stop_loss: Optional[float] = None
    result: TradeResult
    pnl: Optional[float] = None
    emotion: Optional[str] = None
    confluences_pro: List[str] = Field(default_factory=list)
    confluences_contro: List[str] = Field(default_factory=list)
    image_urls: List[str] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    # target / stop_loss, display ratio
    rr: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)
