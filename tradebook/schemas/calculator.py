from pydantic import BaseModel, Field

from tradebook.models.enums import TradeDirection


class RiskRewardRequest(BaseModel):
    direction: TradeDirection
    entry_price: float = Field(..., gt=0)
    stop_loss_price: float = Field(..., gt=0)
    take_profit_price: float = Field(..., gt=0)


class RiskRewardOut(BaseModel):
    risk_pct: float
    reward_pct: float
    ratio: float
