from fastapi import APIRouter, HTTPException

from tradebook.schemas.calculator import RiskRewardOut, RiskRewardRequest
from tradebook.services.risk_reward import RiskRewardError, derive_risk_reward

router = APIRouter(prefix="/api/calculator", tags=["calculator"])


@router.post("/risk-reward", response_model=RiskRewardOut)
async def risk_reward(payload: RiskRewardRequest):
    """
    Stop and target distance as % of entry, plus the displayed R:R.
    Stateless; no login needed.
    """
    try:
        return derive_risk_reward(
            direction=payload.direction,
            entry_price=payload.entry_price,
            stop_loss_price=payload.stop_loss_price,
            take_profit_price=payload.take_profit_price,
        )
    except RiskRewardError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
