from __future__ import annotations
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class SignalAction(str, Enum):
    BUY = "buy"
    SELL = "sell"


class IncomingSignal(BaseModel):
    """Webhook body posted by TradingView. Unknown keys are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    action: SignalAction
    contracts: Optional[float] = None

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, v):
        if isinstance(v, str):
            return v.lower()
        return v
