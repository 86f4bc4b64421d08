"""
models/outgoing_command.py
--------------------------
Wire object accepted by the 3Commas ``/trade_signal/trading_view`` endpoint.

The remote side matches payloads literally, so field order and the absence of
``action`` on start commands are part of the protocol.
"""
from __future__ import annotations

import logging
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

from models.deal import Action, BotRole, DealAction
from models.settings import Settings

logger = logging.getLogger(__name__)

CLOSE_AT_MARKET_PRICE = "close_at_market_price"


class OutgoingCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    message_type: Literal["bot"] = "bot"
    bot_id: int
    email_token: str
    delay_seconds: int = 0
    action: Optional[Literal["close_at_market_price"]] = None

    @classmethod
    def from_action(cls, action: Action, settings: Settings) -> "OutgoingCommand":
        logger.info("Generating %s %s request.", action.role.value, action.deal.value)
        return cls(
            bot_id=resolve_bot_id(action.role, settings),
            email_token=settings.email_token,
            action=_wire_action(action.deal),
        )

    def to_json(self) -> str:
        """Compact JSON body; ``action`` is omitted entirely for start commands."""
        return self.model_dump_json(exclude_none=True)


def resolve_bot_id(role: BotRole, settings: Settings) -> int:
    if role is BotRole.LONG:
        return settings.long_bot_id
    if role is BotRole.SHORT:
        return settings.short_bot_id
    raise AssertionError(f"unhandled bot role: {role!r}")


def _wire_action(deal: DealAction) -> Optional[str]:
    if deal is DealAction.START:
        return None
    if deal is DealAction.CLOSE:
        return CLOSE_AT_MARKET_PRICE
    raise AssertionError(f"unhandled deal action: {deal!r}")
