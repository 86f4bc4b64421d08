# --------------------------------------------------------------------
# models/deal.py
# Deal/bot vocabulary and the signal -> ordered action pair table.
# --------------------------------------------------------------------
from __future__ import annotations
from enum import Enum
from typing import Dict, NamedTuple

from models.signal import SignalAction


class DealAction(str, Enum):
    START = "start"
    CLOSE = "close"


class BotRole(str, Enum):
    LONG = "long"
    SHORT = "short"


class Action(NamedTuple):
    deal: DealAction
    role: BotRole

    def __str__(self) -> str:
        return f"{self.deal.value} {self.role.value}"


class ActionPair(NamedTuple):
    """Two actions for one signal. Iteration always yields ``close`` first."""

    close: Action
    start: Action


_TRANSLATION: Dict[SignalAction, ActionPair] = {
    SignalAction.BUY: ActionPair(
        close=Action(DealAction.CLOSE, BotRole.SHORT),
        start=Action(DealAction.START, BotRole.LONG),
    ),
    SignalAction.SELL: ActionPair(
        close=Action(DealAction.CLOSE, BotRole.LONG),
        start=Action(DealAction.START, BotRole.SHORT),
    ),
}


def translate(signal: SignalAction) -> ActionPair:
    """Map a buy/sell signal to (close opposing bot, start matching bot)."""
    try:
        return _TRANSLATION[SignalAction(signal)]
    except (KeyError, ValueError):
        raise AssertionError(f"unhandled signal action: {signal!r}") from None
