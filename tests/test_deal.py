import pytest

from models.deal import Action, ActionPair, BotRole, DealAction, translate
from models.signal import SignalAction


def test_buy_closes_short_then_starts_long():
    pair = translate(SignalAction.BUY)

    assert list(pair) == [
        (DealAction.CLOSE, BotRole.SHORT),
        (DealAction.START, BotRole.LONG),
    ]


def test_sell_closes_long_then_starts_short():
    pair = translate(SignalAction.SELL)

    assert list(pair) == [
        (DealAction.CLOSE, BotRole.LONG),
        (DealAction.START, BotRole.SHORT),
    ]


@pytest.mark.parametrize("signal", list(SignalAction))
def test_pair_targets_each_role_once(signal):
    pair = translate(signal)

    assert {a.role for a in pair} == {BotRole.LONG, BotRole.SHORT}
    assert pair[0] is pair.close and pair.close.deal is DealAction.CLOSE
    assert pair[1] is pair.start and pair.start.deal is DealAction.START


def test_translate_accepts_raw_value():
    assert translate("sell") == translate(SignalAction.SELL)


def test_pair_cannot_be_reordered():
    pair = translate(SignalAction.BUY)

    with pytest.raises(AttributeError):
        pair.close = Action(DealAction.START, BotRole.LONG)


def test_unknown_signal_is_rejected():
    with pytest.raises(AssertionError):
        translate("hold")


def test_action_str():
    assert str(Action(DealAction.CLOSE, BotRole.SHORT)) == "close short"
    assert isinstance(translate(SignalAction.BUY), ActionPair)
