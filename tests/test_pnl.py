import pytest

from tradejournal.core.pnl import apply_pnl, calculate_pnl, realized_pnl
from tradejournal.models.trade_model import TradeType


def test_buy_trade_pnl_and_roi():
    profit_loss, roi = calculate_pnl(TradeType.BUY, 100, 110, 10, 5)
    assert profit_loss == 95
    assert roi == pytest.approx(0.095)


def test_sell_trade_profits_when_price_falls():
    profit_loss, roi = calculate_pnl(TradeType.SELL, 50, 40, 5, 0)
    assert profit_loss == 50
    assert roi == pytest.approx(0.20)


def test_sell_trade_loses_when_price_rises():
    profit_loss, _ = calculate_pnl("SELL", 50, 55, 2, 1)
    assert profit_loss == -11


def test_zero_investment_gives_zero_roi():
    profit_loss, roi = calculate_pnl(TradeType.BUY, 0, 5, 10, 0)
    assert profit_loss == 50
    assert roi == 0


def test_fees_reduce_pnl_for_both_sides():
    assert calculate_pnl("BUY", 10, 10, 1, 2)[0] == -2
    assert calculate_pnl("SELL", 10, 10, 1, 2)[0] == -2


def test_calculation_is_idempotent():
    first = calculate_pnl(TradeType.BUY, 12.5, 13.75, 40, 1.2)
    second = calculate_pnl(TradeType.BUY, 12.5, 13.75, 40, 1.2)
    assert first == second


def test_open_trade_has_no_realized_pnl(make_trade):
    trade = make_trade(exit_price=None)
    assert realized_pnl(trade) == (None, None)
    assert trade.profit_loss is None
    assert trade.roi is None


def test_apply_pnl_returns_copy_with_derived_fields(make_trade):
    trade = make_trade(exit_price=110.0, fees=5.0)
    stale = trade.model_copy(update={"profit_loss": 1.0, "roi": 1.0})

    fixed = apply_pnl(stale)

    assert fixed.profit_loss == 95
    assert fixed.roi == pytest.approx(0.095)
    assert stale.profit_loss == 1.0
