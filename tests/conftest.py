"""Shared fixtures for the trading journal tests."""

import itertools
from datetime import datetime, timedelta

import pytest

from tradejournal.core.pnl import apply_pnl
from tradejournal.models.trade_model import Trade

_ids = itertools.count(1)


def build_trade(
    symbol="AAPL",
    type="BUY",
    entry_price=100.0,
    exit_price=None,
    quantity=10.0,
    fees=0.0,
    entry_date=datetime(2024, 1, 1, 10, 0),
    exit_date=None,
    strategy=None,
    notes=None,
    tags=(),
    user_id="user-1",
    id=None,
):
    if exit_price is not None and exit_date is None:
        exit_date = entry_date + timedelta(hours=2)
    trade = Trade(
        id=id or f"t{next(_ids)}",
        user_id=user_id,
        symbol=symbol,
        type=type,
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        fees=fees,
        entry_date=entry_date,
        exit_date=exit_date,
        strategy=strategy,
        notes=notes,
        tags=list(tags),
    )
    return apply_pnl(trade)


def closed_with_pnl(pnl, day, **kwargs):
    """A closed BUY of 1 share from 100 whose P&L is exactly `pnl`."""
    entry_date = datetime(2024, 1, 1, 10, 0) + timedelta(days=day)
    return build_trade(
        entry_price=100.0,
        exit_price=100.0 + pnl,
        quantity=1.0,
        entry_date=entry_date,
        **kwargs,
    )


@pytest.fixture
def make_trade():
    return build_trade


@pytest.fixture
def make_closed():
    return closed_with_pnl


@pytest.fixture
def sample_trades():
    return [
        build_trade(symbol="AAPL", exit_price=110.0, fees=5.0, strategy="breakout",
                    notes="gap up", tags=["earnings"], entry_date=datetime(2024, 1, 2, 9, 30)),
        build_trade(symbol="TSLA", type="SELL", entry_price=50.0, exit_price=40.0,
                    quantity=5.0, strategy="reversal", entry_date=datetime(2024, 1, 3, 10, 0)),
        build_trade(symbol="MSFT", entry_price=200.0, exit_price=190.0, quantity=2.0,
                    strategy="breakout", entry_date=datetime(2024, 2, 5, 11, 0)),
        build_trade(symbol="NVDA", entry_price=400.0, quantity=1.0,
                    notes="still holding", entry_date=datetime(2024, 2, 6, 12, 0)),
    ]
