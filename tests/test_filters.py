from datetime import datetime, timedelta

from hypothesis import given, strategies as st

from tradejournal.core.filters import (
    distinct_strategies,
    filter_and_sort,
    filter_trades,
    paginate,
    period_start,
    sort_trades,
)
from tradejournal.models.trade_model import (
    Period,
    SortDirection,
    SortField,
    TradeFilter,
    TradeSort,
    TradeType,
)

from conftest import build_trade


def symbols(trades):
    return [t.symbol for t in trades]


class TestFiltering:
    def test_no_filter_returns_copy(self, sample_trades):
        result = filter_trades(sample_trades)
        assert result == sample_trades
        assert result is not sample_trades

    def test_filter_by_type(self, sample_trades):
        result = filter_trades(sample_trades, TradeFilter(type=TradeType.SELL))
        assert symbols(result) == ["TSLA"]

    def test_filter_by_strategy(self, sample_trades):
        result = filter_trades(sample_trades, TradeFilter(strategy="breakout"))
        assert symbols(result) == ["AAPL", "MSFT"]

    def test_search_is_case_insensitive_across_fields(self, sample_trades):
        assert symbols(filter_trades(sample_trades, TradeFilter(search="tsla"))) == ["TSLA"]
        assert symbols(filter_trades(sample_trades, TradeFilter(search="REVERS"))) == ["TSLA"]
        assert symbols(filter_trades(sample_trades, TradeFilter(search="holding"))) == ["NVDA"]
        assert symbols(filter_trades(sample_trades, TradeFilter(search="Earn"))) == ["AAPL"]

    def test_criteria_are_conjunctive(self, sample_trades):
        trade_filter = TradeFilter(type=TradeType.BUY, strategy="breakout", search="msft")
        assert symbols(filter_trades(sample_trades, trade_filter)) == ["MSFT"]

    def test_no_match_returns_empty(self, sample_trades):
        assert filter_trades(sample_trades, TradeFilter(search="zzz")) == []

    def test_period_filter_uses_entry_date(self, sample_trades):
        now = datetime(2024, 2, 10, 12, 0)
        result = filter_trades(sample_trades, TradeFilter(period=Period.MONTH), now=now)
        assert symbols(result) == ["MSFT", "NVDA"]

        result = filter_trades(sample_trades, TradeFilter(period=Period.WEEK), now=now)
        assert symbols(result) == ["MSFT", "NVDA"]

        result = filter_trades(sample_trades, TradeFilter(period=Period.YEAR), now=now)
        assert len(result) == 4

    def test_period_start(self):
        now = datetime(2024, 5, 17, 15, 45)
        assert period_start(Period.ALL, now) is None
        assert period_start(Period.WEEK, now) == now - timedelta(days=7)
        assert period_start(Period.MONTH, now) == datetime(2024, 5, 1)
        assert period_start(Period.YEAR, now) == datetime(2024, 1, 1)

    def test_input_not_mutated(self, sample_trades):
        before = list(sample_trades)
        filter_and_sort(
            sample_trades,
            TradeFilter(search="a"),
            TradeSort(field=SortField.SYMBOL, direction=SortDirection.ASC),
        )
        assert sample_trades == before


class TestSorting:
    def test_default_sort_is_newest_first(self, sample_trades):
        assert symbols(sort_trades(sample_trades)) == ["NVDA", "MSFT", "TSLA", "AAPL"]

    def test_symbol_sort_is_lexicographic(self, sample_trades):
        result = sort_trades(sample_trades, TradeSort(field=SortField.SYMBOL, direction=SortDirection.ASC))
        assert symbols(result) == ["AAPL", "MSFT", "NVDA", "TSLA"]

    def test_numeric_sort_by_value(self, sample_trades):
        result = sort_trades(
            sample_trades, TradeSort(field=SortField.ENTRY_PRICE, direction=SortDirection.DESC)
        )
        assert [t.entry_price for t in result] == [400.0, 200.0, 100.0, 50.0]

    def test_missing_pnl_sorts_first_ascending_and_last_descending(self, sample_trades):
        asc = sort_trades(sample_trades, TradeSort(field=SortField.PROFIT_LOSS, direction=SortDirection.ASC))
        desc = sort_trades(sample_trades, TradeSort(field=SortField.PROFIT_LOSS, direction=SortDirection.DESC))
        assert symbols(asc) == ["NVDA", "MSFT", "TSLA", "AAPL"]
        assert symbols(desc) == ["AAPL", "TSLA", "MSFT", "NVDA"]

    def test_missing_strategy_sorts_as_empty(self, sample_trades):
        result = sort_trades(sample_trades, TradeSort(field=SortField.STRATEGY, direction=SortDirection.ASC))
        assert symbols(result) == ["NVDA", "AAPL", "MSFT", "TSLA"]

    def test_equal_keys_keep_input_order_in_both_directions(self):
        trades = [build_trade(symbol=s, type="BUY") for s in ("C", "A", "B")]
        for direction in (SortDirection.ASC, SortDirection.DESC):
            result = sort_trades(trades, TradeSort(field=SortField.TYPE, direction=direction))
            assert symbols(result) == ["C", "A", "B"]


@given(
    st.lists(
        st.tuples(st.sampled_from(["BUY", "SELL"]), st.sampled_from(["X", "Y", "Z"]),
                  st.integers(min_value=1, max_value=3)),
        max_size=15,
    ),
    st.sampled_from(list(SortField)),
    st.sampled_from(list(SortDirection)),
)
def test_sort_is_stable(rows, field, direction):
    trades = [
        build_trade(type=kind, symbol=symbol, entry_price=float(price), quantity=float(price),
                    exit_price=float(price) * 2, strategy=symbol,
                    entry_date=datetime(2024, 1, price), id=f"s{i}")
        for i, (kind, symbol, price) in enumerate(rows)
    ]
    trade_sort = TradeSort(field=field, direction=direction)
    result = sort_trades(trades, trade_sort)

    value_of = {
        SortField.DATE: lambda t: t.entry_date,
        SortField.SYMBOL: lambda t: t.symbol,
        SortField.TYPE: lambda t: t.type.value,
        SortField.ENTRY_PRICE: lambda t: t.entry_price,
        SortField.EXIT_PRICE: lambda t: t.exit_price,
        SortField.QUANTITY: lambda t: t.quantity,
        SortField.PROFIT_LOSS: lambda t: t.profit_loss,
        SortField.ROI: lambda t: t.roi,
        SortField.STRATEGY: lambda t: t.strategy,
    }[field]
    position = {t.id: i for i, t in enumerate(trades)}
    for a, b in zip(result, result[1:]):
        if value_of(a) == value_of(b):
            assert position[a.id] < position[b.id]
    assert sort_trades(result, trade_sort) == result


@given(
    st.lists(st.sampled_from(["AAPL", "amd", "TSLA", "MSFT"]), max_size=12),
    st.sampled_from([None, "BUY", "SELL"]),
    st.sampled_from([None, "a", "ts", "zz"]),
)
def test_filtering_is_idempotent(syms, kind, search):
    trades = [build_trade(symbol=s, type="SELL" if i % 2 else "BUY") for i, s in enumerate(syms)]
    trade_filter = TradeFilter(type=kind, search=search)
    once = filter_trades(trades, trade_filter)
    assert filter_trades(once, trade_filter) == once


def test_paginate_slices_and_clamps(make_trade):
    trades = [make_trade(symbol=f"S{i}") for i in range(7)]

    first = paginate(trades, page=1, page_size=3)
    assert symbols(first.items) == ["S0", "S1", "S2"]
    assert (first.total, first.pages, first.page) == (7, 3, 1)

    last = paginate(trades, page=9, page_size=3)
    assert last.page == 3
    assert symbols(last.items) == ["S6"]


def test_paginate_empty():
    page = paginate([], page=2, page_size=10)
    assert page.items == []
    assert (page.total, page.pages, page.page) == (0, 0, 1)


def test_distinct_strategies(sample_trades):
    assert distinct_strategies(sample_trades) == ["breakout", "reversal"]
