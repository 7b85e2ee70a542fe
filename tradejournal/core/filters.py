# tradejournal/core/filters.py
import math
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from tradejournal.models.trade_model import (
    Period,
    SortDirection,
    SortField,
    Trade,
    TradeFilter,
    TradePage,
    TradeSort,
)

SORT_VALUES = {
    SortField.DATE: lambda t: t.entry_date,
    SortField.SYMBOL: lambda t: t.symbol,
    SortField.TYPE: lambda t: t.type.value,
    SortField.ENTRY_PRICE: lambda t: t.entry_price,
    SortField.EXIT_PRICE: lambda t: t.exit_price,
    SortField.QUANTITY: lambda t: t.quantity,
    SortField.PROFIT_LOSS: lambda t: t.profit_loss,
    SortField.ROI: lambda t: t.roi,
    SortField.STRATEGY: lambda t: t.strategy or "",
}


def period_start(period: Period, now: Optional[datetime] = None) -> Optional[datetime]:
    """First timestamp included in an analytics period, None for all time."""
    now = now or datetime.utcnow()
    period = Period(period)
    if period == Period.WEEK:
        return now - timedelta(days=7)
    if period == Period.MONTH:
        return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if period == Period.YEAR:
        return now.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    return None


def matches_search(trade: Trade, search: str) -> bool:
    needle = search.lower()
    haystack = [trade.symbol, trade.strategy, trade.notes, *trade.tags]
    return any(field and needle in field.lower() for field in haystack)


def matches(trade: Trade, trade_filter: TradeFilter, now: Optional[datetime] = None) -> bool:
    """True when the trade satisfies every criterion set on the filter."""
    if trade_filter.type and trade.type != trade_filter.type:
        return False
    if trade_filter.strategy and trade.strategy != trade_filter.strategy:
        return False
    if trade_filter.search and not matches_search(trade, trade_filter.search):
        return False
    start = period_start(trade_filter.period, now)
    if start is not None and trade.entry_date < start:
        return False
    return True


def filter_trades(
    trades: Iterable[Trade],
    trade_filter: Optional[TradeFilter] = None,
    now: Optional[datetime] = None,
) -> List[Trade]:
    if trade_filter is None:
        return list(trades)
    return [t for t in trades if matches(t, trade_filter, now)]


def sort_trades(trades: Iterable[Trade], trade_sort: Optional[TradeSort] = None) -> List[Trade]:
    """
    Stable sort by one field.

    Missing values (open trades have no exit price or P&L) order before any
    present value, so they come first ascending and last descending.
    """
    trade_sort = trade_sort or TradeSort()
    value_of = SORT_VALUES[trade_sort.field]

    def key(trade):
        value = value_of(trade)
        if value is None:
            return (0, 0)
        return (1, value)

    return sorted(
        trades, key=key, reverse=trade_sort.direction == SortDirection.DESC
    )


def filter_and_sort(
    trades: Iterable[Trade],
    trade_filter: Optional[TradeFilter] = None,
    trade_sort: Optional[TradeSort] = None,
    now: Optional[datetime] = None,
) -> List[Trade]:
    return sort_trades(filter_trades(trades, trade_filter, now), trade_sort)


def paginate(trades: List[Trade], page: int = 1, page_size: int = 20) -> TradePage:
    total = len(trades)
    pages = math.ceil(total / page_size) if total else 0
    page = max(1, min(page, pages or 1))
    start = (page - 1) * page_size
    return TradePage(
        items=trades[start : start + page_size],
        total=total,
        page=page,
        pages=pages,
        page_size=page_size,
    )


def distinct_strategies(trades: Iterable[Trade]) -> List[str]:
    return sorted({t.strategy for t in trades if t.strategy})
