# tradejournal/routers/dependencies.py
from typing import List, Optional

from fastapi import Depends, Query

from tradejournal.config import settings
from tradejournal.core.context import AnalyticsContext
from tradejournal.database import get_trade_store
from tradejournal.models.trade_model import (
    Period,
    SortDirection,
    SortField,
    Trade,
    TradeFilter,
    TradeSort,
    TradeType,
)
from tradejournal.storage.base import TradeStore
from tradejournal.utils.auth import get_user_id


def trade_filter_params(
    type: Optional[TradeType] = Query(None, description="BUY or SELL"),
    strategy: Optional[str] = Query(None, description="Exact strategy name"),
    search: Optional[str] = Query(
        None, description="Case-insensitive match on symbol, strategy, notes and tags"
    ),
    period: Period = Query(Period.ALL, description="all, week, month or year"),
) -> TradeFilter:
    return TradeFilter(type=type, strategy=strategy, search=search, period=period)


def trade_sort_params(
    sort: SortField = Query(SortField.DATE, description="Field to sort by"),
    order: SortDirection = Query(SortDirection.DESC, description="asc or desc"),
) -> TradeSort:
    return TradeSort(field=sort, direction=order)


async def user_trades(
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_trade_store),
) -> List[Trade]:
    return await store.list_trades(user_id)


def analytics_context(
    trades: List[Trade] = Depends(user_trades),
    trade_filter: TradeFilter = Depends(trade_filter_params),
    trade_sort: TradeSort = Depends(trade_sort_params),
) -> AnalyticsContext:
    return AnalyticsContext(
        trades,
        trade_filter=trade_filter,
        trade_sort=trade_sort,
        risk_free_rate=settings.RISK_FREE_RATE,
    )
