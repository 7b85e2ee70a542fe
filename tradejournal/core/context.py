# tradejournal/core/context.py
from datetime import datetime
from typing import Iterable, List, Optional

from tradejournal.core import analytics
from tradejournal.core.export import to_csv
from tradejournal.core.filters import distinct_strategies, filter_and_sort, filter_trades, paginate
from tradejournal.models.analytics_model import (
    CalendarMonth,
    EquityPoint,
    MonthlyPnL,
    PerformanceSummary,
    PeriodComparison,
    StrategyStats,
    SymbolCount,
    TradeTypeCount,
    WeekdayCount,
)
from tradejournal.models.trade_model import Trade, TradeFilter, TradePage, TradeSort


class AnalyticsContext:
    """
    A snapshot of one user's trades together with the active filter and sort.

    The trade list is copied on construction; analytics honour the filter
    (period, type, strategy, search) but not the sort.
    """

    def __init__(
        self,
        trades: Iterable[Trade],
        trade_filter: Optional[TradeFilter] = None,
        trade_sort: Optional[TradeSort] = None,
        risk_free_rate: float = analytics.DEFAULT_RISK_FREE_RATE,
        now: Optional[datetime] = None,
    ):
        self.trades: List[Trade] = list(trades)
        self.trade_filter = trade_filter or TradeFilter()
        self.trade_sort = trade_sort or TradeSort()
        self.risk_free_rate = risk_free_rate
        self.now = now or datetime.utcnow()

    def filtered(self) -> List[Trade]:
        return filter_trades(self.trades, self.trade_filter, self.now)

    def visible(self) -> List[Trade]:
        return filter_and_sort(self.trades, self.trade_filter, self.trade_sort, self.now)

    def page(self, page: int = 1, page_size: int = 20) -> TradePage:
        return paginate(self.visible(), page, page_size)

    def strategy_names(self) -> List[str]:
        return distinct_strategies(self.trades)

    def summary(self) -> PerformanceSummary:
        return analytics.summarize(self.filtered(), self.risk_free_rate)

    def strategies(self) -> List[StrategyStats]:
        return analytics.strategy_breakdown(self.filtered())

    def calendar(self, year: int, month: int) -> CalendarMonth:
        return analytics.calendar_month(self.filtered(), year, month)

    def monthly(self) -> List[MonthlyPnL]:
        return analytics.monthly_pnl(self.filtered())

    def equity_curve(self) -> List[EquityPoint]:
        return analytics.equity_curve(self.filtered())

    def symbols(self) -> List[SymbolCount]:
        return analytics.symbol_distribution(self.filtered())

    def trade_types(self) -> List[TradeTypeCount]:
        return analytics.trade_type_distribution(self.filtered())

    def weekdays(self) -> List[WeekdayCount]:
        return analytics.weekday_distribution(self.filtered())

    def comparison(self) -> PeriodComparison:
        # compares fixed 30-day windows, so the period filter does not apply
        return analytics.period_comparison(self.trades, self.now)

    def export_csv(self) -> str:
        return to_csv(self.visible())
