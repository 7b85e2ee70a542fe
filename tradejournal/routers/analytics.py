# tradejournal/routers/analytics.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from tradejournal.core.context import AnalyticsContext
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
from tradejournal.routers.dependencies import analytics_context
from tradejournal.utils.decorators import operation

router = APIRouter()


@router.get("/summary", response_model=PerformanceSummary)
@operation("compute summary")
async def get_summary(context: AnalyticsContext = Depends(analytics_context)):
    """
    KPI tiles: P&L, win rate, averages, profit factor, drawdown, both
    Sharpe ratios and the current winning streak.

    profit_factor is the string "Infinity" when there are wins and no losses.
    """
    return context.summary()


@router.get("/strategies", response_model=List[StrategyStats])
@operation("compute strategy stats")
async def get_strategy_stats(context: AnalyticsContext = Depends(analytics_context)):
    return context.strategies()


@router.get("/calendar", response_model=CalendarMonth)
@operation("build calendar")
async def get_calendar(
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    context: AnalyticsContext = Depends(analytics_context),
):
    """Day cells for one month, the current month by default."""
    today = datetime.utcnow()
    return context.calendar(year or today.year, month or today.month)


@router.get("/monthly", response_model=List[MonthlyPnL])
@operation("compute monthly P&L")
async def get_monthly(context: AnalyticsContext = Depends(analytics_context)):
    return context.monthly()


@router.get("/equity-curve", response_model=List[EquityPoint])
@operation("compute equity curve")
async def get_equity_curve(context: AnalyticsContext = Depends(analytics_context)):
    return context.equity_curve()


@router.get("/symbols", response_model=List[SymbolCount])
@operation("compute symbol distribution")
async def get_symbols(context: AnalyticsContext = Depends(analytics_context)):
    return context.symbols()


@router.get("/trade-types", response_model=List[TradeTypeCount])
@operation("compute trade type distribution")
async def get_trade_types(context: AnalyticsContext = Depends(analytics_context)):
    """BUY and SELL counts, both always present."""
    return context.trade_types()


@router.get("/weekdays", response_model=List[WeekdayCount])
@operation("compute weekday distribution")
async def get_weekdays(context: AnalyticsContext = Depends(analytics_context)):
    """Trades per weekday of entry, Sunday first."""
    return context.weekdays()


@router.get("/comparison", response_model=PeriodComparison)
@operation("compare periods")
async def get_comparison(context: AnalyticsContext = Depends(analytics_context)):
    """Realized P&L of the last 30 days against the 30 days before."""
    return context.comparison()
