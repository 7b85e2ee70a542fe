# tradejournal/core/analytics.py
"""
Aggregate performance figures for a user's trades.

Every function takes an iterable of Trade records, never mutates it, and
returns plain values or models from tradejournal.models.analytics_model.
Unless stated otherwise only CLOSED trades with a realized P&L count.
"""
import calendar
import math
import statistics
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from tradejournal.models.analytics_model import (
    CalendarMonth,
    DayClass,
    DayStats,
    EquityPoint,
    MonthlyPnL,
    PerformanceSummary,
    PeriodComparison,
    StrategyStats,
    SymbolCount,
    TradeTypeCount,
    WeekdayCount,
)
from tradejournal.models.trade_model import Trade, TradeType

NO_STRATEGY = "none"
DEFAULT_RISK_FREE_RATE = 0.02
WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def closed_trades(trades: Iterable[Trade]) -> List[Trade]:
    return [t for t in trades if t.is_closed and t.profit_loss is not None]


def chronological(trades: Iterable[Trade]) -> List[Trade]:
    return sorted(trades, key=lambda t: t.trade_time)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def profit_factor(pnls: Sequence[float]) -> float:
    """Gross wins over absolute gross losses; math.inf when nothing was lost."""
    gross_win = sum(p for p in pnls if p > 0)
    gross_loss = abs(sum(p for p in pnls if p < 0))
    if gross_loss > 0:
        return gross_win / gross_loss
    if gross_win > 0:
        return math.inf
    return 0.0


def max_drawdown(trades: Iterable[Trade]) -> float:
    """Largest peak-to-trough fall of cumulative realized P&L."""
    cumulative = peak = worst = 0.0
    for trade in chronological(closed_trades(trades)):
        cumulative += trade.profit_loss
        peak = max(peak, cumulative)
        worst = max(worst, peak - cumulative)
    return worst


def sharpe(series: Sequence[float], risk_free_rate: float = 0.0) -> float:
    """(mean - risk_free_rate) / population std dev, 0 for an empty or flat series."""
    if not series:
        return 0.0
    std = statistics.pstdev(series)
    if std == 0:
        return 0.0
    return (statistics.fmean(series) - risk_free_rate) / std


def sharpe_ratio(trades: Iterable[Trade]) -> float:
    """Mean per-trade P&L over its standard deviation, no rate adjustment."""
    return sharpe([t.profit_loss for t in closed_trades(trades)])


def risk_adjusted_sharpe_ratio(
    trades: Iterable[Trade], risk_free_rate: float = DEFAULT_RISK_FREE_RATE
) -> float:
    """Mean per-trade ROI less a fixed risk-free rate, over the ROI standard deviation."""
    returns = [t.roi or 0.0 for t in closed_trades(trades)]
    return sharpe(returns, risk_free_rate)


def current_streak(trades: Iterable[Trade]) -> int:
    """
    Consecutive profitable trades counting back from the latest entry.

    Trades are walked newest entry first, the order of the trade list's date
    sort, so an open trade entered after the last winner ends the streak.
    """
    streak = 0
    for trade in sorted(trades, key=lambda t: t.entry_date, reverse=True):
        if trade.profit_loss is None or trade.profit_loss <= 0:
            break
        streak += 1
    return streak


def summarize(
    trades: Iterable[Trade], risk_free_rate: float = DEFAULT_RISK_FREE_RATE
) -> PerformanceSummary:
    trades = list(trades)
    closed = closed_trades(trades)
    summary = PerformanceSummary(
        total_trades=len(trades),
        open_trades=sum(1 for t in trades if not t.is_closed),
        current_streak=current_streak(trades),
    )
    if not closed:
        return summary

    pnls = [t.profit_loss for t in closed]
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p < 0]
    total_pnl = sum(pnls)
    avg_win = _mean(wins)
    avg_loss = _mean(losses)
    mean_investment = _mean([t.investment for t in closed])

    summary.closed_trades = len(closed)
    summary.winning_trades = len(wins)
    summary.losing_trades = len(losses)
    summary.total_pnl = total_pnl
    summary.average_pnl = total_pnl / len(closed)
    summary.win_rate = len(wins) / len(closed) * 100
    summary.avg_win = avg_win
    summary.avg_loss = avg_loss
    summary.largest_win = max(wins) if wins else 0.0
    summary.largest_loss = min(losses) if losses else 0.0
    summary.profit_factor = profit_factor(pnls)
    summary.win_loss_ratio = avg_win / abs(avg_loss) if avg_loss else 0.0
    summary.total_roi = total_pnl / mean_investment * 100 if mean_investment > 0 else 0.0
    summary.max_drawdown = max_drawdown(closed)
    summary.sharpe_ratio = sharpe_ratio(closed)
    summary.risk_adjusted_sharpe_ratio = risk_adjusted_sharpe_ratio(closed, risk_free_rate)
    return summary


def strategy_breakdown(trades: Iterable[Trade]) -> List[StrategyStats]:
    groups: Dict[str, List[Trade]] = defaultdict(list)
    for trade in closed_trades(trades):
        groups[trade.strategy or NO_STRATEGY].append(trade)

    stats = []
    for name, group in groups.items():
        total_pnl = sum(t.profit_loss for t in group)
        investment = sum(t.investment for t in group)
        wins = sum(1 for t in group if t.profit_loss > 0)
        stats.append(
            StrategyStats(
                strategy=name,
                trades=len(group),
                total_pnl=total_pnl,
                wins=wins,
                win_rate=wins / len(group) * 100,
                avg_roi=total_pnl / investment if investment > 0 else 0.0,
            )
        )
    return sorted(stats, key=lambda s: s.total_pnl, reverse=True)


def classify_day(pnls: Sequence[float]) -> DayClass:
    if not pnls:
        return DayClass.NO_TRADES
    negatives = sum(1 for p in pnls if p < 0)
    if negatives == 0:
        return DayClass.PROFIT
    if negatives == len(pnls):
        return DayClass.LOSS
    return DayClass.MIXED


def _group_by_entry_day(trades: Iterable[Trade]) -> Dict[date, List[float]]:
    # open trades count toward the day with no realized P&L
    days: Dict[date, List[float]] = defaultdict(list)
    for trade in trades:
        days[trade.entry_date.date()].append(trade.profit_loss or 0.0)
    return days


def _day_stats(day: date, pnls: Sequence[float]) -> DayStats:
    return DayStats(
        date=day, trades=len(pnls), pnl=sum(pnls), classification=classify_day(pnls)
    )


def daily_breakdown(trades: Iterable[Trade]) -> List[DayStats]:
    """Per-day trade counts and P&L, open trades included, by entry date."""
    days = _group_by_entry_day(trades)
    return [_day_stats(day, days[day]) for day in sorted(days)]


def calendar_month(trades: Iterable[Trade], year: int, month: int) -> CalendarMonth:
    """One cell per day of the month plus the month's totals."""
    month_trades = [
        t for t in trades if (t.entry_date.year, t.entry_date.month) == (year, month)
    ]
    days = _group_by_entry_day(month_trades)
    _, days_in_month = calendar.monthrange(year, month)
    cells = [
        _day_stats(day, days.get(day, []))
        for day in (date(year, month, d) for d in range(1, days_in_month + 1))
    ]

    closed = closed_trades(month_trades)
    wins = sum(1 for t in closed if t.profit_loss > 0)
    return CalendarMonth(
        year=year,
        month=month,
        days=cells,
        total_pnl=sum(t.profit_loss for t in closed),
        trading_days=len(days),
        total_trades=len(month_trades),
        win_rate=wins / len(closed) * 100 if closed else 0.0,
    )


def monthly_pnl(trades: Iterable[Trade]) -> List[MonthlyPnL]:
    """Realized P&L bucketed by the month each trade was closed."""
    buckets: Dict[tuple, List[float]] = defaultdict(list)
    for trade in closed_trades(trades):
        buckets[(trade.exit_date.year, trade.exit_date.month)].append(trade.profit_loss)
    return [
        MonthlyPnL(
            year=year,
            month=month,
            period=f"{year}-{month:02d}",
            pnl=sum(pnls),
            trades=len(pnls),
        )
        for (year, month), pnls in sorted(buckets.items())
    ]


def equity_curve(trades: Iterable[Trade]) -> List[EquityPoint]:
    points = []
    cumulative = 0.0
    for trade in chronological(closed_trades(trades)):
        cumulative += trade.profit_loss
        points.append(
            EquityPoint(
                trade_id=trade.id,
                symbol=trade.symbol,
                date=trade.trade_time,
                pnl=trade.profit_loss,
                cumulative=cumulative,
            )
        )
    return points


def symbol_distribution(trades: Iterable[Trade]) -> List[SymbolCount]:
    counts = Counter(t.symbol for t in trades)
    return [
        SymbolCount(symbol=symbol, count=count)
        for symbol, count in sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))
    ]


def trade_type_distribution(trades: Iterable[Trade]) -> List[TradeTypeCount]:
    """BUY and SELL trade counts, open trades included. Both types always appear."""
    counts = Counter(t.type for t in trades)
    return [TradeTypeCount(type=kind, count=counts[kind]) for kind in TradeType]


def weekday_distribution(trades: Iterable[Trade]) -> List[WeekdayCount]:
    """Trade counts per weekday of entry, Sunday first, all seven days present."""
    counts = Counter((t.entry_date.weekday() + 1) % 7 for t in trades)
    return [WeekdayCount(day=name, count=counts[i]) for i, name in enumerate(WEEKDAYS)]


def period_comparison(
    trades: Iterable[Trade], now: Optional[datetime] = None, days: int = 30
) -> PeriodComparison:
    """Realized P&L of the last `days` days against the window before it."""
    now = now or datetime.utcnow()
    recent_start = now - timedelta(days=days)
    previous_start = recent_start - timedelta(days=days)

    recent = previous = 0.0
    for trade in closed_trades(trades):
        if trade.entry_date >= recent_start:
            recent += trade.profit_loss
        elif trade.entry_date >= previous_start:
            previous += trade.profit_loss

    change = (recent - previous) / abs(previous) * 100 if previous else 0.0
    return PeriodComparison(recent_pnl=recent, previous_pnl=previous, change_pct=change)
