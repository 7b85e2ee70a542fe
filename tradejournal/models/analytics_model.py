# tradejournal/models/analytics_model.py
import math
from datetime import date, datetime
from enum import Enum
from typing import List, Union

from pydantic import BaseModel, field_serializer

from tradejournal.models.trade_model import TradeType


class PerformanceSummary(BaseModel):
    """KPI figures for a set of trades. Ratios are 0 when undefined."""

    total_trades: int = 0
    open_trades: int = 0
    closed_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    total_pnl: float = 0.0
    average_pnl: float = 0.0
    win_rate: float = 0.0
    avg_win: float = 0.0
    avg_loss: float = 0.0
    largest_win: float = 0.0
    largest_loss: float = 0.0
    # math.inf when there are wins and no losses
    profit_factor: float = 0.0
    win_loss_ratio: float = 0.0
    total_roi: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    risk_adjusted_sharpe_ratio: float = 0.0
    current_streak: int = 0

    @field_serializer("profit_factor", when_used="json")
    def serialize_profit_factor(self, v: float) -> Union[float, str]:
        # JSON has no infinity literal
        return "Infinity" if math.isinf(v) else v


class StrategyStats(BaseModel):
    strategy: str
    trades: int
    total_pnl: float
    wins: int
    win_rate: float
    avg_roi: float


class DayClass(str, Enum):
    PROFIT = "profit-day"
    LOSS = "loss-day"
    MIXED = "mixed-day"
    NO_TRADES = "no-trades"


class DayStats(BaseModel):
    date: date
    trades: int = 0
    pnl: float = 0.0
    classification: DayClass = DayClass.NO_TRADES


class CalendarMonth(BaseModel):
    year: int
    month: int
    days: List[DayStats]
    total_pnl: float = 0.0
    trading_days: int = 0
    total_trades: int = 0
    win_rate: float = 0.0


class MonthlyPnL(BaseModel):
    year: int
    month: int
    period: str
    pnl: float
    trades: int


class EquityPoint(BaseModel):
    trade_id: str
    symbol: str
    date: datetime
    pnl: float
    cumulative: float


class SymbolCount(BaseModel):
    symbol: str
    count: int


class TradeTypeCount(BaseModel):
    type: TradeType
    count: int


class WeekdayCount(BaseModel):
    day: str
    count: int


class PeriodComparison(BaseModel):
    recent_pnl: float = 0.0
    previous_pnl: float = 0.0
    change_pct: float = 0.0
