# tradejournal/core/pnl.py
from typing import Optional, Tuple

from tradejournal.models.trade_model import Trade, TradeType


def calculate_pnl(
    trade_type: TradeType,
    entry_price: float,
    exit_price: float,
    quantity: float,
    fees: float = 0.0,
) -> Tuple[float, float]:
    """
    Realized profit/loss and ROI of a closed position.

    BUY (long):   (exit - entry) * qty - fees
    SELL (short): -(exit - entry) * qty - fees

    ROI is a fraction of the initial investment (entry * qty) and is 0 when
    nothing was invested.
    """
    gross_delta = (exit_price - entry_price) * quantity
    if TradeType(trade_type) == TradeType.SELL:
        profit_loss = -gross_delta - fees
    else:
        profit_loss = gross_delta - fees

    investment = entry_price * quantity
    roi = profit_loss / investment if investment > 0 else 0.0
    return profit_loss, roi


def realized_pnl(trade: Trade) -> Tuple[Optional[float], Optional[float]]:
    """P&L and ROI for a trade, or (None, None) while it is open."""
    if not trade.is_closed:
        return None, None
    return calculate_pnl(
        trade.type, trade.entry_price, trade.exit_price, trade.quantity, trade.fees
    )


def apply_pnl(trade: Trade) -> Trade:
    """Return a copy of the trade with its derived fields recomputed."""
    profit_loss, roi = realized_pnl(trade)
    return trade.model_copy(update={"profit_loss": profit_loss, "roi": roi})
