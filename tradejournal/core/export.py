# tradejournal/core/export.py
import csv
import io
from datetime import datetime
from typing import Iterable, Optional

from tradejournal.models.trade_model import Trade

CSV_HEADERS = [
    "Date",
    "Symbol",
    "Type",
    "Entry Price",
    "Exit Price",
    "Quantity",
    "Fees",
    "Strategy",
    "P&L",
    "ROI%",
    "Notes",
    "Tags",
]


def _round(value: Optional[float], places: int = 2):
    return "" if value is None else round(value, places)


def trade_row(trade: Trade) -> list:
    return [
        trade.entry_date.isoformat(sep=" ", timespec="minutes"),
        trade.symbol,
        trade.type.value,
        trade.entry_price,
        "" if trade.exit_price is None else trade.exit_price,
        trade.quantity,
        trade.fees,
        trade.strategy or "",
        _round(trade.profit_loss),
        _round(None if trade.roi is None else trade.roi * 100),
        trade.notes or "",
        ", ".join(trade.tags),
    ]


def to_csv(trades: Iterable[Trade]) -> str:
    """
    Serialize trades in the given order, header row first.

    Strings are always quoted so free text with commas, quotes or newlines
    survives; numbers are written bare.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for trade in trades:
        writer.writerow(trade_row(trade))
    return buffer.getvalue()


def export_filename(now: Optional[datetime] = None) -> str:
    now = now or datetime.utcnow()
    return f"trades_{now.strftime('%Y-%m-%d')}.csv"
