# tradejournal/models/trade_model.py
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field, model_validator, validator

from tradejournal.utils.helpers import to_naive_utc, utcnow


class TradeType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class TradeStatus(str, Enum):
    OPEN = "OPEN"
    CLOSED = "CLOSED"


class TradeBase(BaseModel):
    """Fields a user submits for a trade. Derived P&L fields are never accepted."""

    symbol: str = Field(..., min_length=1, max_length=20)
    type: TradeType
    entry_price: float = Field(..., ge=0)
    exit_price: Optional[float] = Field(None, ge=0)
    quantity: float = Field(..., gt=0)
    fees: float = Field(0.0, ge=0)
    entry_date: datetime
    exit_date: Optional[datetime] = None
    strategy: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @validator("symbol")
    def normalize_symbol(cls, v):
        v = v.strip().upper()
        if not v:
            raise ValueError("Symbol must not be blank")
        return v

    @validator("entry_date", "exit_date")
    def normalize_dates(cls, v):
        return to_naive_utc(v)

    @validator("strategy", "notes")
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v

    @validator("tags", pre=True)
    def split_tags(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [tag.strip() for tag in v.split(",") if tag.strip()]
        return v

    @model_validator(mode="after")
    def check_exit_fields(self):
        if (self.exit_price is None) != (self.exit_date is None):
            raise ValueError("exit_price and exit_date must be given together")
        if self.exit_date is not None and self.exit_date < self.entry_date:
            raise ValueError("exit_date cannot be before entry_date")
        return self


class TradeCreate(TradeBase):
    pass


class TradeUpdate(TradeBase):
    """Full replacement of a stored trade."""


class Trade(TradeBase):
    id: str
    user_id: str
    profit_loss: Optional[float] = None
    roi: Optional[float] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def status(self) -> TradeStatus:
        if self.exit_price is None or self.exit_date is None:
            return TradeStatus.OPEN
        return TradeStatus.CLOSED

    @property
    def is_closed(self) -> bool:
        return self.status == TradeStatus.CLOSED

    @property
    def investment(self) -> float:
        return self.entry_price * self.quantity

    @property
    def trade_time(self) -> datetime:
        """When the trade was realized, or opened if it is still open."""
        return self.exit_date or self.entry_date


class Period(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class SortField(str, Enum):
    DATE = "date"
    SYMBOL = "symbol"
    TYPE = "type"
    ENTRY_PRICE = "entry_price"
    EXIT_PRICE = "exit_price"
    QUANTITY = "quantity"
    PROFIT_LOSS = "profit_loss"
    ROI = "roi"
    STRATEGY = "strategy"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TradeFilter(BaseModel):
    type: Optional[TradeType] = None
    strategy: Optional[str] = None
    search: Optional[str] = None
    period: Period = Period.ALL


class TradeSort(BaseModel):
    field: SortField = SortField.DATE
    direction: SortDirection = SortDirection.DESC


class TradePage(BaseModel):
    items: List[Trade]
    total: int
    page: int
    pages: int
    page_size: int
