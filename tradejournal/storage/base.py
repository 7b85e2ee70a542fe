# tradejournal/storage/base.py
import abc
from typing import List, Optional

from tradejournal.models.trade_model import Trade


class StoreError(Exception):
    """Raised when the backing store cannot complete an operation."""


class TradeStore(abc.ABC):
    """Load and save one user's trades. Every call is scoped by user_id."""

    async def init(self) -> None:
        """Prepare the backend (indexes, directories)."""

    @abc.abstractmethod
    async def list_trades(self, user_id: str) -> List[Trade]:
        """All trades of the user, most recent entry first."""

    @abc.abstractmethod
    async def get_trade(self, user_id: str, trade_id: str) -> Optional[Trade]:
        ...

    @abc.abstractmethod
    async def insert_trade(self, trade: Trade) -> Trade:
        """Store the trade with P&L and ROI recomputed; returns what was stored."""

    @abc.abstractmethod
    async def replace_trade(self, trade: Trade) -> bool:
        """
        Replace the stored record with the same id and owner. False if absent.

        P&L and ROI are recomputed from the record's prices before writing.
        """

    @abc.abstractmethod
    async def delete_trade(self, user_id: str, trade_id: str) -> bool:
        ...

    @abc.abstractmethod
    async def delete_all(self, user_id: str) -> int:
        ...
