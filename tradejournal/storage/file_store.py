# tradejournal/storage/file_store.py
import asyncio
import json
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from tradejournal.core.pnl import apply_pnl
from tradejournal.models.trade_model import Trade
from tradejournal.storage.base import StoreError, TradeStore
from tradejournal.utils.logger import logger


class FileTradeStore(TradeStore):
    """
    Standalone variant: each user's trade list lives in one JSON file.

    Every write loads the whole list, changes it and saves it back. Writers
    in this process are serialized; across processes the last writer wins.
    """

    def __init__(self, directory):
        self.directory = Path(directory)
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Using trade files in {self.directory}")

    def path_for(self, user_id: str) -> Path:
        safe_id = "".join(c for c in user_id if c.isalnum() or c in "-_@.")
        return self.directory / f"trades_{safe_id}.json"

    def _load(self, user_id: str) -> List[Trade]:
        path = self.path_for(user_id)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return [Trade.model_validate(item) for item in data]
        except (OSError, ValueError, ValidationError) as e:
            raise StoreError(f"Failed to read {path}: {e}") from e

    def _save(self, user_id: str, trades: List[Trade]) -> None:
        path = self.path_for(user_id)
        tmp_path = path.with_suffix(".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(
                    [t.model_dump(mode="json", exclude={"status"}) for t in trades],
                    f,
                    indent=2,
                )
            tmp_path.replace(path)
        except OSError as e:
            raise StoreError(f"Failed to write {path}: {e}") from e

    async def list_trades(self, user_id: str) -> List[Trade]:
        trades = await asyncio.to_thread(self._load, user_id)
        return sorted(trades, key=lambda t: t.entry_date, reverse=True)

    async def get_trade(self, user_id: str, trade_id: str) -> Optional[Trade]:
        trades = await asyncio.to_thread(self._load, user_id)
        return next((t for t in trades if t.id == trade_id), None)

    async def insert_trade(self, trade: Trade) -> Trade:
        trade = apply_pnl(trade)
        async with self._lock:
            trades = await asyncio.to_thread(self._load, trade.user_id)
            trades.append(trade)
            await asyncio.to_thread(self._save, trade.user_id, trades)
        return trade

    async def replace_trade(self, trade: Trade) -> bool:
        trade = apply_pnl(trade)
        async with self._lock:
            trades = await asyncio.to_thread(self._load, trade.user_id)
            for i, existing in enumerate(trades):
                if existing.id == trade.id:
                    trades[i] = trade
                    await asyncio.to_thread(self._save, trade.user_id, trades)
                    return True
        return False

    async def delete_trade(self, user_id: str, trade_id: str) -> bool:
        async with self._lock:
            trades = await asyncio.to_thread(self._load, user_id)
            remaining = [t for t in trades if t.id != trade_id]
            if len(remaining) == len(trades):
                return False
            await asyncio.to_thread(self._save, user_id, remaining)
        return True

    async def delete_all(self, user_id: str) -> int:
        async with self._lock:
            trades = await asyncio.to_thread(self._load, user_id)
            path = self.path_for(user_id)
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                raise StoreError(f"Failed to delete {path}: {e}") from e
        return len(trades)
