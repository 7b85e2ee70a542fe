# tradejournal/storage/mongo_store.py
from typing import List, Optional

from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from tradejournal.core.pnl import apply_pnl
from tradejournal.models.trade_model import Trade
from tradejournal.storage.base import StoreError, TradeStore
from tradejournal.utils.logger import logger


def to_document(trade: Trade) -> dict:
    doc = trade.model_dump(exclude={"status"})
    doc["type"] = trade.type.value
    return doc


def from_document(doc: dict) -> Trade:
    doc.pop("_id", None)
    return Trade(**doc)


class MongoTradeStore(TradeStore):
    """Trades kept in a MongoDB collection through Motor."""

    def __init__(self, collection):
        self.collection = collection

    async def init(self) -> None:
        try:
            await self.collection.create_index("id", unique=True)
            await self.collection.create_index(
                [("user_id", ASCENDING), ("entry_date", DESCENDING)]
            )
        except PyMongoError as e:
            raise StoreError(f"Failed to create trade indexes: {e}") from e
        logger.info("Trade collection indexes created")

    async def list_trades(self, user_id: str) -> List[Trade]:
        try:
            cursor = self.collection.find({"user_id": user_id}).sort("entry_date", DESCENDING)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StoreError(f"Failed to load trades for {user_id}: {e}") from e
        return [from_document(doc) for doc in docs]

    async def get_trade(self, user_id: str, trade_id: str) -> Optional[Trade]:
        try:
            doc = await self.collection.find_one({"id": trade_id, "user_id": user_id})
        except PyMongoError as e:
            raise StoreError(f"Failed to load trade {trade_id}: {e}") from e
        return from_document(doc) if doc else None

    async def insert_trade(self, trade: Trade) -> Trade:
        trade = apply_pnl(trade)
        try:
            await self.collection.insert_one(to_document(trade))
        except PyMongoError as e:
            raise StoreError(f"Failed to insert trade {trade.id}: {e}") from e
        return trade

    async def replace_trade(self, trade: Trade) -> bool:
        trade = apply_pnl(trade)
        try:
            result = await self.collection.replace_one(
                {"id": trade.id, "user_id": trade.user_id}, to_document(trade)
            )
        except PyMongoError as e:
            raise StoreError(f"Failed to replace trade {trade.id}: {e}") from e
        return result.matched_count > 0

    async def delete_trade(self, user_id: str, trade_id: str) -> bool:
        try:
            result = await self.collection.delete_one({"id": trade_id, "user_id": user_id})
        except PyMongoError as e:
            raise StoreError(f"Failed to delete trade {trade_id}: {e}") from e
        return result.deleted_count > 0

    async def delete_all(self, user_id: str) -> int:
        try:
            result = await self.collection.delete_many({"user_id": user_id})
        except PyMongoError as e:
            raise StoreError(f"Failed to delete trades for {user_id}: {e}") from e
        return result.deleted_count
