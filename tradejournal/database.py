# tradejournal/database.py
from motor.motor_asyncio import AsyncIOMotorClient

from tradejournal.config import settings
from tradejournal.storage.base import TradeStore
from tradejournal.storage.file_store import FileTradeStore
from tradejournal.storage.mongo_store import MongoTradeStore
from tradejournal.utils.logger import logger

client = AsyncIOMotorClient(settings.MONGO_URI)
db = client[settings.MONGO_DB]
trades_collection = db[settings.TRADES_COLLECTION]
users_collection = db["users"]


def build_trade_store() -> TradeStore:
    if settings.STORAGE_BACKEND == "file":
        return FileTradeStore(settings.LOCAL_STORE_DIR)
    if settings.STORAGE_BACKEND == "mongo":
        return MongoTradeStore(trades_collection)
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")


trade_store = build_trade_store()


def get_trade_store() -> TradeStore:
    """FastAPI dependency returning the configured trade store."""
    return trade_store


async def init_db():
    """Initialize database indexes"""
    await users_collection.create_index("email", unique=True)
    await users_collection.create_index("username", unique=True)
    await trade_store.init()

    logger.info("Database indexes created successfully")
