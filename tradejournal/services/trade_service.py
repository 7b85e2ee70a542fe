# tradejournal/services/trade_service.py
from typing import Optional

from tradejournal.core.pnl import apply_pnl
from tradejournal.models.trade_model import Trade, TradeCreate, TradeUpdate
from tradejournal.storage.base import TradeStore
from tradejournal.utils.helpers import generate_id, utcnow
from tradejournal.utils.logger import logger


def build_trade(user_id: str, payload: TradeCreate) -> Trade:
    """New trade record owned by user_id, with P&L derived from the payload."""
    trade = Trade(**payload.model_dump(), id=generate_id(), user_id=user_id)
    return apply_pnl(trade)


def rebuild_trade(existing: Trade, payload: TradeUpdate) -> Trade:
    """Full replacement that keeps identity and ownership and recomputes P&L."""
    trade = Trade(
        **payload.model_dump(),
        id=existing.id,
        user_id=existing.user_id,
        created_at=existing.created_at,
        updated_at=utcnow(),
    )
    return apply_pnl(trade)


async def create_trade(store: TradeStore, user_id: str, payload: TradeCreate) -> Trade:
    trade = await store.insert_trade(build_trade(user_id, payload))
    logger.info(
        f"Logged {trade.type.value} {trade.symbol} x{trade.quantity} "
        f"({trade.status.value}) for user {user_id}"
    )
    return trade


async def update_trade(
    store: TradeStore, user_id: str, trade_id: str, payload: TradeUpdate
) -> Optional[Trade]:
    existing = await store.get_trade(user_id, trade_id)
    if existing is None:
        return None
    trade = rebuild_trade(existing, payload)
    if not await store.replace_trade(trade):
        return None
    logger.info(f"Trade {trade_id} replaced for user {user_id}")
    return trade


async def delete_trade(store: TradeStore, user_id: str, trade_id: str) -> bool:
    deleted = await store.delete_trade(user_id, trade_id)
    if deleted:
        logger.info(f"Trade {trade_id} deleted for user {user_id}")
    return deleted
