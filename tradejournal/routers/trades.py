# tradejournal/routers/trades.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from tradejournal.core.context import AnalyticsContext
from tradejournal.core.export import export_filename
from tradejournal.database import get_trade_store
from tradejournal.models.trade_model import Trade, TradeCreate, TradePage, TradeUpdate
from tradejournal.routers.dependencies import analytics_context
from tradejournal.services import trade_service
from tradejournal.storage.base import TradeStore
from tradejournal.utils.auth import get_user_id
from tradejournal.utils.decorators import operation

router = APIRouter()


def trade_not_found(trade_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"Trade {trade_id} not found"
    )


@router.get("/", response_model=TradePage)
@operation("fetch trades")
async def list_trades(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=500),
    context: AnalyticsContext = Depends(analytics_context),
):
    """
    Returns the user's trades after filtering, sorting and pagination.
    """
    return context.page(page, page_size)


@router.get("/strategies", response_model=List[str])
@operation("fetch strategies")
async def list_strategies(context: AnalyticsContext = Depends(analytics_context)):
    """Distinct strategy names for the strategy filter."""
    return context.strategy_names()


@router.get("/export")
@operation("export trades")
async def export_trades(context: AnalyticsContext = Depends(analytics_context)):
    """CSV download of the filtered and sorted trades."""
    trades = context.visible()
    if not trades:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="No trades to export"
        )
    return Response(
        content=context.export_csv(),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename(context.now)}"'
        },
    )


@router.post("/", response_model=Trade, status_code=status.HTTP_201_CREATED)
@operation("create trade")
async def create_trade(
    payload: TradeCreate,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_trade_store),
):
    """Log a new trade. It is CLOSED when exit price and date are supplied."""
    return await trade_service.create_trade(store, user_id, payload)


@router.get("/{trade_id}", response_model=Trade)
@operation("fetch trade")
async def get_trade(
    trade_id: str,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_trade_store),
):
    trade = await store.get_trade(user_id, trade_id)
    if trade is None:
        raise trade_not_found(trade_id)
    return trade


@router.put("/{trade_id}", response_model=Trade)
@operation("update trade")
async def update_trade(
    trade_id: str,
    payload: TradeUpdate,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_trade_store),
):
    """Replace a trade; P&L and ROI are recomputed from the new fields."""
    trade = await trade_service.update_trade(store, user_id, trade_id, payload)
    if trade is None:
        raise trade_not_found(trade_id)
    return trade


@router.delete("/{trade_id}")
@operation("delete trade")
async def delete_trade(
    trade_id: str,
    user_id: str = Depends(get_user_id),
    store: TradeStore = Depends(get_trade_store),
):
    if not await trade_service.delete_trade(store, user_id, trade_id):
        raise trade_not_found(trade_id)
    return {"message": f"Trade {trade_id} deleted"}
