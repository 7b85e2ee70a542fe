
import pytest
from fastapi import HTTPException

from tradejournal.storage.base import StoreError
from tradejournal.utils.decorators import operation


@pytest.mark.asyncio
async def test_result_passes_through():
    @operation("add")
    async def add(a, b):
        return a + b

    assert await add(1, 2) == 3


@pytest.mark.asyncio
async def test_store_error_becomes_generic_500():
    @operation("load trades")
    async def load():
        raise StoreError("connection refused to 10.0.0.5")

    with pytest.raises(HTTPException) as exc:
        await load()
    assert exc.value.status_code == 500
    assert exc.value.detail == "Failed to load trades"


@pytest.mark.asyncio
async def test_unexpected_error_becomes_generic_500():
    @operation("compute")
    async def compute():
        raise ZeroDivisionError()

    with pytest.raises(HTTPException) as exc:
        await compute()
    assert exc.value.detail == "Failed to compute"


@pytest.mark.asyncio
async def test_http_exceptions_are_not_wrapped():
    @operation("find")
    async def find():
        raise HTTPException(status_code=404, detail="missing")

    with pytest.raises(HTTPException) as exc:
        await find()
    assert exc.value.status_code == 404
