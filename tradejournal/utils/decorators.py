# tradejournal/utils/decorators.py
from functools import wraps

from fastapi import HTTPException, status

from tradejournal.storage.base import StoreError
from tradejournal.utils.logger import logger


def operation(name: str):
    """
    A decorator for route handlers: log failures and report them as a
    generic "Failed to <name>" 500. HTTPExceptions pass through untouched.
    """

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except StoreError as e:
                logger.error(f"Store error during '{name}': {e}")
            except Exception as e:
                logger.error(f"Error during '{name}': {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to {name}",
            )

        return wrapper

    return decorator
