from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from puzzle_api.errors import StoreUnavailableError


@asynccontextmanager
async def store_guard(session: AsyncSession, action: str) -> AsyncIterator[None]:
    """Roll back and re-raise driver failures as ``StoreUnavailableError``.

    ``IntegrityError`` passes through untouched so callers can resolve
    unique-key races themselves.
    """
    try:
        yield
    except IntegrityError:
        raise
    except (OperationalError, DBAPIError) as exc:
        await session.rollback()
        raise StoreUnavailableError(f"{action} failed: store unavailable") from exc
