from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status
from pydantic import BaseModel
from sqlalchemy import Connection, inspect, text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from puzzle_api.db.session import get_engine
from puzzle_api.deps.settings import resolve_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

STORE_TABLES = ("league", "player", "membership", "score")


class HealthResponse(BaseModel):
    status: str
    app: str
    env: str


class HealthReadyResponse(HealthResponse):
    checks: dict[str, bool]


def _missing_tables(connection: Connection) -> list[str]:
    inspector = inspect(connection)
    return [name for name in STORE_TABLES if not inspector.has_table(name)]


async def _check_store(engine: AsyncEngine) -> dict[str, bool]:
    """Report whether the database answers and holds the league tables."""
    checks = {"database": False, "schema": False}
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
            checks["database"] = True
            missing = await connection.run_sync(_missing_tables)
    except (OperationalError, DBAPIError, OSError) as exc:
        logger.warning(
            "Readiness check could not query the database.",
            extra={"error_type": type(exc).__name__},
        )
        return checks
    if missing:
        logger.warning("Readiness check found missing tables.", extra={"missing_tables": missing})
    checks["schema"] = not missing
    return checks


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health Check",
    description="Liveness only; does not touch the database.",
)
def get_health(request: Request) -> HealthResponse:
    settings = resolve_settings(request)
    return HealthResponse(status="ok", app=settings.app_name, env=settings.app_env)


@router.get(
    "/ready",
    response_model=HealthReadyResponse,
    summary="Readiness Check",
    description="Ready once the database answers and the league tables exist.",
    responses={
        200: {"description": "Membership and score stores are usable."},
        503: {"description": "Database unreachable or schema not migrated."},
    },
)
async def get_ready(request: Request) -> HealthReadyResponse:
    settings = resolve_settings(request)
    checks = await _check_store(get_engine())
    failed = [name for name, ok in checks.items() if not ok]
    if failed:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Store not ready: {', '.join(failed)}",
        )
    return HealthReadyResponse(
        status="ready",
        app=settings.app_name,
        env=settings.app_env,
        checks=checks,
    )
