"""Health and adapter listing endpoints."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from pydantic import Field

from seedsift.api.deps import get_engine
from seedsift.core.engine import SeedSiftEngine
from seedsift.models.response import AdapterInfo
from seedsift.models.result import WireModel

router = APIRouter()


# ── Response models ──────────────────────────────────────────────────────


class HealthResponse(WireModel):
    """Service health check response."""

    status: str = Field(description="Health status ('ok')")
    time: datetime = Field(description="Current server time (UTC)")
    default_adapter: str = Field(description="Id of the default adapter (empty if none)")
    adapters: list[AdapterInfo] = Field(description="All registered adapters, default first")


class AdapterListResponse(WireModel):
    """Adapter listing response."""

    adapters: list[AdapterInfo] = Field(description="All registered adapters, default first")
    default_adapter: str = Field(description="Id of the default adapter (empty if none)")


# ── Endpoints ────────────────────────────────────────────────────────────


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service Health Check",
    description="Returns service status, server time and the registered adapters.",
)
async def health_check(
    engine: SeedSiftEngine = Depends(get_engine),
) -> HealthResponse:
    """Basic health check endpoint with adapter info."""
    registry = engine.adapter_registry
    return HealthResponse(
        status="ok",
        time=datetime.now(UTC),
        default_adapter=registry.default_id,
        adapters=registry.list(),
    )


@router.get(
    "/adapters",
    response_model=AdapterListResponse,
    summary="List Adapters",
    description=(
        "Lists every registered adapter. The default adapter comes first, the "
        "rest are sorted by id. `isFallback` marks the fallback adapter."
    ),
)
async def list_adapters(
    engine: SeedSiftEngine = Depends(get_engine),
) -> AdapterListResponse:
    """List registered adapters."""
    registry = engine.adapter_registry
    return AdapterListResponse(adapters=registry.list(), default_adapter=registry.default_id)
