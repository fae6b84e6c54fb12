"""History endpoint — Recently executed searches, newest first."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import Field

from seedsift.api.deps import get_engine
from seedsift.core.engine import SeedSiftEngine
from seedsift.models.history import HistoryEntry
from seedsift.models.result import WireModel

router = APIRouter()


class HistoryResponse(WireModel):
    """Search history listing."""

    history: list[HistoryEntry] = Field(default_factory=list, description="Entries, newest first")


@router.get(
    "/history",
    response_model=HistoryResponse,
    summary="Search History",
    description="Returns recorded searches, newest first. Results per entry are capped.",
)
async def list_history(
    engine: SeedSiftEngine = Depends(get_engine),
) -> HistoryResponse:
    """List recorded searches."""
    if engine.history is None:
        return HistoryResponse()
    return HistoryResponse(history=engine.history.list())
