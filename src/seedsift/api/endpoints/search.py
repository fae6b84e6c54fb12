"""Search endpoint — Magnet decoding or adapter search with fallback.

Adapter failures do not change the status code: a well-formed request always
gets HTTP 200, and ``meta.adapterError`` / ``meta.fallbackAdapterError``
explain what went wrong. Only a blank query, a malformed magnet link or an
unknown adapter id produce HTTP 400.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from seedsift.api.deps import get_engine
from seedsift.core.engine import SeedSiftEngine
from seedsift.models.response import SearchResponse

router = APIRouter()


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search",
    description=(
        "Search the selected adapter (or the default one) for `q`.\n\n"
        "If `q` is a magnet link it is decoded directly and returned as a "
        "single result with `meta.mode = \"magnet\"`.\n\n"
        "If the adapter fails or finds nothing and a fallback adapter is "
        "configured, the fallback is queried and `meta.fallbackUsed` tells "
        "whether its results were returned."
    ),
    responses={
        200: {"description": "Search executed (adapter errors are reported in `meta`)"},
        400: {"description": "Blank query, malformed magnet link or unknown adapter"},
        405: {"description": "Method not allowed"},
    },
)
async def search(
    q: str | None = Query(default=None, description="Search keyword or magnet link"),
    adapter: str | None = Query(default=None, description="Adapter id (default adapter if omitted)"),
    page: str | None = Query(default=None, description="1-based page number"),
    engine: SeedSiftEngine = Depends(get_engine),
) -> SearchResponse:
    """Execute a search query.

    Args:
        q: Search keyword or magnet link.
        adapter: Optional adapter id.
        page: Optional page number; invalid or non-positive values mean 1.
        engine: The SeedSift engine instance (injected).

    Returns:
        The normalized SearchResponse.
    """
    return await engine.search(q, adapter_id=adapter, page=page)
