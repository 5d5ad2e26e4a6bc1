"""Compare queue, favorites and recently viewed endpoints."""
from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import selection as selection_schema
from ..services import compare as compare_service
from ..services import favorites as favorites_service
from ..services.access import Viewer, get_viewer
from ..services.selection_store import ClientSelection, selection_store

router = APIRouter()

CLIENT_ID_HEADER = "X-Client-Id"


async def get_client_selection(
    response: Response,
    x_client_id: str | None = Header(default=None),
) -> ClientSelection:
    """Resolve the caller's selection state, issuing a client id on first use."""

    client_id = x_client_id or str(uuid4())
    response.headers[CLIENT_ID_HEADER] = client_id
    return selection_store.get_or_create(client_id)


@router.get("/compare", response_model=selection_schema.ComparisonResponse)
async def get_comparison(
    selection: ClientSelection = Depends(get_client_selection),
    session: AsyncSession = Depends(get_session),
) -> selection_schema.ComparisonResponse:
    """Return the side-by-side table for the queued listings."""

    return await compare_service.build_comparison(selection, session)


@router.post("/compare/{listing_id}", response_model=selection_schema.CompareStateResponse)
async def add_to_compare(
    listing_id: str,
    selection: ClientSelection = Depends(get_client_selection),
) -> selection_schema.CompareStateResponse:
    return compare_service.add_to_compare(selection, listing_id)


@router.delete("/compare/{listing_id}", response_model=selection_schema.CompareStateResponse)
async def remove_from_compare(
    listing_id: str,
    selection: ClientSelection = Depends(get_client_selection),
) -> selection_schema.CompareStateResponse:
    return compare_service.remove_from_compare(selection, listing_id)


@router.delete("/compare", response_model=selection_schema.CompareStateResponse)
async def clear_compare(
    selection: ClientSelection = Depends(get_client_selection),
) -> selection_schema.CompareStateResponse:
    return compare_service.clear_compare(selection)


@router.get("/recent", response_model=selection_schema.RecentlyViewedResponse)
async def recently_viewed(
    selection: ClientSelection = Depends(get_client_selection),
    session: AsyncSession = Depends(get_session),
) -> selection_schema.RecentlyViewedResponse:
    return await compare_service.recently_viewed(selection, session)


@router.get("/favorites", response_model=selection_schema.FavoritesResponse)
async def list_favorites(
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> selection_schema.FavoritesResponse:
    return await favorites_service.list_favorites(viewer, session)


@router.put("/favorites/{listing_id}", response_model=selection_schema.FavoritesResponse)
async def set_favorite(
    listing_id: str,
    payload: selection_schema.FavoriteRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> selection_schema.FavoritesResponse:
    """Add or remove a favorite; repeating a request has no further effect."""

    return await favorites_service.set_favorite(listing_id, payload.favorite, viewer, session)
