"""Dealer dashboard endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import dealer as dealer_schema
from ..schemas.listings import DealerCard
from ..services import dealer as dealer_service
from ..services.access import Viewer, get_viewer
from ..services.search import INVENTORY_TABS

router = APIRouter()


@router.get("/listings", response_model=dealer_schema.InventoryResponse)
async def list_inventory(
    tab: str = Query(default="all", pattern=f"^({'|'.join(INVENTORY_TABS)})$"),
    q: str | None = None,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> dealer_schema.InventoryResponse:
    """Return the dealer's inventory for one dashboard tab."""

    return await dealer_service.list_inventory(viewer, session, tab=tab, term=q)


@router.post("/listings", response_model=dealer_schema.ListingWriteResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(
    payload: dealer_schema.ListingWriteRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> dealer_schema.ListingWriteResponse:
    return await dealer_service.create_listing(payload, viewer, session)


@router.put("/listings/{listing_id}", response_model=dealer_schema.ListingWriteResponse)
async def update_listing(
    listing_id: str,
    payload: dealer_schema.ListingWriteRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> dealer_schema.ListingWriteResponse:
    return await dealer_service.update_listing(listing_id, payload, viewer, session)


@router.post("/listings/{listing_id}/status", response_model=dealer_schema.StatusChangeResponse)
async def change_status(
    listing_id: str,
    payload: dealer_schema.StatusChangeRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> dealer_schema.StatusChangeResponse:
    """Apply a lifecycle action such as mark_sold or archive."""

    return await dealer_service.change_status(listing_id, payload.action, viewer, session)


@router.delete("/listings/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing(
    listing_id: str,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> None:
    await dealer_service.delete_listing(listing_id, viewer, session)


@router.post("/register", response_model=DealerCard, status_code=status.HTTP_201_CREATED)
async def register_dealer(
    payload: dealer_schema.DealerRegistrationRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> DealerCard:
    return await dealer_service.register_dealer(payload, viewer, session)


@router.patch("/profile", response_model=DealerCard)
async def update_profile(
    payload: dealer_schema.DealerUpdateRequest,
    viewer: Viewer = Depends(get_viewer),
    session: AsyncSession = Depends(get_session),
) -> DealerCard:
    return await dealer_service.update_dealer_profile(payload, viewer, session)
