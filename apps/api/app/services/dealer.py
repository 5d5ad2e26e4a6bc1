"""Dealer dashboard: inventory, listing edits and lifecycle actions."""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..data.accounts import Dealer
from ..data.listings import Listing
from ..models.dealer import DealerStatus
from ..models.user import UserRole
from ..schemas import dealer as schemas
from ..schemas.listings import DealerCard
from . import catalog
from .access import Viewer, ensure_can_manage, require_dealer, require_user
from .lifecycle import ListingAction, apply_action, initial_status, with_cover_image
from .listings import to_card, to_dealer_card
from .search import filter_inventory, inventory_summary

logger = logging.getLogger(__name__)


async def list_inventory(
    viewer: Viewer,
    session: AsyncSession,
    *,
    tab: str = "all",
    term: str | None = None,
) -> schemas.InventoryResponse:
    """Return the dealer's own listings for one dashboard tab plus counters."""

    dealer_id = require_dealer(viewer)
    listings = await catalog.list_listings_by_owner(session, dealer_id)
    summary = inventory_summary(listings)
    items = filter_inventory(listings, tab, term)
    return schemas.InventoryResponse(
        counts=summary.counts,
        total_listings=summary.total_listings,
        sold_listings=summary.sold_listings,
        inventory_value=summary.inventory_value,
        items=[to_card(item) for item in items],
    )


async def create_listing(
    payload: schemas.ListingWriteRequest,
    viewer: Viewer,
    session: AsyncSession,
    *,
    now: datetime | None = None,
) -> schemas.ListingWriteResponse:
    """Create a listing as a draft or publish it straight away."""

    dealer_id = require_dealer(viewer)
    action = ListingAction(payload.action)
    now = now or datetime.now(timezone.utc)

    form = payload.listing
    images = tuple(form.images)
    if action is ListingAction.SUBMIT:
        images = with_cover_image(images)

    listing = Listing(
        id="",
        dealer_id=dealer_id,
        status=initial_status(action),
        created_at=now,
        **_form_fields(form),
        images=images,
    )
    listing_id = await catalog.create_listing(session, listing)
    logger.info("Dealer %s created listing %s as %s", dealer_id, listing_id, listing.status.value)
    return schemas.ListingWriteResponse(id=listing_id, status=listing.status.value, images=list(images))


async def update_listing(
    listing_id: str,
    payload: schemas.ListingWriteRequest,
    viewer: Viewer,
    session: AsyncSession,
    *,
    now: datetime | None = None,
) -> schemas.ListingWriteResponse:
    """Save edits; the lifecycle policy decides the resulting status."""

    existing = await _load_managed(listing_id, viewer, session)
    now = now or datetime.now(timezone.utc)

    edited = replace(existing, **_form_fields(payload.listing), images=tuple(payload.listing.images))
    updated = apply_action(edited, ListingAction(payload.action), now)

    fields = {name: getattr(updated, name) for name in _form_fields(payload.listing)}
    fields.update(images=updated.images, status=updated.status, sold_at=updated.sold_at)
    if not await catalog.update_listing(session, listing_id, fields):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")

    return schemas.ListingWriteResponse(id=listing_id, status=updated.status.value, images=list(updated.images))


async def change_status(
    listing_id: str,
    action: ListingAction,
    viewer: Viewer,
    session: AsyncSession,
    *,
    now: datetime | None = None,
) -> schemas.StatusChangeResponse:
    """Mark sold, restore, archive, reserve, or move a listing between draft and live."""

    listing = await _load_managed(listing_id, viewer, session)
    now = now or datetime.now(timezone.utc)
    updated = apply_action(listing, action, now)

    if updated.images != listing.images:
        saved = await catalog.update_listing(
            session,
            listing_id,
            {"status": updated.status, "sold_at": updated.sold_at, "images": updated.images},
        )
    else:
        saved = await catalog.set_listing_status(session, listing_id, updated.status, updated.sold_at)
    if not saved:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")

    return schemas.StatusChangeResponse(id=listing_id, status=updated.status.value, sold_at=updated.sold_at)


async def delete_listing(listing_id: str, viewer: Viewer, session: AsyncSession) -> None:
    """Permanently remove a listing, whatever its status."""

    await _load_managed(listing_id, viewer, session)
    if not await catalog.delete_listing(session, listing_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    logger.info("Listing %s deleted by %s", listing_id, viewer.user_id)


async def _load_managed(listing_id: str, viewer: Viewer, session: AsyncSession) -> Listing:
    require_dealer(viewer)
    listing = await catalog.get_listing(session, listing_id)
    if listing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")
    ensure_can_manage(viewer, listing)
    return listing


def _form_fields(form: schemas.ListingForm) -> dict[str, object]:
    """Listing attributes a dealer edits directly through the form."""

    return {
        "title": form.title or None,
        "make": form.make,
        "model": form.model,
        "year": form.year,
        "price": form.price,
        "mileage": form.mileage,
        "transmission": form.transmission,
        "fuel_type": form.fuel_type,
        "steering": form.steering,
        "region": form.region,
        "condition": form.condition,
        "body_type": form.body_type,
        "description": form.description,
        "color": form.color or None,
        "vin": form.vin or None,
        "engine_size": form.engine_size or None,
        "hire_purchase": form.hire_purchase,
        "features": tuple(dict.fromkeys(form.features)),
    }


async def register_dealer(
    payload: schemas.DealerRegistrationRequest,
    viewer: Viewer,
    session: AsyncSession,
) -> DealerCard:
    """Turn a signed-in account into a dealership."""

    user_id = require_user(viewer)
    dealer_status = DealerStatus.APPROVED if settings.dealer_auto_approve else DealerStatus.PENDING
    dealer = Dealer(
        uid=user_id,
        business_name=payload.business_name,
        region=payload.region,
        contact_phone=payload.contact_phone,
        whatsapp=payload.whatsapp or payload.contact_phone,
        address=payload.address,
        status=dealer_status,
        logo_url=payload.logo_url,
        banner_url=payload.banner_url,
        description=payload.description,
    )

    if viewer.profile is None:
        await catalog.create_profile(
            session,
            uid=user_id,
            email=payload.email,
            role=UserRole.DEALER,
            display_name=payload.business_name,
        )
    elif not viewer.is_admin:
        await catalog.update_profile(session, user_id, {"role": UserRole.DEALER})
    await catalog.register_dealer(session, dealer)

    logger.info("Registered dealership %s for %s (%s)", dealer.business_name, user_id, dealer_status.value)
    return to_dealer_card(dealer)


async def update_dealer_profile(
    payload: schemas.DealerUpdateRequest,
    viewer: Viewer,
    session: AsyncSession,
) -> DealerCard:
    dealer_id = require_dealer(viewer)
    fields = payload.model_dump(exclude_unset=True, exclude_none=True)
    if fields and not await catalog.update_dealer(session, dealer_id, fields):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dealership not found")

    dealer = await catalog.get_dealer(session, dealer_id)
    if dealer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dealership not found")
    return to_dealer_card(dealer)
