"""Business logic for public listing pages."""
from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Sequence

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..data import catalog as vocabulary
from ..data.accounts import Dealer
from ..data.listings import Listing
from ..models.listing import ListingStatus
from ..repositories.listings import sort_like
from ..schemas import listings as schemas
from . import catalog
from .access import Viewer
from .comparison import CATALOGUED_CATEGORIES, group_features
from .lifecycle import filter_visible, is_visible
from .search import PriceSort, search
from .selection import RecentlyViewed

FEATURED_COUNT = 3


async def search_listings(
    filters: schemas.ListingFilters,
    session: AsyncSession,
    *,
    sort: PriceSort | None = None,
    now: datetime | None = None,
) -> schemas.SearchListingsResponse:
    """Search publicly visible listings with the shopper's filters."""

    now = now or datetime.now(timezone.utc)
    listings = filter_visible(await catalog.list_listings(session), now)
    results = search(listings, filters, sort)
    return schemas.SearchListingsResponse(total=len(results), results=[to_card(item) for item in results])


async def get_listing_detail(
    listing_id: str,
    session: AsyncSession,
    *,
    viewer: Viewer | None = None,
    recent: RecentlyViewed | None = None,
    now: datetime | None = None,
) -> schemas.ListingDetail:
    """Return a listing with its dealer and grouped features.

    Sold listings stay reachable by link after they leave search results;
    drafts, reserved and archived listings are only shown to whoever manages them.
    """

    now = now or datetime.now(timezone.utc)
    listing = await catalog.get_listing(session, listing_id)
    if listing is None or not _detail_visible(listing, viewer, now):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found")

    dealer = await catalog.get_dealer(session, listing.dealer_id)
    if recent is not None:
        recent.record_view(listing.id)
    return to_detail(listing, dealer)


async def dealer_profile(
    uid: str,
    session: AsyncSession,
    *,
    query: str | None = None,
    body_type: str | None = None,
    sort: PriceSort | None = None,
    now: datetime | None = None,
) -> schemas.DealerProfileResponse:
    """Return a dealer with their visible inventory, searchable and sortable."""

    dealer = await catalog.get_dealer(session, uid)
    if dealer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dealership not found")

    now = now or datetime.now(timezone.utc)
    listings = filter_visible(await catalog.list_listings_by_owner(session, uid), now)
    results = search(listings, {"query": query, "body_type": body_type}, sort)
    return schemas.DealerProfileResponse(
        dealer=to_dealer_card(dealer),
        total=len(results),
        listings=[to_card(item) for item in results],
    )


async def list_dealers(session: AsyncSession) -> schemas.DealerDirectoryResponse:
    dealers = await catalog.list_approved_dealers(session)
    return schemas.DealerDirectoryResponse(dealers=[to_dealer_card(dealer) for dealer in dealers])


async def home_feed(
    session: AsyncSession,
    *,
    recent_ids: Sequence[str] = (),
    now: datetime | None = None,
) -> schemas.HomeFeedResponse:
    """Featured listings, featured dealers and the visitor's recently viewed cars."""

    now = now or datetime.now(timezone.utc)
    visible = filter_visible(await catalog.list_listings(session), now)
    dealers = await catalog.list_approved_dealers(session)

    recently_viewed: list[Listing] = []
    if recent_ids:
        recently_viewed = sort_like(await catalog.get_listings_by_ids(session, recent_ids), recent_ids)

    return schemas.HomeFeedResponse(
        featured=[to_card(item) for item in visible[:FEATURED_COUNT]],
        dealers=[to_dealer_card(dealer) for dealer in dealers[:FEATURED_COUNT]],
        recently_viewed=[to_card(item) for item in recently_viewed],
    )


def catalog_options() -> schemas.CatalogOptionsResponse:
    groups = group_features(
        [
            *vocabulary.SAFETY_FEATURES,
            *vocabulary.COMFORT_FEATURES,
            *vocabulary.INTERIOR_FEATURES,
            *vocabulary.EXTERIOR_FEATURES,
        ],
        include_other=False,
    )
    return schemas.CatalogOptionsResponse(
        regions=list(vocabulary.REGIONS),
        body_types=list(vocabulary.BODY_TYPES),
        makes=list(vocabulary.MAKES),
        features=[
            schemas.FeatureGroup(category=category.value, features=groups[category])
            for category in CATALOGUED_CATEGORIES
        ],
    )


def _detail_visible(listing: Listing, viewer: Viewer | None, now: datetime) -> bool:
    if is_visible(listing, now) or listing.status == ListingStatus.SOLD:
        return True
    if viewer is None or viewer.user_id is None:
        return False
    return viewer.is_admin or listing.dealer_id == viewer.user_id


def _text(value: object) -> str:
    if isinstance(value, enum.Enum):
        return str(value.value)
    return str(value)


def display_title(listing: Listing) -> str:
    return listing.title or f"{listing.year} {listing.make} {listing.model}"


def to_card(listing: Listing) -> schemas.ListingCard:
    return schemas.ListingCard(
        id=listing.id,
        dealer_id=listing.dealer_id,
        title=display_title(listing),
        make=listing.make,
        model=listing.model,
        year=listing.year,
        price=listing.price,
        mileage=listing.mileage,
        transmission=_text(listing.transmission),
        fuel_type=_text(listing.fuel_type),
        steering=_text(listing.steering),
        region=listing.region,
        condition=_text(listing.condition),
        body_type=listing.body_type,
        status=_text(listing.status),
        cover_image=listing.images[0] if listing.images else None,
        created_at=listing.created_at,
        sold_at=listing.sold_at,
    )


def to_dealer_card(dealer: Dealer) -> schemas.DealerCard:
    return schemas.DealerCard(
        uid=dealer.uid,
        business_name=dealer.business_name,
        region=dealer.region,
        contact_phone=dealer.contact_phone,
        whatsapp=dealer.whatsapp,
        address=dealer.address,
        status=_text(dealer.status),
        logo_url=dealer.logo_url,
        banner_url=dealer.banner_url,
        description=dealer.description,
    )


def to_detail(listing: Listing, dealer: Dealer | None) -> schemas.ListingDetail:
    card = to_card(listing)
    groups = group_features(listing.features)
    return schemas.ListingDetail(
        **card.model_dump(),
        images=list(listing.images),
        description=listing.description,
        color=listing.color,
        vin=listing.vin,
        engine_size=listing.engine_size,
        hire_purchase=listing.hire_purchase,
        feature_groups=[
            schemas.FeatureGroup(category=category.value, features=features) for category, features in groups.items()
        ],
        dealer=to_dealer_card(dealer) if dealer is not None else None,
    )
