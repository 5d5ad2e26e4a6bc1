"""Public browsing endpoints: search, listing pages, dealers and the home feed."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..db.session import get_session
from ..schemas import listings as listings_schema
from ..services import listings as listings_service
from ..services.access import Viewer, get_viewer
from ..services.search import PriceSort
from ..services.selection_store import ClientSelection
from .selection import get_client_selection

router = APIRouter()


def listing_filters(
    query: str | None = Query(default=None, alias="q"),
    region: str | None = None,
    body_type: str | None = None,
    condition: str | None = None,
    min_price: int | None = Query(default=None, ge=0),
    max_price: int | None = Query(default=None, ge=0),
    steering: str | None = None,
    fuel_type: str | None = None,
    transmission: str | None = None,
) -> listings_schema.ListingFilters:
    """Collect search filters from the query string."""

    return listings_schema.ListingFilters(
        query=query,
        region=region,
        body_type=body_type,
        condition=condition,
        min_price=min_price,
        max_price=max_price,
        steering=steering,
        fuel_type=fuel_type,
        transmission=transmission,
    )


@router.get("/listings", response_model=listings_schema.SearchListingsResponse)
async def search_listings(
    filters: listings_schema.ListingFilters = Depends(listing_filters),
    sort: PriceSort | None = None,
    session: AsyncSession = Depends(get_session),
) -> listings_schema.SearchListingsResponse:
    """Return publicly visible listings matching the filters."""

    return await listings_service.search_listings(filters, session, sort=sort)


@router.get("/listings/{listing_id}", response_model=listings_schema.ListingDetail)
async def get_listing(
    listing_id: str,
    viewer: Viewer = Depends(get_viewer),
    selection: ClientSelection = Depends(get_client_selection),
    session: AsyncSession = Depends(get_session),
) -> listings_schema.ListingDetail:
    """Return a listing page and record it in the client's recently viewed trail."""

    return await listings_service.get_listing_detail(
        listing_id, session, viewer=viewer, recent=selection.recent
    )


@router.get("/home", response_model=listings_schema.HomeFeedResponse)
async def home(
    selection: ClientSelection = Depends(get_client_selection),
    session: AsyncSession = Depends(get_session),
) -> listings_schema.HomeFeedResponse:
    return await listings_service.home_feed(session, recent_ids=selection.recent.recent())


@router.get("/catalog/options", response_model=listings_schema.CatalogOptionsResponse)
async def catalog_options() -> listings_schema.CatalogOptionsResponse:
    """Vocabularies for search and listing forms."""

    return listings_service.catalog_options()


@router.get("/dealers", response_model=listings_schema.DealerDirectoryResponse)
async def list_dealers(session: AsyncSession = Depends(get_session)) -> listings_schema.DealerDirectoryResponse:
    return await listings_service.list_dealers(session)


@router.get("/dealers/{uid}", response_model=listings_schema.DealerProfileResponse)
async def dealer_profile(
    uid: str,
    q: str | None = None,
    body_type: str | None = None,
    sort: PriceSort | None = None,
    session: AsyncSession = Depends(get_session),
) -> listings_schema.DealerProfileResponse:
    """Return a dealer's page with their visible inventory."""

    return await listings_service.dealer_profile(uid, session, query=q, body_type=body_type, sort=sort)
