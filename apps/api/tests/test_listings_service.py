"""Service-level tests for public listing pages."""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from app.data.accounts import FALLBACK_DEALERS, Profile
from app.data.listings import FALLBACK_LISTINGS
from app.models.listing import ListingStatus
from app.models.user import UserRole
from app.schemas.listings import ListingFilters
from app.services import catalog
from app.services import listings as listings_service
from app.services.access import GUEST, viewer_from_profile
from app.services.search import PriceSort
from app.services.selection import RecentlyViewed

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
PREMIO, VEZEL, HILUX = FALLBACK_LISTINGS


def _dealer_viewer(uid: str = "mock-dealer-1"):
    return viewer_from_profile(uid, Profile(uid=uid, email=f"{uid}@example.com", role=UserRole.DEALER))


@pytest.mark.asyncio
async def test_search_hides_non_public_listings(monkeypatch):
    inventory = [
        PREMIO,
        replace(VEZEL, status=ListingStatus.DRAFT),
        replace(HILUX, status=ListingStatus.SOLD, sold_at=NOW - timedelta(hours=2)),
        replace(PREMIO, id="old-sale", status=ListingStatus.SOLD, sold_at=NOW - timedelta(days=3)),
    ]
    monkeypatch.setattr(catalog, "list_listings", AsyncMock(return_value=inventory))

    response = await listings_service.search_listings(ListingFilters(), AsyncMock(), sort=PriceSort.DESC, now=NOW)

    assert response.total == 2
    assert [card.id for card in response.results] == ["mock-3", "mock-1"]
    assert response.results[0].status == "sold"


@pytest.mark.asyncio
async def test_search_applies_filters(monkeypatch):
    monkeypatch.setattr(catalog, "list_listings", AsyncMock(return_value=list(FALLBACK_LISTINGS)))

    response = await listings_service.search_listings(
        ListingFilters(fuel_type="Diesel"), AsyncMock(), now=NOW
    )

    assert [card.id for card in response.results] == ["mock-3"]
    assert response.results[0].title == "2022 Toyota Hilux"


@pytest.mark.asyncio
async def test_detail_includes_dealer_and_groups(monkeypatch):
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=PREMIO))
    monkeypatch.setattr(catalog, "get_dealer", AsyncMock(return_value=FALLBACK_DEALERS[0]))
    recent = RecentlyViewed()

    detail = await listings_service.get_listing_detail("mock-1", AsyncMock(), recent=recent, now=NOW)

    assert detail.dealer is not None
    assert detail.dealer.business_name == "AutoGy Motors"
    assert [group.category for group in detail.feature_groups] == ["Safety", "Comfort", "Exterior"]
    assert recent.recent() == ["mock-1"]


@pytest.mark.asyncio
async def test_detail_missing_listing_is_404(monkeypatch):
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=None))

    with pytest.raises(HTTPException) as excinfo:
        await listings_service.get_listing_detail("nope", AsyncMock(), now=NOW)

    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_sold_listing_reachable_after_window(monkeypatch):
    sold = replace(PREMIO, status=ListingStatus.SOLD, sold_at=NOW - timedelta(days=30))
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=sold))
    monkeypatch.setattr(catalog, "get_dealer", AsyncMock(return_value=None))

    detail = await listings_service.get_listing_detail("mock-1", AsyncMock(), viewer=GUEST, now=NOW)

    assert detail.status == "sold"
    assert detail.dealer is None


@pytest.mark.asyncio
async def test_draft_only_visible_to_owner(monkeypatch):
    draft = replace(PREMIO, status=ListingStatus.DRAFT)
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=draft))
    monkeypatch.setattr(catalog, "get_dealer", AsyncMock(return_value=None))

    with pytest.raises(HTTPException):
        await listings_service.get_listing_detail("mock-1", AsyncMock(), viewer=GUEST, now=NOW)
    with pytest.raises(HTTPException):
        await listings_service.get_listing_detail("mock-1", AsyncMock(), viewer=_dealer_viewer("other"), now=NOW)

    detail = await listings_service.get_listing_detail("mock-1", AsyncMock(), viewer=_dealer_viewer(), now=NOW)
    assert detail.status == "draft"


@pytest.mark.asyncio
async def test_dealer_profile_searches_visible_inventory(monkeypatch):
    own = [PREMIO, VEZEL, replace(PREMIO, id="hidden", status=ListingStatus.ARCHIVED)]
    monkeypatch.setattr(catalog, "get_dealer", AsyncMock(return_value=FALLBACK_DEALERS[0]))
    monkeypatch.setattr(catalog, "list_listings_by_owner", AsyncMock(return_value=own))

    response = await listings_service.dealer_profile("mock-dealer-1", AsyncMock(), body_type="SUV", now=NOW)

    assert response.dealer.uid == "mock-dealer-1"
    assert [card.id for card in response.listings] == ["mock-2"]


@pytest.mark.asyncio
async def test_unknown_dealer_is_404(monkeypatch):
    monkeypatch.setattr(catalog, "get_dealer", AsyncMock(return_value=None))

    with pytest.raises(HTTPException) as excinfo:
        await listings_service.dealer_profile("ghost", AsyncMock())

    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_home_feed_orders_recent_views(monkeypatch):
    many = [replace(PREMIO, id=f"car-{index}") for index in range(5)]
    monkeypatch.setattr(catalog, "list_listings", AsyncMock(return_value=many))
    monkeypatch.setattr(catalog, "list_approved_dealers", AsyncMock(return_value=list(FALLBACK_DEALERS)))
    monkeypatch.setattr(catalog, "get_listings_by_ids", AsyncMock(return_value=[PREMIO, HILUX]))

    feed = await listings_service.home_feed(AsyncMock(), recent_ids=["mock-3", "mock-1"], now=NOW)

    assert [card.id for card in feed.featured] == ["car-0", "car-1", "car-2"]
    assert len(feed.dealers) == 3
    assert [card.id for card in feed.recently_viewed] == ["mock-3", "mock-1"]


def test_catalog_options_groups_feature_vocabulary() -> None:
    options = listings_service.catalog_options()

    assert [group.category for group in options.features] == ["Safety", "Comfort", "Interior", "Exterior"]
    assert "Sedan" in options.body_types
    assert [option.value for option in options.sort_options] == ["asc", "desc"]
