"""Service-level tests for the dealer dashboard."""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi import HTTPException

from app.core.config import settings
from app.core.errors import AuthenticationRequiredError, InvalidTransitionError, PermissionDeniedError
from app.data.accounts import FALLBACK_DEALERS, Profile
from app.data.listings import FALLBACK_LISTINGS
from app.models.dealer import DealerStatus
from app.models.listing import ListingStatus
from app.models.user import AccountStatus, UserRole
from app.schemas import dealer as schemas
from app.services import catalog
from app.services import dealer as dealer_service
from app.services.access import GUEST, viewer_from_profile
from app.services.lifecycle import ListingAction

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
PREMIO, VEZEL, HILUX = FALLBACK_LISTINGS


def _viewer(uid: str = "mock-dealer-1", role: UserRole = UserRole.DEALER, status: AccountStatus = AccountStatus.ACTIVE):
    return viewer_from_profile(uid, Profile(uid=uid, email=f"{uid}@example.com", role=role, status=status))


def _form(**overrides) -> schemas.ListingForm:
    values = {
        "make": "Nissan",
        "model": "Note",
        "year": 2019,
        "price": 2_100_000,
        "region": "Demerara-Mahaica (Region 4)",
        "features": ["Airbags", "Airbags", "Sunroof"],
    }
    values.update(overrides)
    return schemas.ListingForm(**values)


@pytest.mark.asyncio
async def test_draft_then_submit_gets_placeholder_image(monkeypatch):
    create = AsyncMock(return_value="car-1")
    monkeypatch.setattr(catalog, "create_listing", create)

    draft = await dealer_service.create_listing(
        schemas.ListingWriteRequest(listing=_form(), action="save_draft"), _viewer(), AsyncMock(), now=NOW
    )

    saved = create.await_args.args[1]
    assert draft.status == "draft"
    assert draft.images == []
    assert saved.dealer_id == "mock-dealer-1"
    assert saved.features == ("Airbags", "Sunroof")

    stored = replace(saved, id="car-1")
    update = AsyncMock(return_value=True)
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=stored))
    monkeypatch.setattr(catalog, "update_listing", update)

    published = await dealer_service.update_listing(
        "car-1", schemas.ListingWriteRequest(listing=_form(), action="submit"), _viewer(), AsyncMock(), now=NOW
    )

    assert published.status == "active"
    assert published.images == [settings.placeholder_image_url]
    fields = update.await_args.args[2]
    assert fields["status"] is ListingStatus.ACTIVE
    assert fields["images"] == (settings.placeholder_image_url,)


@pytest.mark.asyncio
async def test_create_requires_dealer_role(monkeypatch):
    monkeypatch.setattr(catalog, "create_listing", AsyncMock())
    payload = schemas.ListingWriteRequest(listing=_form())

    with pytest.raises(AuthenticationRequiredError):
        await dealer_service.create_listing(payload, GUEST, AsyncMock())
    with pytest.raises(PermissionDeniedError):
        await dealer_service.create_listing(payload, _viewer("shopper", UserRole.USER), AsyncMock())
    with pytest.raises(PermissionDeniedError):
        await dealer_service.create_listing(payload, _viewer(status=AccountStatus.SUSPENDED), AsyncMock())


@pytest.mark.asyncio
async def test_dealer_cannot_change_someone_elses_listing(monkeypatch):
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=HILUX))
    set_status = AsyncMock(return_value=True)
    monkeypatch.setattr(catalog, "set_listing_status", set_status)

    with pytest.raises(PermissionDeniedError):
        await dealer_service.change_status("mock-3", ListingAction.MARK_SOLD, _viewer(), AsyncMock(), now=NOW)

    set_status.assert_not_awaited()


@pytest.mark.asyncio
async def test_admin_can_mark_any_listing_sold(monkeypatch):
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=HILUX))
    set_status = AsyncMock(return_value=True)
    monkeypatch.setattr(catalog, "set_listing_status", set_status)

    response = await dealer_service.change_status(
        "mock-3", ListingAction.MARK_SOLD, _viewer("root", UserRole.ADMIN), AsyncMock(), now=NOW
    )

    assert response.status == "sold"
    assert response.sold_at == NOW
    set_status.assert_awaited_once()
    assert set_status.await_args.args[1:] == ("mock-3", ListingStatus.SOLD, NOW)


@pytest.mark.asyncio
async def test_invalid_transition_is_not_written(monkeypatch):
    draft = replace(PREMIO, status=ListingStatus.DRAFT)
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=draft))
    set_status = AsyncMock()
    monkeypatch.setattr(catalog, "set_listing_status", set_status)

    with pytest.raises(InvalidTransitionError):
        await dealer_service.change_status("mock-1", ListingAction.MARK_SOLD, _viewer(), AsyncMock(), now=NOW)

    set_status.assert_not_awaited()


@pytest.mark.asyncio
async def test_change_status_missing_listing_is_404(monkeypatch):
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=None))

    with pytest.raises(HTTPException) as excinfo:
        await dealer_service.change_status("nope", ListingAction.ARCHIVE, _viewer(), AsyncMock())

    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_delete_listing_checks_ownership(monkeypatch):
    monkeypatch.setattr(catalog, "get_listing", AsyncMock(return_value=PREMIO))
    delete = AsyncMock(return_value=True)
    monkeypatch.setattr(catalog, "delete_listing", delete)

    await dealer_service.delete_listing("mock-1", _viewer(), AsyncMock())

    delete.assert_awaited_once()


@pytest.mark.asyncio
async def test_inventory_tabs_and_counters(monkeypatch):
    own = [PREMIO, replace(VEZEL, status=ListingStatus.SOLD, sold_at=NOW)]
    monkeypatch.setattr(catalog, "list_listings_by_owner", AsyncMock(return_value=own))

    response = await dealer_service.list_inventory(_viewer(), AsyncMock(), tab="sold")

    assert [card.id for card in response.items] == ["mock-2"]
    assert response.counts["all"] == 2
    assert response.sold_listings == 1
    assert response.inventory_value == PREMIO.price


@pytest.mark.asyncio
async def test_register_dealer_creates_profile_and_dealership(monkeypatch):
    create_profile = AsyncMock()
    register = AsyncMock()
    monkeypatch.setattr(catalog, "create_profile", create_profile)
    monkeypatch.setattr(catalog, "register_dealer", register)
    viewer = viewer_from_profile("new-dealer", None)
    payload = schemas.DealerRegistrationRequest(
        email="sales@example.com",
        business_name="Linden Auto",
        region="Upper Demerara-Berbice (Region 10)",
        contact_phone="592-444-0000",
    )

    card = await dealer_service.register_dealer(payload, viewer, AsyncMock())

    assert card.status == DealerStatus.APPROVED.value
    assert card.whatsapp == "592-444-0000"
    assert create_profile.await_args.kwargs["role"] is UserRole.DEALER
    register.assert_awaited_once()


@pytest.mark.asyncio
async def test_register_dealer_pending_without_auto_approve(monkeypatch):
    monkeypatch.setattr(settings, "dealer_auto_approve", False)
    update_profile = AsyncMock(return_value=True)
    monkeypatch.setattr(catalog, "update_profile", update_profile)
    monkeypatch.setattr(catalog, "register_dealer", AsyncMock())
    payload = schemas.DealerRegistrationRequest(business_name="Bartica Cars", region="Cuyuni-Mazaruni (Region 7)")

    card = await dealer_service.register_dealer(payload, _viewer("shopper", UserRole.USER), AsyncMock())

    assert card.status == "pending"
    update_profile.assert_awaited_once()
    assert update_profile.await_args.args[2] == {"role": UserRole.DEALER}


@pytest.mark.asyncio
async def test_update_dealer_profile_applies_set_fields(monkeypatch):
    update = AsyncMock(return_value=True)
    monkeypatch.setattr(catalog, "update_dealer", update)
    monkeypatch.setattr(catalog, "get_dealer", AsyncMock(return_value=FALLBACK_DEALERS[0]))

    await dealer_service.update_dealer_profile(
        schemas.DealerUpdateRequest(description="Now open Sundays"), _viewer(), AsyncMock()
    )

    assert update.await_args.args[1:] == ("mock-dealer-1", {"description": "Now open Sundays"})
