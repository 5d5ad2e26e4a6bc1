"""Tests for listing status transitions and public visibility."""
from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from app.core.config import settings
from app.core.errors import ErrorCode, InvalidTransitionError
from app.data.listings import FALLBACK_LISTINGS
from app.models.listing import ListingStatus
from app.services.lifecycle import (
    ListingAction,
    apply_action,
    filter_visible,
    initial_status,
    is_visible,
    next_status,
    with_cover_image,
)

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def _listing(**overrides):
    return replace(FALLBACK_LISTINGS[0], **overrides)


def test_new_listing_status_depends_on_action() -> None:
    assert initial_status(ListingAction.SUBMIT) is ListingStatus.ACTIVE
    assert initial_status(ListingAction.SAVE_DRAFT) is ListingStatus.DRAFT


@pytest.mark.parametrize(
    ("current", "action", "expected"),
    [
        (ListingStatus.ACTIVE, ListingAction.MARK_SOLD, ListingStatus.SOLD),
        (ListingStatus.RESERVED, ListingAction.MARK_SOLD, ListingStatus.SOLD),
        (ListingStatus.SOLD, ListingAction.RESTORE, ListingStatus.ACTIVE),
        (ListingStatus.ARCHIVED, ListingAction.RESTORE, ListingStatus.ACTIVE),
        (ListingStatus.SOLD, ListingAction.ARCHIVE, ListingStatus.ARCHIVED),
        (ListingStatus.DRAFT, ListingAction.ARCHIVE, ListingStatus.ARCHIVED),
        (ListingStatus.ACTIVE, ListingAction.RESERVE, ListingStatus.RESERVED),
        (ListingStatus.DRAFT, ListingAction.SUBMIT, ListingStatus.ACTIVE),
        (ListingStatus.ACTIVE, ListingAction.SAVE_DRAFT, ListingStatus.DRAFT),
    ],
)
def test_supported_transitions(current, action, expected) -> None:
    assert next_status(current, action) is expected


def test_submit_preserves_published_status() -> None:
    assert next_status(ListingStatus.SOLD, ListingAction.SUBMIT) is ListingStatus.SOLD
    assert next_status(ListingStatus.ARCHIVED, ListingAction.SUBMIT) is ListingStatus.ARCHIVED


def test_plain_strings_are_accepted() -> None:
    assert next_status("active", "mark_sold") is ListingStatus.SOLD


@pytest.mark.parametrize(
    ("current", "action"),
    [
        (ListingStatus.DRAFT, ListingAction.MARK_SOLD),
        (ListingStatus.ACTIVE, ListingAction.RESTORE),
        (ListingStatus.SOLD, ListingAction.RESERVE),
        (ListingStatus.ARCHIVED, ListingAction.ARCHIVE),
        (None, ListingAction.MARK_SOLD),
    ],
)
def test_unsupported_transitions_raise(current, action) -> None:
    with pytest.raises(InvalidTransitionError) as excinfo:
        next_status(current, action)

    assert excinfo.value.code is ErrorCode.INVALID_TRANSITION


def test_mark_sold_stamps_time_and_restore_clears_it() -> None:
    sold = apply_action(_listing(), ListingAction.MARK_SOLD, NOW)
    assert sold.status is ListingStatus.SOLD
    assert sold.sold_at == NOW

    restored = apply_action(sold, ListingAction.RESTORE, NOW + timedelta(hours=1))
    assert restored.status is ListingStatus.ACTIVE
    assert restored.sold_at is None


def test_sold_listing_republished_through_draft_loses_sale_time() -> None:
    sold = apply_action(_listing(), ListingAction.MARK_SOLD, NOW)

    draft = apply_action(sold, ListingAction.SAVE_DRAFT, NOW + timedelta(hours=1))
    republished = apply_action(draft, ListingAction.SUBMIT, NOW + timedelta(hours=2))

    assert draft.sold_at is None
    assert republished.status is ListingStatus.ACTIVE
    assert republished.sold_at is None


def test_archiving_sold_listing_keeps_sale_time() -> None:
    sold = apply_action(_listing(), ListingAction.MARK_SOLD, NOW)

    archived = apply_action(sold, ListingAction.ARCHIVE, NOW + timedelta(hours=1))

    assert archived.status is ListingStatus.ARCHIVED
    assert archived.sold_at == NOW


def test_apply_action_returns_copy() -> None:
    original = _listing()

    apply_action(original, ListingAction.ARCHIVE, NOW)

    assert original.status is ListingStatus.ACTIVE


def test_submit_without_images_gets_placeholder() -> None:
    draft = _listing(status=ListingStatus.DRAFT, images=())

    published = apply_action(draft, ListingAction.SUBMIT, NOW)

    assert published.status is ListingStatus.ACTIVE
    assert published.images == (settings.placeholder_image_url,)


def test_save_draft_keeps_empty_gallery() -> None:
    draft = apply_action(_listing(images=()), ListingAction.SAVE_DRAFT, NOW)

    assert draft.images == ()


def test_with_cover_image_keeps_existing_images() -> None:
    assert with_cover_image(["a.jpg", "b.jpg"]) == ("a.jpg", "b.jpg")


def test_active_listing_is_visible() -> None:
    assert is_visible(_listing(), NOW)


def test_sold_listing_visible_inside_window_only() -> None:
    window = timedelta(hours=settings.sold_visibility_hours)
    recent = _listing(status=ListingStatus.SOLD, sold_at=NOW - window + timedelta(minutes=1))
    expired = _listing(status=ListingStatus.SOLD, sold_at=NOW - window)

    assert is_visible(recent, NOW)
    assert not is_visible(expired, NOW)


def test_sold_listing_without_timestamp_is_hidden() -> None:
    assert not is_visible(_listing(status=ListingStatus.SOLD, sold_at=None), NOW)


@pytest.mark.parametrize("status", [ListingStatus.DRAFT, ListingStatus.RESERVED, ListingStatus.ARCHIVED])
def test_non_public_statuses_are_hidden(status) -> None:
    assert not is_visible(_listing(status=status), NOW)


def test_filter_visible_preserves_order() -> None:
    listings = [
        _listing(id="a"),
        _listing(id="b", status=ListingStatus.DRAFT),
        _listing(id="c", status=ListingStatus.SOLD, sold_at=NOW - timedelta(hours=1)),
    ]

    assert [item.id for item in filter_visible(listings, NOW)] == ["a", "c"]
