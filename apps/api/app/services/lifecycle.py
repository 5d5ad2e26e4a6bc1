"""Listing lifecycle policy: status transitions and public visibility.

Every status change made by a dealer or administrator goes through
``next_status``/``apply_action`` so that no caller can invent its own rules.
Deletion is not a transition; it is handled by the catalog facade.
"""
from __future__ import annotations

import enum
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable

from ..core.config import settings
from ..core.errors import InvalidTransitionError
from ..data.listings import Listing
from ..models.listing import ListingStatus


class ListingAction(str, enum.Enum):
    SAVE_DRAFT = "save_draft"
    SUBMIT = "submit"
    MARK_SOLD = "mark_sold"
    RESTORE = "restore"
    ARCHIVE = "archive"
    RESERVE = "reserve"


VISIBILITY_WINDOW = timedelta(hours=settings.sold_visibility_hours)

# action -> statuses it may start from -> resulting status
_TRANSITIONS: dict[ListingAction, dict[ListingStatus, ListingStatus]] = {
    ListingAction.MARK_SOLD: {
        ListingStatus.ACTIVE: ListingStatus.SOLD,
        ListingStatus.RESERVED: ListingStatus.SOLD,
    },
    ListingAction.RESTORE: {
        ListingStatus.SOLD: ListingStatus.ACTIVE,
        ListingStatus.ARCHIVED: ListingStatus.ACTIVE,
        ListingStatus.RESERVED: ListingStatus.ACTIVE,
    },
    ListingAction.ARCHIVE: {
        ListingStatus.ACTIVE: ListingStatus.ARCHIVED,
        ListingStatus.SOLD: ListingStatus.ARCHIVED,
        ListingStatus.RESERVED: ListingStatus.ARCHIVED,
        ListingStatus.DRAFT: ListingStatus.ARCHIVED,
    },
    ListingAction.RESERVE: {
        ListingStatus.ACTIVE: ListingStatus.RESERVED,
    },
}


# statuses that retain the sale timestamp
_KEEPS_SOLD_AT = frozenset({ListingStatus.SOLD, ListingStatus.ARCHIVED})


def next_status(current: ListingStatus | None, action: ListingAction) -> ListingStatus:
    """Return the status a listing moves to when ``action`` is applied.

    ``current`` is ``None`` while the listing is being created. Raises
    ``InvalidTransitionError`` for pairs the lifecycle does not allow.
    """

    action = ListingAction(action)
    if current is not None:
        current = ListingStatus(current)

    if action is ListingAction.SAVE_DRAFT:
        return ListingStatus.DRAFT

    if action is ListingAction.SUBMIT:
        if current is None or current is ListingStatus.DRAFT:
            return ListingStatus.ACTIVE
        # Edits never move a published listing out of its state.
        return current

    if current is None:
        raise InvalidTransitionError(None, action.value)

    target = _TRANSITIONS[action].get(current)
    if target is None:
        raise InvalidTransitionError(current.value, action.value)
    return target


def apply_action(listing: Listing, action: ListingAction, now: datetime) -> Listing:
    """Return a copy of ``listing`` with ``action`` applied at time ``now``."""

    action = ListingAction(action)
    status = next_status(listing.status, action)
    sold_at = listing.sold_at
    if action is ListingAction.MARK_SOLD:
        sold_at = now
    elif status not in _KEEPS_SOLD_AT:
        sold_at = None

    images = listing.images
    if action is ListingAction.SUBMIT:
        images = with_cover_image(images)

    return replace(listing, status=status, sold_at=sold_at, images=images)


def initial_status(action: ListingAction) -> ListingStatus:
    """Status for a listing that is being created with ``action``."""

    return next_status(None, action)


def with_cover_image(images: Iterable[str]) -> tuple[str, ...]:
    """Ensure a submitted listing never renders an empty gallery."""

    images = tuple(images)
    if images:
        return images
    return (settings.placeholder_image_url,)


def is_visible(listing: Listing, now: datetime) -> bool:
    """Return whether a listing may appear on public pages at ``now``."""

    if listing.status == ListingStatus.ACTIVE:
        return True
    if listing.status == ListingStatus.SOLD:
        if listing.sold_at is None:
            # Legacy sold records without a timestamp stay hidden.
            return False
        return now - listing.sold_at < VISIBILITY_WINDOW
    return False


def filter_visible(listings: Iterable[Listing], now: datetime) -> list[Listing]:
    """Keep publicly visible listings, preserving their order."""

    return [listing for listing in listings if is_visible(listing, now)]
