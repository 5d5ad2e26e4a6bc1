"""Data access facade over the listing, dealer and profile repositories.

Reads are bounded by ``settings.store_read_timeout_seconds`` and fall back to
the bundled demo catalog when the database is slow, unreachable or empty, so
public pages stay usable. Writes have no safe fallback: they commit or raise
``StoreWriteError``.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Awaitable, Callable, Iterable, Mapping, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import StoreWriteError
from ..data.accounts import FALLBACK_DEALERS, Dealer, Profile
from ..data.listings import FALLBACK_LISTINGS, Listing
from ..models.dealer import DealerStatus
from ..models.listing import ListingStatus
from ..models.user import AccountStatus, UserRole
from ..repositories import dealers as dealers_repo
from ..repositories import listings as listings_repo
from ..repositories import profiles as profiles_repo

logger = logging.getLogger(__name__)

T = TypeVar("T")

READ_ERRORS = (SQLAlchemyError, OSError)
WRITE_ERRORS = READ_ERRORS


async def _read(action: str, call: Awaitable[T], fallback: Callable[[], T]) -> T:
    """Await a store read with a bounded wait, degrading to ``fallback``."""

    timeout = settings.store_read_timeout_seconds
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("%s timed out after %.1fs; serving fallback data", action, timeout)
    except READ_ERRORS as exc:
        logger.warning("%s failed (%s); serving fallback data", action, exc)
    return fallback()


async def _write(session: AsyncSession, action: str, call: Awaitable[T]) -> T:
    """Run a store mutation and commit it, surfacing failures."""

    try:
        result = await call
        await session.commit()
    except WRITE_ERRORS as exc:
        logger.exception("%s failed", action)
        await session.rollback()
        raise StoreWriteError(action) from exc
    return result


def _fallback_listings() -> list[Listing]:
    if not settings.fallback_data_enabled:
        return []
    return list(FALLBACK_LISTINGS)


def _fallback_dealers() -> list[Dealer]:
    if not settings.fallback_data_enabled:
        return []
    return list(FALLBACK_DEALERS)


# Listings


async def list_listings(session: AsyncSession) -> list[Listing]:
    """All listings newest first; the demo catalog stands in for an empty store."""

    listings = await _read("Fetch listings", listings_repo.list_all(session), _fallback_listings)
    if not listings:
        return _fallback_listings()
    return listings


async def list_listings_by_owner(session: AsyncSession, dealer_id: str) -> list[Listing]:
    def fallback() -> list[Listing]:
        return [listing for listing in _fallback_listings() if listing.dealer_id == dealer_id]

    listings = await _read(
        "Fetch listings by dealer", listings_repo.list_by_owner(session, dealer_id), fallback
    )
    if not listings:
        return fallback()
    return listings


async def get_listing(session: AsyncSession, listing_id: str) -> Listing | None:
    """Return a listing, or ``None`` when no listing has that id."""

    def fallback() -> Listing | None:
        return next((item for item in _fallback_listings() if item.id == listing_id), None)

    listing = await _read("Fetch listing", listings_repo.get_by_id(session, listing_id), fallback)
    if listing is None:
        return fallback()
    return listing


async def get_listings_by_ids(session: AsyncSession, listing_ids: Iterable[str]) -> list[Listing]:
    """Return listings for ``listing_ids`` in unspecified order."""

    wanted = set(listing_ids)
    if not wanted:
        return []

    def fallback() -> list[Listing]:
        return [listing for listing in _fallback_listings() if listing.id in wanted]

    found = await _read("Fetch listings by ids", listings_repo.get_by_ids(session, wanted), fallback)
    missing = wanted - {listing.id for listing in found}
    if missing:
        found = [*found, *(listing for listing in _fallback_listings() if listing.id in missing)]
    return found


async def create_listing(session: AsyncSession, listing: Listing) -> str:
    return await _write(session, "Create listing", listings_repo.create(session, listing))


async def update_listing(session: AsyncSession, listing_id: str, fields: Mapping[str, Any]) -> bool:
    return await _write(session, "Update listing", listings_repo.update(session, listing_id, fields))


async def set_listing_status(
    session: AsyncSession,
    listing_id: str,
    status: ListingStatus,
    sold_at: datetime | None,
) -> bool:
    return await _write(
        session,
        "Update listing status",
        listings_repo.set_status(session, listing_id, status, sold_at),
    )


async def delete_listing(session: AsyncSession, listing_id: str) -> bool:
    return await _write(session, "Delete listing", listings_repo.delete_by_id(session, listing_id))


# Dealers


async def get_dealer(session: AsyncSession, uid: str) -> Dealer | None:
    def fallback() -> Dealer | None:
        return next((dealer for dealer in _fallback_dealers() if dealer.uid == uid), None)

    dealer = await _read("Fetch dealer", dealers_repo.get_by_uid(session, uid), fallback)
    if dealer is None:
        return fallback()
    return dealer


async def list_approved_dealers(session: AsyncSession) -> list[Dealer]:
    """Approved dealerships only; the demo directory stands in for an empty store."""

    dealers = await _read(
        "Fetch approved dealers",
        dealers_repo.list_dealers(session, status=DealerStatus.APPROVED),
        _fallback_dealers,
    )
    if not dealers:
        return _fallback_dealers()
    return dealers


async def list_dealers(session: AsyncSession) -> list[Dealer]:
    """Every dealership regardless of status, for administrators."""

    return await _read("Admin fetch dealers", dealers_repo.list_dealers(session), _fallback_dealers)


async def register_dealer(session: AsyncSession, dealer: Dealer) -> None:
    await _write(session, "Register dealer", dealers_repo.upsert(session, dealer))


async def update_dealer(session: AsyncSession, uid: str, fields: Mapping[str, Any]) -> bool:
    return await _write(session, "Update dealer", dealers_repo.update(session, uid, fields))


# Profiles


async def get_profile(session: AsyncSession, uid: str) -> Profile | None:
    return await _read("Fetch profile", profiles_repo.get_by_uid(session, uid), lambda: None)


async def list_profiles(session: AsyncSession) -> list[Profile]:
    return await _read("Admin fetch users", profiles_repo.list_profiles(session), list)


async def create_profile(
    session: AsyncSession,
    *,
    uid: str,
    email: str,
    role: UserRole = UserRole.USER,
    display_name: str | None = None,
) -> Profile:
    return await _write(
        session,
        "Create profile",
        profiles_repo.create(session, uid=uid, email=email, role=role, display_name=display_name),
    )


async def update_profile(session: AsyncSession, uid: str, fields: Mapping[str, Any]) -> bool:
    return await _write(session, "Update profile", profiles_repo.update(session, uid, fields))


async def set_user_status(session: AsyncSession, uid: str, status: AccountStatus) -> bool:
    return await update_profile(session, uid, {"status": AccountStatus(status)})


async def delete_user_data(session: AsyncSession, uid: str) -> None:
    """Remove a profile and, for dealers, their dealership and every listing."""

    async def _delete() -> None:
        await profiles_repo.delete_by_uid(session, uid)
        if await dealers_repo.delete_by_uid(session, uid):
            await listings_repo.delete_by_owner(session, uid)

    await _write(session, "Delete user data", _delete())


async def get_favorites(session: AsyncSession, uid: str) -> set[str]:
    return await _read("Fetch favorites", profiles_repo.get_favorites(session, uid), set)


async def add_favorite(session: AsyncSession, uid: str, listing_id: str) -> bool:
    return await _write(session, "Add favorite", profiles_repo.add_favorite(session, uid, listing_id))


async def remove_favorite(session: AsyncSession, uid: str, listing_id: str) -> bool:
    return await _write(session, "Remove favorite", profiles_repo.remove_favorite(session, uid, listing_id))
