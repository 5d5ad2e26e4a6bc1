"""Administrator console use cases."""
from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..data.accounts import Profile
from ..models.dealer import DealerStatus
from ..models.user import AccountStatus
from ..schemas import admin as schemas
from . import catalog
from .access import Viewer, require_admin
from .listings import to_card, to_dealer_card

logger = logging.getLogger(__name__)

RECENT_COUNT = 5


async def overview(viewer: Viewer, session: AsyncSession) -> schemas.AdminOverviewResponse:
    """Headline counters for the console landing page."""

    require_admin(viewer)
    listings = await catalog.list_listings(session)
    profiles = await catalog.list_profiles(session)
    dealers = await catalog.list_dealers(session)
    return schemas.AdminOverviewResponse(
        total_listings=len(listings),
        total_users=len(profiles),
        approved_dealers=sum(1 for dealer in dealers if dealer.status == DealerStatus.APPROVED),
        pending_dealers=sum(1 for dealer in dealers if dealer.status == DealerStatus.PENDING),
        recent_listings=[to_card(item) for item in listings[:RECENT_COUNT]],
    )


async def list_listings(viewer: Viewer, session: AsyncSession) -> schemas.AdminListingsResponse:
    """Every listing in any status; moderators see past the visibility policy."""

    require_admin(viewer)
    listings = await catalog.list_listings(session)
    return schemas.AdminListingsResponse(total=len(listings), items=[to_card(item) for item in listings])


async def list_users(viewer: Viewer, session: AsyncSession) -> schemas.UserListResponse:
    require_admin(viewer)
    profiles = await catalog.list_profiles(session)
    return schemas.UserListResponse(items=[to_user_summary(profile) for profile in profiles])


async def set_user_status(
    uid: str,
    new_status: AccountStatus,
    viewer: Viewer,
    session: AsyncSession,
) -> schemas.UserSummary:
    admin_id = require_admin(viewer)
    if uid == admin_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Administrators cannot change their own status")
    if not await catalog.set_user_status(session, uid, new_status):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    logger.info("Admin %s set user %s to %s", admin_id, uid, AccountStatus(new_status).value)
    profile = await catalog.get_profile(session, uid)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return to_user_summary(profile)


async def delete_user(uid: str, viewer: Viewer, session: AsyncSession) -> None:
    """Delete an account's data, cascading to a dealer's dealership and listings."""

    admin_id = require_admin(viewer)
    if uid == admin_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Administrators cannot delete themselves")
    await catalog.delete_user_data(session, uid)
    logger.info("Admin %s deleted user %s", admin_id, uid)


async def list_dealers(viewer: Viewer, session: AsyncSession) -> schemas.DealerListResponse:
    """Dealerships awaiting review, separated from those already decided."""

    require_admin(viewer)
    dealers = await catalog.list_dealers(session)
    return schemas.DealerListResponse(
        pending=[to_dealer_card(dealer) for dealer in dealers if dealer.status == DealerStatus.PENDING],
        reviewed=[to_dealer_card(dealer) for dealer in dealers if dealer.status != DealerStatus.PENDING],
    )


async def set_dealer_status(
    uid: str,
    new_status: DealerStatus,
    viewer: Viewer,
    session: AsyncSession,
) -> None:
    admin_id = require_admin(viewer)
    if not await catalog.update_dealer(session, uid, {"status": DealerStatus(new_status)}):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Dealership not found")
    logger.info("Admin %s set dealership %s to %s", admin_id, uid, DealerStatus(new_status).value)


def to_user_summary(profile: Profile) -> schemas.UserSummary:
    return schemas.UserSummary(
        uid=profile.uid,
        email=profile.email,
        role=profile.role.value,
        display_name=profile.display_name,
        status=profile.status.value,
    )
