"""Account profile use cases for signed-in users."""
from __future__ import annotations

import logging

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import AuthenticationRequiredError
from ..data.accounts import Profile
from ..schemas import account as schemas
from . import catalog
from .access import Viewer, require_user

logger = logging.getLogger(__name__)


async def sign_up(payload: schemas.SignUpRequest, viewer: Viewer, session: AsyncSession) -> schemas.AccountResponse:
    """Create the profile for a freshly authenticated user; repeat calls return it unchanged."""

    if viewer.user_id is None:
        raise AuthenticationRequiredError()
    if viewer.profile is not None:
        return to_account(viewer.profile)

    profile = await catalog.create_profile(
        session,
        uid=viewer.user_id,
        email=payload.email,
        display_name=payload.display_name,
    )
    logger.info("Created profile for %s", viewer.user_id)
    return to_account(profile)


async def get_account(viewer: Viewer) -> schemas.AccountResponse:
    require_user(viewer)
    if viewer.profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return to_account(viewer.profile)


async def update_account(
    payload: schemas.AccountUpdateRequest,
    viewer: Viewer,
    session: AsyncSession,
) -> schemas.AccountResponse:
    user_id = require_user(viewer)
    if not await catalog.update_profile(session, user_id, {"display_name": payload.display_name}):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    profile = await catalog.get_profile(session, user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return to_account(profile)


def to_account(profile: Profile) -> schemas.AccountResponse:
    return schemas.AccountResponse(
        uid=profile.uid,
        email=profile.email,
        role=profile.role.value,
        status=profile.status.value,
        display_name=profile.display_name,
        favorites=sorted(profile.favorites),
    )
