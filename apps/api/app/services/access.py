"""Viewer identity and permission checks.

Authentication itself happens at the identity provider; the gateway forwards
the verified user id in ``X-User-Id``. The resulting ``Viewer`` is passed
explicitly into every service that needs it.
"""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import AuthenticationRequiredError, PermissionDeniedError
from ..data.accounts import Profile
from ..data.listings import Listing
from ..db.session import get_session
from ..models.user import AccountStatus, UserRole
from . import catalog

ADMIN_ROLES = frozenset({UserRole.ADMIN, UserRole.SUPERADMIN})


@dataclass(frozen=True, slots=True)
class Viewer:
    """The caller of a request; ``user_id`` is ``None`` for guests."""

    user_id: str | None = None
    role: UserRole = UserRole.USER
    profile: Profile | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def is_dealer(self) -> bool:
        return self.role is UserRole.DEALER

    @property
    def is_suspended(self) -> bool:
        return self.profile is not None and self.profile.status is AccountStatus.SUSPENDED


GUEST = Viewer()


def viewer_from_profile(user_id: str, profile: Profile | None) -> Viewer:
    role = profile.role if profile is not None else UserRole.USER
    return Viewer(user_id=user_id, role=role, profile=profile)


async def get_viewer(
    x_user_id: str | None = Header(default=None),
    session: AsyncSession = Depends(get_session),
) -> Viewer:
    """FastAPI dependency resolving the calling viewer."""

    if not x_user_id:
        return GUEST
    profile = await catalog.get_profile(session, x_user_id)
    return viewer_from_profile(x_user_id, profile)


def require_user(viewer: Viewer) -> str:
    """Return the viewer's id, insisting on a signed-in, active account."""

    if viewer.user_id is None:
        raise AuthenticationRequiredError()
    if viewer.is_suspended:
        raise PermissionDeniedError("use a suspended account")
    return viewer.user_id


def require_dealer(viewer: Viewer) -> str:
    user_id = require_user(viewer)
    if not (viewer.is_dealer or viewer.is_admin):
        raise PermissionDeniedError("manage dealer inventory")
    return user_id


def require_admin(viewer: Viewer) -> str:
    user_id = require_user(viewer)
    if not viewer.is_admin:
        raise PermissionDeniedError("use the admin console")
    return user_id


def ensure_can_manage(viewer: Viewer, listing: Listing) -> None:
    """Only the owning dealer or an administrator may change a listing."""

    user_id = require_user(viewer)
    if viewer.is_admin:
        return
    if viewer.is_dealer and listing.dealer_id == user_id:
        return
    raise PermissionDeniedError("change this listing")
