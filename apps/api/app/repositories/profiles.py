"""User profile repository helpers, including favorites."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..data.accounts import Profile
from ..models.user import AccountStatus, UserProfile, UserRole

EDITABLE_FIELDS = frozenset({"email", "role", "display_name", "status"})


async def get_by_uid(session: AsyncSession, uid: str) -> Profile | None:
    """Return a profile by identifier."""

    row = await session.get(UserProfile, uid)
    if row is None:
        return None
    return to_profile(row)


async def list_profiles(session: AsyncSession) -> list[Profile]:
    stmt: Select[tuple[UserProfile]] = select(UserProfile).order_by(UserProfile.email.asc())
    result = await session.execute(stmt)
    return [to_profile(row) for row in result.scalars().all()]


async def create(
    session: AsyncSession,
    *,
    uid: str,
    email: str,
    role: UserRole = UserRole.USER,
    display_name: str | None = None,
) -> Profile:
    """Insert a new, active profile with no favorites."""

    row = UserProfile(
        uid=uid,
        email=email,
        role=UserRole(role),
        favorites=[],
        display_name=display_name,
        status=AccountStatus.ACTIVE,
    )
    session.add(row)
    await session.flush()
    return to_profile(row)


async def update(session: AsyncSession, uid: str, fields: Mapping[str, Any]) -> bool:
    """Apply a partial update; returns ``False`` when the profile does not exist."""

    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    row = await session.get(UserProfile, uid)
    if row is None:
        return False
    for name, value in fields.items():
        if name == "role":
            value = UserRole(value)
        elif name == "status":
            value = AccountStatus(value)
        setattr(row, name, value)
    session.add(row)
    await session.flush()
    return True


async def delete_by_uid(session: AsyncSession, uid: str) -> bool:
    row = await session.get(UserProfile, uid)
    if row is None:
        return False
    await session.delete(row)
    await session.flush()
    return True


async def get_favorites(session: AsyncSession, uid: str) -> set[str]:
    """Return the saved listing ids for ``uid``; unknown users have none."""

    row = await session.get(UserProfile, uid)
    if row is None:
        return set()
    return set(row.favorites or [])


async def add_favorite(session: AsyncSession, uid: str, listing_id: str) -> bool:
    """Add ``listing_id`` to the favorites set; adding twice is a no-op."""

    row = await session.get(UserProfile, uid)
    if row is None:
        return False
    favorites = list(row.favorites or [])
    if listing_id not in favorites:
        # Reassign so the ARRAY column is marked dirty.
        row.favorites = [*favorites, listing_id]
        session.add(row)
        await session.flush()
    return True


async def remove_favorite(session: AsyncSession, uid: str, listing_id: str) -> bool:
    """Remove ``listing_id`` from the favorites set; removing an absent id is a no-op."""

    row = await session.get(UserProfile, uid)
    if row is None:
        return False
    favorites = list(row.favorites or [])
    if listing_id in favorites:
        row.favorites = [item for item in favorites if item != listing_id]
        session.add(row)
        await session.flush()
    return True


def to_profile(row: UserProfile) -> Profile:
    return Profile(
        uid=row.uid,
        email=row.email,
        role=UserRole(row.role),
        favorites=tuple(row.favorites or ()),
        display_name=row.display_name,
        status=AccountStatus(row.status or AccountStatus.ACTIVE),
    )
