"""Saved listings for signed-in shoppers."""
from __future__ import annotations

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas import selection as schemas
from . import catalog
from .access import Viewer, require_user
from .listings import to_card
from .selection import FavoritesState


async def list_favorites(viewer: Viewer, session: AsyncSession) -> schemas.FavoritesResponse:
    """Return the viewer's favorite ids with the listings that still resolve."""

    user_id = require_user(viewer)
    ids = sorted(await catalog.get_favorites(session, user_id))
    listings = await catalog.get_listings_by_ids(session, ids)
    return schemas.FavoritesResponse(ids=ids, listings=[to_card(item) for item in sorted(listings, key=lambda item: item.id)])


async def set_favorite(
    listing_id: str,
    desired: bool,
    viewer: Viewer,
    session: AsyncSession,
) -> schemas.FavoritesResponse:
    """Put ``listing_id`` in or out of the viewer's favorites.

    The request names the desired state, so repeating it is harmless; the
    local state is only kept when the store accepts the write.
    """

    user_id = require_user(viewer)
    state = FavoritesState(await catalog.get_favorites(session, user_id))

    async def commit(target: str, favorite: bool) -> None:
        if favorite:
            saved = await catalog.add_favorite(session, user_id, target)
        else:
            saved = await catalog.remove_favorite(session, user_id, target)
        if not saved:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    await state.set_favorite(listing_id, desired, commit)
    ids = sorted(state.ids)
    listings = await catalog.get_listings_by_ids(session, ids)
    return schemas.FavoritesResponse(ids=ids, listings=[to_card(item) for item in sorted(listings, key=lambda item: item.id)])
