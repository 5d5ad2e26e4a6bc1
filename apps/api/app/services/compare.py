"""Compare queue and recently viewed trail for one browser client."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.errors import CompareFullError
from ..repositories.listings import sort_like
from ..schemas import selection as schemas
from . import catalog
from .comparison import compare_listings
from .listings import to_card
from .selection import AddResult
from .selection_store import ClientSelection


def compare_state(selection: ClientSelection, result: AddResult | None = None) -> schemas.CompareStateResponse:
    return schemas.CompareStateResponse(
        ids=list(selection.compare),
        capacity=selection.compare.capacity,
        is_full=selection.compare.is_full,
        result=result,
    )


def add_to_compare(selection: ClientSelection, listing_id: str) -> schemas.CompareStateResponse:
    """Queue a listing; a full queue is rejected and left unchanged."""

    result = selection.compare.add(listing_id)
    if result is AddResult.FULL:
        raise CompareFullError(selection.compare.capacity)
    return compare_state(selection, result)


def remove_from_compare(selection: ClientSelection, listing_id: str) -> schemas.CompareStateResponse:
    selection.compare.remove(listing_id)
    return compare_state(selection)


def clear_compare(selection: ClientSelection) -> schemas.CompareStateResponse:
    selection.compare.clear()
    return compare_state(selection)


async def build_comparison(selection: ClientSelection, session: AsyncSession) -> schemas.ComparisonResponse:
    """Spec rows and the feature matrix for the queued listings, in queue order.

    Listings that no longer resolve are left out of the table.
    """

    ids = selection.compare.ids
    if not ids:
        return schemas.ComparisonResponse()

    listings = sort_like(await catalog.get_listings_by_ids(session, ids), ids)
    comparison = compare_listings(listings)
    return schemas.ComparisonResponse(
        listings=[to_card(item) for item in listings],
        spec_rows=[schemas.SpecRowOut(label=row.label, values=row.values) for row in comparison.spec_rows],
        feature_sections=[
            schemas.FeatureSectionOut(
                category=section.category.value,
                rows=[schemas.FeatureRowOut(feature=row.feature, present=row.present) for row in section.rows],
            )
            for section in comparison.feature_sections
        ],
    )


async def recently_viewed(selection: ClientSelection, session: AsyncSession) -> schemas.RecentlyViewedResponse:
    ids = selection.recent.recent()
    if not ids:
        return schemas.RecentlyViewedResponse(ids=[])
    listings = sort_like(await catalog.get_listings_by_ids(session, ids), ids)
    return schemas.RecentlyViewedResponse(ids=ids, listings=[to_card(item) for item in listings])
