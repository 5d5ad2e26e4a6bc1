"""In-memory filter and sort pipeline for listing collections.

Each filter dimension compiles to an independent predicate and the active
predicates are ANDed in a fixed order. Inputs are never mutated; every
function returns a new list.
"""
from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Protocol, Sequence

from ..data.listings import Listing
from ..models.listing import ListingStatus

Predicate = Callable[[Listing], bool]

# filter name -> listing attribute, for dimensions matched by exact equality
_EXACT_BEFORE_PRICE: tuple[tuple[str, str], ...] = (
    ("region", "region"),
    ("body_type", "body_type"),
    ("condition", "condition"),
)
_EXACT_AFTER_PRICE: tuple[tuple[str, str], ...] = (
    ("steering", "steering"),
    ("fuel_type", "fuel_type"),
    ("transmission", "transmission"),
)

INVENTORY_TABS: tuple[str, ...] = ("all", "active", "sold", "reserved", "archived", "draft")


class PriceSort(str, enum.Enum):
    ASC = "asc"
    DESC = "desc"


class ListingFiltersProtocol(Protocol):
    """Filter fields read by the engine, so it does not depend on request schemas.

    Plain mappings keyed by the same names are accepted as well.
    """

    query: str | None
    region: str | None
    body_type: str | None
    condition: str | None
    min_price: int | None
    max_price: int | None
    steering: str | None
    fuel_type: str | None
    transmission: str | None


@dataclass(slots=True)
class InventorySummary:
    """Dealer dashboard counters."""

    counts: dict[str, int]
    total_listings: int
    sold_listings: int
    inventory_value: int


def compile_predicates(filters: ListingFiltersProtocol | Mapping[str, Any] | None) -> list[Predicate]:
    """Turn the set dimensions of ``filters`` into predicates, in dimension order."""

    if filters is None:
        return []

    predicates: list[Predicate] = []

    query = _dimension(filters, "query")
    if query is not None:
        predicates.append(_matches_text(str(query)))

    for name, attribute in _EXACT_BEFORE_PRICE:
        value = _dimension(filters, name)
        if value is not None:
            predicates.append(_equals(attribute, value))

    min_price = _dimension(filters, "min_price")
    if min_price is not None:
        predicates.append(lambda listing, bound=min_price: listing.price >= bound)

    max_price = _dimension(filters, "max_price")
    if max_price is not None:
        predicates.append(lambda listing, bound=max_price: listing.price <= bound)

    for name, attribute in _EXACT_AFTER_PRICE:
        value = _dimension(filters, name)
        if value is not None:
            predicates.append(_equals(attribute, value))

    return predicates


def apply_filters(
    listings: Iterable[Listing],
    filters: ListingFiltersProtocol | Mapping[str, Any] | None,
) -> list[Listing]:
    """Return the listings that satisfy every set filter dimension, in input order."""

    predicates = compile_predicates(filters)
    return [listing for listing in listings if all(predicate(listing) for predicate in predicates)]


def sort_by_price(listings: Iterable[Listing], direction: PriceSort | str | None) -> list[Listing]:
    """Stable sort by price; ``None`` keeps the input order."""

    if not direction:
        return list(listings)
    direction = PriceSort(direction)
    return sorted(listings, key=lambda listing: listing.price, reverse=direction is PriceSort.DESC)


def search(
    listings: Iterable[Listing],
    filters: ListingFiltersProtocol | Mapping[str, Any] | None,
    sort: PriceSort | str | None = None,
) -> list[Listing]:
    """Filter then optionally sort a listing collection."""

    return sort_by_price(apply_filters(listings, filters), sort)


def filter_inventory(listings: Iterable[Listing], tab: str = "all", term: str | None = None) -> list[Listing]:
    """Select a dealer's own listings for a dashboard tab.

    The ``all`` tab hides archived listings; every other tab is an exact status
    match. ``term`` matches the listing title or "year make model".
    """

    needle = (term or "").strip().lower()
    selected: list[Listing] = []
    for listing in listings:
        if tab == "all":
            if listing.status == ListingStatus.ARCHIVED:
                continue
        elif listing.status != tab:
            continue
        if needle and not _matches_inventory_term(listing, needle):
            continue
        selected.append(listing)
    return selected


def inventory_summary(listings: Sequence[Listing]) -> InventorySummary:
    """Count listings per dashboard tab and value the live inventory."""

    counts = {tab: 0 for tab in INVENTORY_TABS}
    inventory_value = 0
    for listing in listings:
        status = ListingStatus(listing.status)
        counts[status.value] += 1
        if status is not ListingStatus.ARCHIVED:
            counts["all"] += 1
        if status is ListingStatus.ACTIVE:
            inventory_value += listing.price

    return InventorySummary(
        counts=counts,
        total_listings=len(listings),
        sold_listings=counts[ListingStatus.SOLD.value],
        inventory_value=inventory_value,
    )


def _dimension(filters: ListingFiltersProtocol | Mapping[str, Any], name: str) -> Any:
    """Return a dimension value, treating ``None`` and blank strings as unset."""

    if isinstance(filters, Mapping):
        value = filters.get(name)
    else:
        value = getattr(filters, name, None)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _matches_text(query: str) -> Predicate:
    needle = query.strip().lower()

    def predicate(listing: Listing) -> bool:
        return (
            needle in listing.make.lower()
            or needle in listing.model.lower()
            or needle in str(listing.year)
        )

    return predicate


def _equals(attribute: str, value: Any) -> Predicate:
    expected = value.value if isinstance(value, enum.Enum) else value

    def predicate(listing: Listing) -> bool:
        actual = getattr(listing, attribute)
        if isinstance(actual, enum.Enum):
            actual = actual.value
        return actual == expected

    return predicate


def _matches_inventory_term(listing: Listing, needle: str) -> bool:
    if listing.title and needle in listing.title.lower():
        return True
    return needle in f"{listing.year} {listing.make} {listing.model}".lower()
