"""Tests for the in-memory filter and sort engine."""
from __future__ import annotations

from dataclasses import replace

from app.data.listings import FALLBACK_LISTINGS
from app.models.listing import FuelType, ListingStatus, Steering, Transmission
from app.schemas.listings import ListingFilters
from app.services.search import (
    PriceSort,
    apply_filters,
    compile_predicates,
    filter_inventory,
    inventory_summary,
    search,
    sort_by_price,
)

PREMIO, VEZEL, HILUX = FALLBACK_LISTINGS


def _ids(listings) -> list[str]:
    return [listing.id for listing in listings]


def test_no_filters_returns_everything_in_order() -> None:
    assert _ids(search(FALLBACK_LISTINGS, None)) == ["mock-1", "mock-2", "mock-3"]
    assert compile_predicates(ListingFilters()) == []


def test_blank_strings_are_ignored() -> None:
    filters = ListingFilters(query="  ", region="", body_type=None)

    assert _ids(apply_filters(FALLBACK_LISTINGS, filters)) == ["mock-1", "mock-2", "mock-3"]


def test_query_matches_make_model_or_year_case_insensitively() -> None:
    assert _ids(apply_filters(FALLBACK_LISTINGS, {"query": "toyota"})) == ["mock-1", "mock-3"]
    assert _ids(apply_filters(FALLBACK_LISTINGS, {"query": "VEZ"})) == ["mock-2"]
    assert _ids(apply_filters(FALLBACK_LISTINGS, {"query": "2022"})) == ["mock-3"]


def test_price_bounds_are_inclusive() -> None:
    filters = {"min_price": VEZEL.price, "max_price": HILUX.price}

    assert _ids(apply_filters(FALLBACK_LISTINGS, filters)) == ["mock-2", "mock-3"]


def test_inverted_price_bounds_match_nothing() -> None:
    filters = {"min_price": 1_000_000, "max_price": 500_000}

    assert apply_filters(FALLBACK_LISTINGS, filters) == []


def test_filtering_in_steps_equals_filtering_at_once() -> None:
    by_text = {"query": "toyota"}
    by_gearbox = {"transmission": "Automatic"}

    stepped = apply_filters(apply_filters(FALLBACK_LISTINGS, by_text), by_gearbox)

    assert stepped == apply_filters(FALLBACK_LISTINGS, {**by_text, **by_gearbox})
    assert _ids(stepped) == ["mock-1"]


def test_unknown_enum_value_matches_nothing() -> None:
    assert apply_filters(FALLBACK_LISTINGS, {"transmission": "Foo"}) == []


def test_enum_dimensions_match_by_value() -> None:
    assert _ids(apply_filters(FALLBACK_LISTINGS, {"transmission": "Manual"})) == ["mock-3"]
    assert _ids(apply_filters(FALLBACK_LISTINGS, {"fuel_type": FuelType.HYBRID})) == ["mock-2"]
    assert _ids(apply_filters(FALLBACK_LISTINGS, {"steering": Steering.LHD})) == []


def test_dimensions_combine_with_and() -> None:
    filters = ListingFilters(
        query="toyota",
        region="Demerara-Mahaica (Region 4)",
        body_type="Sedan",
        condition="Reconditioned",
        transmission=Transmission.AUTOMATIC.value,
    )

    assert _ids(apply_filters(FALLBACK_LISTINGS, filters)) == ["mock-1"]


def test_sort_by_price_is_stable() -> None:
    twin = replace(PREMIO, id="twin")
    listings = [VEZEL, PREMIO, twin, HILUX]

    assert _ids(sort_by_price(listings, PriceSort.ASC)) == ["mock-1", "twin", "mock-2", "mock-3"]
    assert _ids(sort_by_price(listings, "desc")) == ["mock-3", "mock-2", "mock-1", "twin"]
    assert _ids(sort_by_price(listings, None)) == ["mock-2", "mock-1", "twin", "mock-3"]


def test_search_does_not_mutate_input() -> None:
    listings = [HILUX, PREMIO]

    search(listings, {"query": "toyota"}, PriceSort.ASC)

    assert _ids(listings) == ["mock-3", "mock-1"]


def _inventory():
    return [
        PREMIO,
        replace(VEZEL, status=ListingStatus.SOLD),
        replace(HILUX, status=ListingStatus.ARCHIVED),
        replace(PREMIO, id="draft-1", status=ListingStatus.DRAFT, title="Project car"),
    ]


def test_all_tab_hides_archived() -> None:
    assert _ids(filter_inventory(_inventory())) == ["mock-1", "mock-2", "draft-1"]
    assert _ids(filter_inventory(_inventory(), "archived")) == ["mock-3"]


def test_inventory_term_matches_title() -> None:
    assert _ids(filter_inventory(_inventory(), "all", "project")) == ["draft-1"]
    assert _ids(filter_inventory(_inventory(), "all", "2020 honda")) == ["mock-2"]


def test_inventory_summary_counts_tabs_and_values_active_stock() -> None:
    summary = inventory_summary(_inventory())

    assert summary.counts == {"all": 3, "active": 1, "sold": 1, "reserved": 0, "archived": 1, "draft": 1}
    assert summary.total_listings == 4
    assert summary.sold_listings == 1
    assert summary.inventory_value == PREMIO.price
