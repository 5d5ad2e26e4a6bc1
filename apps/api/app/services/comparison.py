"""Side-by-side comparison of selected listings."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

from ..data import catalog
from ..data.listings import Listing

MISSING_VALUE = "-"


class FeatureCategory(str, enum.Enum):
    SAFETY = "Safety"
    COMFORT = "Comfort"
    INTERIOR = "Interior"
    EXTERIOR = "Exterior"
    OTHER = "Other"


CATALOGUED_CATEGORIES: tuple[FeatureCategory, ...] = (
    FeatureCategory.SAFETY,
    FeatureCategory.COMFORT,
    FeatureCategory.INTERIOR,
    FeatureCategory.EXTERIOR,
)


def _build_feature_index() -> dict[str, FeatureCategory]:
    groups = {
        FeatureCategory.SAFETY: catalog.SAFETY_FEATURES,
        FeatureCategory.COMFORT: catalog.COMFORT_FEATURES,
        FeatureCategory.INTERIOR: catalog.INTERIOR_FEATURES,
        FeatureCategory.EXTERIOR: catalog.EXTERIOR_FEATURES,
    }
    index: dict[str, FeatureCategory] = {}
    for category, features in groups.items():
        for feature in features:
            if feature in index:
                raise ValueError(f"Feature {feature!r} listed under {index[feature].value} and {category.value}")
            index[feature] = category
    return index


FEATURE_CATEGORIES: dict[str, FeatureCategory] = _build_feature_index()


@dataclass(slots=True)
class SpecRow:
    label: str
    values: list[str]


@dataclass(slots=True)
class FeatureRow:
    feature: str
    present: list[bool]


@dataclass(slots=True)
class FeatureSection:
    category: FeatureCategory
    rows: list[FeatureRow]


@dataclass(slots=True)
class Comparison:
    """Summary rows and the feature matrix for a set of listings."""

    listing_ids: list[str] = field(default_factory=list)
    spec_rows: list[SpecRow] = field(default_factory=list)
    feature_sections: list[FeatureSection] = field(default_factory=list)


def _optional(value: str | None) -> str:
    return value if value else MISSING_VALUE


def _enum_text(value: object) -> str:
    if isinstance(value, enum.Enum):
        return str(value.value)
    return _optional(str(value) if value is not None else None)


def format_mileage(mileage: int) -> str:
    return f"{mileage:,} km"


def short_region(region: str) -> str:
    """Drop the parenthesised region number, e.g. "Demerara-Mahaica (Region 4)"."""

    return region.split("(")[0].strip()


SPEC_FIELDS: tuple[tuple[str, Callable[[Listing], str]], ...] = (
    ("Condition", lambda listing: _enum_text(listing.condition)),
    ("Mileage", lambda listing: format_mileage(listing.mileage)),
    ("Transmission", lambda listing: _enum_text(listing.transmission)),
    ("Engine", lambda listing: _optional(listing.engine_size)),
    ("Fuel Type", lambda listing: _enum_text(listing.fuel_type)),
    ("Steering", lambda listing: _enum_text(listing.steering)),
    ("Body Type", lambda listing: _optional(listing.body_type)),
    ("Color", lambda listing: _optional(listing.color)),
    ("Region", lambda listing: _optional(short_region(listing.region))),
)


def category_of(feature: str) -> FeatureCategory:
    return FEATURE_CATEGORIES.get(feature, FeatureCategory.OTHER)


def feature_union(listings: Iterable[Listing]) -> list[str]:
    """All features across ``listings`` in first-appearance order."""

    seen: dict[str, None] = {}
    for listing in listings:
        for feature in listing.features:
            seen.setdefault(feature, None)
    return list(seen)


def group_features(features: Iterable[str], *, include_other: bool = True) -> dict[FeatureCategory, list[str]]:
    """Bucket features by category, dropping empty buckets.

    Uncatalogued features land in ``Other`` unless ``include_other`` is off,
    in which case they are left out.
    """

    buckets: dict[FeatureCategory, list[str]] = {category: [] for category in FeatureCategory}
    for feature in features:
        category = category_of(feature)
        if category is FeatureCategory.OTHER and not include_other:
            continue
        if feature not in buckets[category]:
            buckets[category].append(feature)
    return {category: items for category, items in buckets.items() if items}


def compare_listings(listings: Sequence[Listing]) -> Comparison:
    """Build the comparison view for ``listings`` in their given order.

    No size limit is applied here; the compare selection caps its own size.
    """

    if not listings:
        return Comparison()

    spec_rows = [SpecRow(label=label, values=[render(listing) for listing in listings]) for label, render in SPEC_FIELDS]

    owned = [set(listing.features) for listing in listings]
    sections: list[FeatureSection] = []
    grouped = group_features(feature_union(listings), include_other=False)
    for category in CATALOGUED_CATEGORIES:
        features = grouped.get(category)
        if not features:
            continue
        rows = [FeatureRow(feature=feature, present=[feature in have for have in owned]) for feature in features]
        sections.append(FeatureSection(category=category, rows=rows))

    return Comparison(
        listing_ids=[listing.id for listing in listings],
        spec_rows=spec_rows,
        feature_sections=sections,
    )
