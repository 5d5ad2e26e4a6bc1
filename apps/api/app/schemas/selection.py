"""Schemas for compare, favorites and recently viewed endpoints."""
from __future__ import annotations

from pydantic import BaseModel, Field

from ..services.selection import AddResult
from .listings import ListingCard


class CompareStateResponse(BaseModel):
    ids: list[str]
    capacity: int
    is_full: bool = False
    result: AddResult | None = None


class SpecRowOut(BaseModel):
    label: str
    values: list[str]


class FeatureRowOut(BaseModel):
    feature: str
    present: list[bool]


class FeatureSectionOut(BaseModel):
    category: str
    rows: list[FeatureRowOut]


class ComparisonResponse(BaseModel):
    listings: list[ListingCard] = Field(default_factory=list)
    spec_rows: list[SpecRowOut] = Field(default_factory=list)
    feature_sections: list[FeatureSectionOut] = Field(default_factory=list)


class FavoriteRequest(BaseModel):
    favorite: bool


class FavoritesResponse(BaseModel):
    ids: list[str]
    listings: list[ListingCard] = Field(default_factory=list)


class RecentlyViewedResponse(BaseModel):
    ids: list[str]
    listings: list[ListingCard] = Field(default_factory=list)
