"""Schemas for public listing, dealer profile and home endpoints."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..services.search import PriceSort


class ListingFilters(BaseModel):
    query: str | None = Field(default=None, description="Matches make, model or year")
    region: str | None = None
    body_type: str | None = None
    condition: str | None = None
    min_price: int | None = Field(default=None, ge=0)
    max_price: int | None = Field(default=None, ge=0)
    steering: str | None = None
    fuel_type: str | None = None
    transmission: str | None = None


class ListingCard(BaseModel):
    id: str
    dealer_id: str
    title: str
    make: str
    model: str
    year: int
    price: int
    mileage: int
    transmission: str
    fuel_type: str
    steering: str
    region: str
    condition: str
    body_type: str
    status: str
    cover_image: str | None = None
    created_at: datetime
    sold_at: datetime | None = None


class FeatureGroup(BaseModel):
    category: str
    features: list[str]


class DealerCard(BaseModel):
    uid: str
    business_name: str
    region: str
    contact_phone: str
    whatsapp: str
    address: str
    status: str
    logo_url: str = ""
    banner_url: str | None = None
    description: str | None = None


class ListingDetail(ListingCard):
    images: list[str] = Field(default_factory=list)
    description: str = ""
    color: str | None = None
    vin: str | None = None
    engine_size: str | None = None
    hire_purchase: bool = False
    feature_groups: list[FeatureGroup] = Field(default_factory=list)
    dealer: DealerCard | None = None


class SearchListingsResponse(BaseModel):
    total: int
    results: list[ListingCard]


class DealerProfileResponse(BaseModel):
    dealer: DealerCard
    total: int
    listings: list[ListingCard]


class DealerDirectoryResponse(BaseModel):
    dealers: list[DealerCard]


class HomeFeedResponse(BaseModel):
    featured: list[ListingCard]
    dealers: list[DealerCard]
    recently_viewed: list[ListingCard] = Field(default_factory=list)


class CatalogOptionsResponse(BaseModel):
    regions: list[str]
    body_types: list[str]
    makes: list[str]
    features: list[FeatureGroup]
    sort_options: list[PriceSort] = Field(default_factory=lambda: list(PriceSort))
