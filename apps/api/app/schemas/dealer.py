"""Schemas for the dealer dashboard."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from ..models.listing import Condition, FuelType, Steering, Transmission
from ..services.lifecycle import ListingAction
from .listings import ListingCard


class ListingForm(BaseModel):
    title: str | None = None
    make: str = Field(min_length=1)
    model: str = Field(min_length=1)
    year: int = Field(ge=1900, le=2100)
    price: int = Field(ge=0)
    mileage: int = Field(default=0, ge=0)
    transmission: Transmission = Transmission.AUTOMATIC
    fuel_type: FuelType = FuelType.PETROL
    steering: Steering = Steering.RHD
    region: str
    condition: Condition = Condition.USED
    body_type: str = "Sedan"
    description: str = ""
    color: str | None = None
    vin: str | None = None
    engine_size: str | None = None
    hire_purchase: bool = False
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list, description="Image URIs from the upload service")


class ListingWriteRequest(BaseModel):
    listing: ListingForm
    action: Literal["submit", "save_draft"] = "submit"


class ListingWriteResponse(BaseModel):
    id: str
    status: str
    images: list[str]


class StatusChangeRequest(BaseModel):
    action: ListingAction


class StatusChangeResponse(BaseModel):
    id: str
    status: str
    sold_at: datetime | None = None


class InventoryResponse(BaseModel):
    counts: dict[str, int]
    total_listings: int
    sold_listings: int
    inventory_value: int
    items: list[ListingCard]


class DealerRegistrationRequest(BaseModel):
    email: str = Field(default="", description="Used when the account has no profile yet")
    business_name: str = Field(min_length=1)
    region: str
    contact_phone: str = ""
    whatsapp: str = ""
    address: str = ""
    logo_url: str = ""
    banner_url: str | None = None
    description: str | None = None


class DealerUpdateRequest(BaseModel):
    business_name: str | None = None
    region: str | None = None
    contact_phone: str | None = None
    whatsapp: str | None = None
    address: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    description: str | None = None
