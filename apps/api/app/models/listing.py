"""Vehicle listing model."""
from __future__ import annotations

from datetime import datetime
import enum

from sqlalchemy import Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ListingStatus(str, enum.Enum):
    ACTIVE = "active"
    SOLD = "sold"
    RESERVED = "reserved"
    ARCHIVED = "archived"
    DRAFT = "draft"


class Transmission(str, enum.Enum):
    AUTOMATIC = "Automatic"
    MANUAL = "Manual"
    CVT = "CVT"


class FuelType(str, enum.Enum):
    PETROL = "Petrol"
    DIESEL = "Diesel"
    HYBRID = "Hybrid"
    ELECTRIC = "Electric"


class Steering(str, enum.Enum):
    LHD = "LHD"
    RHD = "RHD"


class Condition(str, enum.Enum):
    NEW = "New"
    USED = "Used"
    RECONDITIONED = "Reconditioned"


class Car(Base):
    """A vehicle offered for sale by a dealership."""

    __tablename__ = "cars"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    dealer_id: Mapped[str] = mapped_column(String, index=True, nullable=False)
    make: Mapped[str] = mapped_column(String, nullable=False)
    model: Mapped[str] = mapped_column(String, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    transmission: Mapped[str] = mapped_column(String, nullable=False)
    fuel_type: Mapped[str] = mapped_column(String, nullable=False)
    steering: Mapped[str] = mapped_column(String, nullable=False)
    region: Mapped[str] = mapped_column(String, nullable=False)
    condition: Mapped[str] = mapped_column(String, nullable=False)
    body_type: Mapped[str] = mapped_column(String, nullable=False)
    images: Mapped[list[str]] = mapped_column(ARRAY(String), default=list, nullable=False)
    status: Mapped[ListingStatus] = mapped_column(
        Enum(ListingStatus, name="listing_status", values_callable=lambda e: [m.value for m in e]),
        default=ListingStatus.ACTIVE,
        nullable=False,
    )
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sold_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    title: Mapped[str | None] = mapped_column(String)
    color: Mapped[str | None] = mapped_column(String)
    vin: Mapped[str | None] = mapped_column(String)
    engine_size: Mapped[str | None] = mapped_column(String)
    features: Mapped[list[str]] = mapped_column(ARRAY(String), default=list, nullable=False)
    hire_purchase: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
