"""Dealership model."""
from __future__ import annotations

import enum

from sqlalchemy import Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class DealerStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    SUSPENDED = "suspended"


class Dealership(Base):
    """Business account that owns listings."""

    __tablename__ = "dealerships"

    uid: Mapped[str] = mapped_column(String, primary_key=True)
    business_name: Mapped[str] = mapped_column(String, nullable=False)
    region: Mapped[str] = mapped_column(String, nullable=False)
    contact_phone: Mapped[str] = mapped_column(String, default="", nullable=False)
    whatsapp: Mapped[str] = mapped_column(String, default="", nullable=False)
    logo_url: Mapped[str] = mapped_column(String, default="", nullable=False)
    banner_url: Mapped[str | None] = mapped_column(String)
    address: Mapped[str] = mapped_column(String, default="", nullable=False)
    status: Mapped[DealerStatus] = mapped_column(
        Enum(DealerStatus, name="dealer_status", values_callable=lambda e: [m.value for m in e]),
        default=DealerStatus.PENDING,
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text)
