"""Schemas for admin API."""
from __future__ import annotations

from pydantic import BaseModel, Field

from ..models.dealer import DealerStatus
from ..models.user import AccountStatus
from .listings import DealerCard, ListingCard


class AdminOverviewResponse(BaseModel):
    total_listings: int
    total_users: int
    approved_dealers: int
    pending_dealers: int
    recent_listings: list[ListingCard] = Field(default_factory=list)


class AdminListingsResponse(BaseModel):
    total: int
    items: list[ListingCard]


class UserSummary(BaseModel):
    uid: str
    email: str
    role: str
    display_name: str | None = None
    status: str = AccountStatus.ACTIVE.value


class UserListResponse(BaseModel):
    items: list[UserSummary]


class UserStatusRequest(BaseModel):
    status: AccountStatus


class DealerStatusRequest(BaseModel):
    status: DealerStatus


class DealerListResponse(BaseModel):
    pending: list[DealerCard]
    reviewed: list[DealerCard]
