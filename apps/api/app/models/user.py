"""User profile model."""
from __future__ import annotations

import enum

from sqlalchemy import Enum, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class UserRole(str, enum.Enum):
    USER = "user"
    DEALER = "dealer"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class AccountStatus(str, enum.Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


class UserProfile(Base):
    """Marketplace account with its saved favorites."""

    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String, primary_key=True)
    email: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        default=UserRole.USER,
        nullable=False,
    )
    favorites: Mapped[list[str]] = mapped_column(ARRAY(String), default=list, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String)
    status: Mapped[AccountStatus] = mapped_column(
        Enum(AccountStatus, name="account_status", values_callable=lambda e: [m.value for m in e]),
        default=AccountStatus.ACTIVE,
        nullable=False,
    )
