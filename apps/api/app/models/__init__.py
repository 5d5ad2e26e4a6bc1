"""Expose ORM models."""
from .base import Base
from .dealer import Dealership, DealerStatus
from .listing import Car, Condition, FuelType, ListingStatus, Steering, Transmission
from .user import AccountStatus, UserProfile, UserRole

__all__ = [
    "AccountStatus",
    "Base",
    "Car",
    "Condition",
    "Dealership",
    "DealerStatus",
    "FuelType",
    "ListingStatus",
    "Steering",
    "Transmission",
    "UserProfile",
    "UserRole",
]
