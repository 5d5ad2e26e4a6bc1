"""Dealer and profile value types plus the offline dealer directory."""
from __future__ import annotations

from dataclasses import dataclass

from ..models.dealer import DealerStatus
from ..models.user import AccountStatus, UserRole


@dataclass(frozen=True, slots=True)
class Dealer:
    """Dealership details shown on profile pages."""

    uid: str
    business_name: str
    region: str
    contact_phone: str
    whatsapp: str
    address: str
    status: DealerStatus
    logo_url: str = ""
    banner_url: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class Profile:
    """Account profile including saved favorites."""

    uid: str
    email: str
    role: UserRole
    favorites: tuple[str, ...] = ()
    display_name: str | None = None
    status: AccountStatus = AccountStatus.ACTIVE


FALLBACK_DEALERS: tuple[Dealer, ...] = (
    Dealer(
        uid="mock-dealer-1",
        business_name="AutoGy Motors",
        region="Demerara-Mahaica (Region 4)",
        contact_phone="592-600-1234",
        whatsapp="592-600-1234",
        address="123 Camp Street, Georgetown",
        status=DealerStatus.APPROVED,
        description="Guyana's #1 trusted dealer for reconditioned vehicles.",
    ),
    Dealer(
        uid="mock-dealer-2",
        business_name="Berbice Wheels",
        region="East Berbice-Corentyne (Region 6)",
        contact_phone="592-611-5678",
        whatsapp="592-611-5678",
        address="45 Main Road, New Amsterdam",
        status=DealerStatus.APPROVED,
        description="Best deals in Berbice. We finance!",
    ),
    Dealer(
        uid="mock-dealer-3",
        business_name="Essequibo Imports",
        region="Pomeroon-Supenaam (Region 2)",
        contact_phone="592-622-9012",
        whatsapp="592-622-9012",
        address="Anna Regina Public Road",
        status=DealerStatus.APPROVED,
        description="Direct imports from Japan. Pre-order specialists.",
    ),
)
