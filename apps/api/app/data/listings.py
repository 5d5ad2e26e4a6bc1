"""Listing value type and the offline fallback catalog."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ..models.listing import Condition, FuelType, ListingStatus, Steering, Transmission


@dataclass(frozen=True, slots=True)
class Listing:
    """A vehicle listing as seen by the service layer.

    Instances are immutable; lifecycle changes produce a new value.
    """

    id: str
    dealer_id: str
    make: str
    model: str
    year: int
    price: int
    mileage: int
    transmission: Transmission
    fuel_type: FuelType
    steering: Steering
    region: str
    condition: Condition
    body_type: str
    status: ListingStatus
    created_at: datetime
    images: tuple[str, ...] = ()
    description: str = ""
    sold_at: datetime | None = None
    title: str | None = None
    color: str | None = None
    vin: str | None = None
    engine_size: str | None = None
    features: tuple[str, ...] = ()
    hire_purchase: bool = False


FALLBACK_LISTINGS: tuple[Listing, ...] = (
    Listing(
        id="mock-1",
        dealer_id="mock-dealer-1",
        make="Toyota",
        model="Premio",
        year=2018,
        price=3_200_000,
        mileage=45_000,
        transmission=Transmission.AUTOMATIC,
        fuel_type=FuelType.PETROL,
        steering=Steering.RHD,
        region="Demerara-Mahaica (Region 4)",
        condition=Condition.RECONDITIONED,
        body_type="Sedan",
        images=("https://picsum.photos/800/600?random=1", "https://picsum.photos/800/600?random=2"),
        status=ListingStatus.ACTIVE,
        description="Immaculate condition Toyota Premio. Fresh import.",
        created_at=datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc),
        features=("Airbags", "Air Conditioning", "Keyless Entry", "Alloy Wheels"),
    ),
    Listing(
        id="mock-2",
        dealer_id="mock-dealer-1",
        make="Honda",
        model="Vezel",
        year=2020,
        price=5_500_000,
        mileage=22_000,
        transmission=Transmission.AUTOMATIC,
        fuel_type=FuelType.HYBRID,
        steering=Steering.RHD,
        region="Demerara-Mahaica (Region 4)",
        condition=Condition.USED,
        body_type="SUV",
        images=("https://picsum.photos/800/600?random=3", "https://picsum.photos/800/600?random=4"),
        status=ListingStatus.ACTIVE,
        description="Sporty Honda Vezel, low mileage, dealer maintained.",
        created_at=datetime(2025, 1, 14, 12, 0, tzinfo=timezone.utc),
        features=("Airbags", "Backup Camera", "Climate Control", "Apple CarPlay", "LED Headlights"),
    ),
    Listing(
        id="mock-3",
        dealer_id="mock-dealer-2",
        make="Toyota",
        model="Hilux",
        year=2022,
        price=12_500_000,
        mileage=15_000,
        transmission=Transmission.MANUAL,
        fuel_type=FuelType.DIESEL,
        steering=Steering.RHD,
        region="East Berbice-Corentyne (Region 6)",
        condition=Condition.USED,
        body_type="Pickup",
        images=("https://picsum.photos/800/600?random=5",),
        status=ListingStatus.ACTIVE,
        description="Powerful workhorse. Ready for the interior.",
        created_at=datetime(2025, 1, 13, 12, 0, tzinfo=timezone.utc),
        features=("Traction Control", "Air Conditioning", "Roof Rack", "Tow Package"),
    ),
)
