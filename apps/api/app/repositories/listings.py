"""Data access helpers for vehicle listings."""
from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Iterable, Mapping, Sequence, TypeVar
from uuid import uuid4

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..data.listings import Listing
from ..models.listing import Car, Condition, FuelType, ListingStatus, Steering, Transmission

E = TypeVar("E", bound=enum.Enum)

EDITABLE_FIELDS = frozenset(
    {
        "make",
        "model",
        "year",
        "price",
        "mileage",
        "transmission",
        "fuel_type",
        "steering",
        "region",
        "condition",
        "body_type",
        "images",
        "status",
        "description",
        "sold_at",
        "title",
        "color",
        "vin",
        "engine_size",
        "features",
        "hire_purchase",
    }
)


async def list_all(session: AsyncSession) -> list[Listing]:
    """Return every listing, newest first."""

    stmt: Select[tuple[Car]] = select(Car).order_by(Car.created_at.desc())
    result = await session.execute(stmt)
    return [to_listing(car) for car in result.scalars().all()]


async def list_by_owner(session: AsyncSession, dealer_id: str) -> list[Listing]:
    """Return a dealer's listings, newest first."""

    stmt = select(Car).where(Car.dealer_id == dealer_id).order_by(Car.created_at.desc())
    result = await session.execute(stmt)
    return [to_listing(car) for car in result.scalars().all()]


async def get_by_id(session: AsyncSession, listing_id: str) -> Listing | None:
    """Return a listing by identifier."""

    car = await session.get(Car, listing_id)
    if car is None:
        return None
    return to_listing(car)


async def get_by_ids(session: AsyncSession, listing_ids: Iterable[str]) -> list[Listing]:
    """Return the listings whose ids are in ``listing_ids``, in no particular order."""

    ids = list(dict.fromkeys(listing_ids))
    if not ids:
        return []
    stmt = select(Car).where(Car.id.in_(ids))
    result = await session.execute(stmt)
    return [to_listing(car) for car in result.scalars().all()]


async def create(session: AsyncSession, listing: Listing) -> str:
    """Insert ``listing`` and return its id; an empty id gets a generated one."""

    listing_id = listing.id or str(uuid4())
    car = Car(
        id=listing_id,
        dealer_id=listing.dealer_id,
        make=listing.make,
        model=listing.model,
        year=listing.year,
        price=listing.price,
        mileage=listing.mileage,
        transmission=_raw(listing.transmission),
        fuel_type=_raw(listing.fuel_type),
        steering=_raw(listing.steering),
        region=listing.region,
        condition=_raw(listing.condition),
        body_type=listing.body_type,
        images=list(listing.images),
        status=ListingStatus(listing.status),
        description=listing.description,
        created_at=listing.created_at,
        sold_at=listing.sold_at,
        title=listing.title,
        color=listing.color,
        vin=listing.vin,
        engine_size=listing.engine_size,
        features=list(listing.features),
        hire_purchase=listing.hire_purchase,
    )
    session.add(car)
    await session.flush()
    return listing_id


async def update(session: AsyncSession, listing_id: str, fields: Mapping[str, Any]) -> bool:
    """Apply a partial update; returns ``False`` when the listing does not exist."""

    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    car = await session.get(Car, listing_id)
    if car is None:
        return False

    for name, value in fields.items():
        if name in {"images", "features"}:
            value = list(value)
        elif name == "status":
            value = ListingStatus(value)
        elif isinstance(value, enum.Enum):
            value = value.value
        setattr(car, name, value)
    session.add(car)
    await session.flush()
    return True


async def set_status(
    session: AsyncSession,
    listing_id: str,
    status: ListingStatus,
    sold_at: datetime | None,
) -> bool:
    """Persist a lifecycle change computed by the lifecycle policy."""

    return await update(session, listing_id, {"status": status, "sold_at": sold_at})


async def delete_by_id(session: AsyncSession, listing_id: str) -> bool:
    """Remove a listing permanently."""

    car = await session.get(Car, listing_id)
    if car is None:
        return False
    await session.delete(car)
    await session.flush()
    return True


async def delete_by_owner(session: AsyncSession, dealer_id: str) -> None:
    """Remove every listing owned by ``dealer_id``."""

    await session.execute(delete(Car).where(Car.dealer_id == dealer_id))


def to_listing(car: Car) -> Listing:
    """Map an ORM row onto the immutable listing value."""

    return Listing(
        id=car.id,
        dealer_id=car.dealer_id,
        make=car.make,
        model=car.model,
        year=car.year,
        price=car.price,
        mileage=car.mileage or 0,
        transmission=_coerce(Transmission, car.transmission),
        fuel_type=_coerce(FuelType, car.fuel_type),
        steering=_coerce(Steering, car.steering),
        region=car.region,
        condition=_coerce(Condition, car.condition),
        body_type=car.body_type,
        images=tuple(car.images or ()),
        status=ListingStatus(car.status),
        description=car.description or "",
        created_at=car.created_at,
        sold_at=car.sold_at,
        title=car.title,
        color=car.color,
        vin=car.vin,
        engine_size=car.engine_size,
        features=tuple(car.features or ()),
        hire_purchase=bool(car.hire_purchase),
    )


def _coerce(enum_cls: type[E], value: str) -> E | str:
    """Return the enum member for ``value``, or the raw value if it is not one."""

    try:
        return enum_cls(value)
    except ValueError:
        return value


def _raw(value: object) -> object:
    return value.value if isinstance(value, enum.Enum) else value


def sort_like(listings: Sequence[Listing], ordered_ids: Sequence[str]) -> list[Listing]:
    """Reorder ``listings`` to follow ``ordered_ids``; unknown ids go last."""

    position = {listing_id: index for index, listing_id in enumerate(ordered_ids)}
    return sorted(listings, key=lambda listing: position.get(listing.id, len(position)))
