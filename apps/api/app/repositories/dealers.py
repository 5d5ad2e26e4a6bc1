"""Dealership repository helpers."""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..data.accounts import Dealer
from ..models.dealer import Dealership, DealerStatus

EDITABLE_FIELDS = frozenset(
    {"business_name", "region", "contact_phone", "whatsapp", "logo_url", "banner_url", "address", "status", "description"}
)


async def get_by_uid(session: AsyncSession, uid: str) -> Dealer | None:
    """Return a dealership by owner uid."""

    dealership = await session.get(Dealership, uid)
    if dealership is None:
        return None
    return to_dealer(dealership)


async def list_dealers(session: AsyncSession, *, status: DealerStatus | None = None) -> list[Dealer]:
    """Return dealerships, optionally restricted to one status."""

    stmt: Select[tuple[Dealership]] = select(Dealership).order_by(Dealership.business_name.asc())
    if status is not None:
        stmt = stmt.where(Dealership.status == status)
    result = await session.execute(stmt)
    return [to_dealer(row) for row in result.scalars().all()]


async def upsert(session: AsyncSession, dealer: Dealer) -> None:
    """Create or overwrite a dealership record."""

    dealership = await session.get(Dealership, dealer.uid)
    if dealership is None:
        dealership = Dealership(uid=dealer.uid)
    dealership.business_name = dealer.business_name
    dealership.region = dealer.region
    dealership.contact_phone = dealer.contact_phone
    dealership.whatsapp = dealer.whatsapp
    dealership.logo_url = dealer.logo_url
    dealership.banner_url = dealer.banner_url
    dealership.address = dealer.address
    dealership.status = DealerStatus(dealer.status)
    dealership.description = dealer.description
    session.add(dealership)
    await session.flush()


async def update(session: AsyncSession, uid: str, fields: Mapping[str, Any]) -> bool:
    """Apply a partial update; returns ``False`` when the dealership does not exist."""

    unknown = set(fields) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    dealership = await session.get(Dealership, uid)
    if dealership is None:
        return False
    for name, value in fields.items():
        if name == "status":
            value = DealerStatus(value)
        setattr(dealership, name, value)
    session.add(dealership)
    await session.flush()
    return True


async def delete_by_uid(session: AsyncSession, uid: str) -> bool:
    """Remove a dealership; returns whether one existed."""

    dealership = await session.get(Dealership, uid)
    if dealership is None:
        return False
    await session.delete(dealership)
    await session.flush()
    return True


def to_dealer(dealership: Dealership) -> Dealer:
    return Dealer(
        uid=dealership.uid,
        business_name=dealership.business_name,
        region=dealership.region,
        contact_phone=dealership.contact_phone,
        whatsapp=dealership.whatsapp,
        address=dealership.address,
        status=DealerStatus(dealership.status),
        logo_url=dealership.logo_url or "",
        banner_url=dealership.banner_url,
        description=dealership.description,
    )
