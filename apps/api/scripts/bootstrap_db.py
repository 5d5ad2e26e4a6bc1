"""Create database schema and seed the demo marketplace for development."""
from __future__ import annotations

import asyncio

from app.data.accounts import FALLBACK_DEALERS
from app.data.listings import FALLBACK_LISTINGS
from app.db.session import SessionLocal, create_schema
from app.models import Car, UserProfile, UserRole
from app.repositories import dealers as dealers_repo
from app.repositories import listings as listings_repo

ACCOUNTS = [
	{
		"uid": "demo-admin",
		"email": "admin@example.com",
		"role": UserRole.SUPERADMIN,
		"display_name": "Marketplace Admin",
	},
	{
		"uid": "demo-shopper",
		"email": "shopper@example.com",
		"role": UserRole.USER,
		"display_name": "Demo Shopper",
	},
	*[
		{
			"uid": dealer.uid,
			"email": f"{dealer.uid}@example.com",
			"role": UserRole.DEALER,
			"display_name": dealer.business_name,
		}
		for dealer in FALLBACK_DEALERS
	],
]


async def seed_accounts() -> None:
	"""Insert or update demo user profiles."""

	async with SessionLocal() as session:
		async with session.begin():
			for account in ACCOUNTS:
				profile = await session.get(UserProfile, account["uid"])
				if profile is None:
					profile = UserProfile(uid=account["uid"], favorites=[])
					session.add(profile)
				profile.email = account["email"]
				profile.role = account["role"]
				profile.display_name = account["display_name"]


async def seed_dealers() -> None:
	"""Insert or update the demo dealerships."""

	async with SessionLocal() as session:
		async with session.begin():
			for dealer in FALLBACK_DEALERS:
				await dealers_repo.upsert(session, dealer)


async def seed_listings() -> None:
	"""Insert demo listings that are missing; existing rows keep their lifecycle state."""

	async with SessionLocal() as session:
		async with session.begin():
			for listing in FALLBACK_LISTINGS:
				car = await session.get(Car, listing.id)
				if car is None:
					await listings_repo.create(session, listing)


async def main() -> None:
	await create_schema()
	await seed_accounts()
	await seed_dealers()
	await seed_listings()
	print("Database schema ensured and demo data seeded.")


if __name__ == "__main__":
	asyncio.run(main())
