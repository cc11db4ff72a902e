"""
Database setup module for seeding reference data.

Seeds the supported PTFS airports. Seeding is idempotent: existing rows are
refreshed in place, missing rows are inserted.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db.models import Airport

logger = logging.getLogger(__name__)

# PTFS airports use the ICAO code as display name.
PTFS_AIRPORT_CODES = [
    "IBAR", "IHEN", "ILAR", "IIAB", "IPAP", "IGRV", "IJAF", "IZOL",
    "ISCM", "IDCS", "ITKO", "ILKL", "IPPH", "IGAR", "IBLT", "IRFD",
    "IMLR", "ITRC", "IBTH", "IUFO", "ISAU", "ISKP", "IORE", "ICYP",
]

PTFS_AIRPORTS = [{"icao": code, "name": code} for code in PTFS_AIRPORT_CODES]


def fallback_airports() -> list[Airport]:
    """Built-in airport list, sorted by ICAO code, served when the store is down."""
    return [Airport(**data) for data in sorted(PTFS_AIRPORTS, key=lambda a: a["icao"])]


class DatabaseSetup:
    """Handles reference data setup."""

    async def seed_airports(self, db: AsyncSession) -> bool:
        """Create/update the PTFS airports."""
        logger.info("Seeding PTFS airports...")

        try:
            result = await db.execute(select(Airport))
            existing = {airport.icao: airport for airport in result.scalars().all()}

            created = 0
            for airport_data in PTFS_AIRPORTS:
                airport = existing.get(airport_data["icao"])
                if airport:
                    airport.name = airport_data["name"]
                else:
                    db.add(Airport(**airport_data))
                    created += 1

            await db.commit()
            logger.info(
                f"Airports seeded ({created} created, {len(PTFS_AIRPORTS) - created} refreshed)"
            )
            return True

        except Exception as e:
            logger.error(f"Failed to seed airports: {type(e).__name__}: {e}")
            await db.rollback()
            return False

    async def run_setup(self, db: AsyncSession) -> bool:
        """Seed all reference data."""
        success = await self.seed_airports(db)

        if success:
            logger.info("Database setup completed successfully")
        else:
            logger.error("Database setup failed, the API will serve the built-in airport list")

        return success


# Global database setup instance
database_setup = DatabaseSetup()


async def setup_database_default_data(db: AsyncSession) -> bool:
    """
    Convenience function to seed reference data.

    Args:
        db: Database session

    Returns:
        True if setup was successful, False otherwise
    """
    return await database_setup.run_setup(db)
