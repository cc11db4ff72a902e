"""Create database tables and seed airports without starting the API."""
import asyncio

from core.database import AsyncSessionLocal, close_db, init_db
from core.logging_config import setup_logging
from db.setup import setup_database_default_data


async def main():
    setup_logging()
    await init_db()
    async with AsyncSessionLocal() as db:
        await setup_database_default_data(db)
    await close_db()
    print("Database tables created and airports seeded.")


if __name__ == "__main__":
    asyncio.run(main())
