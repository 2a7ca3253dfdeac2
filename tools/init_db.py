"""
Reset the mentorship database schema.

Usage (from the repository root):
    DATABASE_URL=postgresql+asyncpg://... python -m tools.init_db
"""

from mentorlink.common.database import Database
from mentorlink.common.base import Base
import asyncio
import pkgutil
import importlib
import mentorlink.entity
from mentorlink.common.logger import get_logger

logger = get_logger()


def load_all_entities():
    """
    Automatically scan and import all modules under mentorlink.entity.

    Importing these modules ensures that all SQLAlchemy model classes
    and their associated Table objects are registered into Base.metadata.
    """
    package = mentorlink.entity
    prefix = package.__name__ + "."  # e.g. "mentorlink.entity."

    for _, name, _ in pkgutil.iter_modules(package.__path__, prefix):
        logger.info("Auto importing model: %s", name)
        importlib.import_module(name)


async def reset_database(database: Database | None = None):
    """
    Drop and recreate every table defined in Base.metadata.

    Notes:
    - The engine is created using our Database wrapper (DATABASE_URL).
    - drop_all/create_all keep the script usable against any SQLAlchemy
      backend, including a local SQLite file.
    """
    load_all_entities()

    db = database or Database(echo=False)
    engine = db.get_engine()

    async with engine.begin() as conn:
        logger.info("Dropping all tables from Base.metadata...")
        await conn.run_sync(Base.metadata.drop_all)

        logger.info("Creating all tables from Base.metadata...")
        await conn.run_sync(Base.metadata.create_all)

    await db.close()
    logger.info("Database reset complete.")


def main():
    logger.info("Resetting database tables...")
    asyncio.run(reset_database())


if __name__ == "__main__":
    main()
