"""
Delete every mentorship selection, keeping users and profiles.

Usage (from the repository root):
    DATABASE_URL=postgresql+asyncpg://... python -m tools.cleanup_selections
"""

import asyncio
from mentorlink.common.database import Database
from mentorlink.common.logger import get_logger
from mentorlink.repository.selections_repository import SelectionsRepository

logger = get_logger()


async def cleanup_selections(database: Database | None = None) -> int:
    db = database or Database(echo=False)

    async with db.session() as session:
        count = await SelectionsRepository().delete_all(session)
        await session.commit()

    logger.info("Deleted %s selections.", count)
    return count


def main():
    asyncio.run(cleanup_selections())


if __name__ == "__main__":
    main()
