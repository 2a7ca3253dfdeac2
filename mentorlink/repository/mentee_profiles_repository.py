from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity
from mentorlink.entity.users_entity import UsersEntity


class MenteeProfilesRepository:
    """Repository for handling database operations related to MenteeProfileEntity."""

    async def get_by_user_id(
        self, session: AsyncSession, user_id: int
    ) -> MenteeProfileEntity | None:
        """Retrieve the MenteeProfileEntity for a given user ID (1:1 relationship)."""
        if not user_id:
            return None

        result = await session.execute(
            select(MenteeProfileEntity).where(MenteeProfileEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()

    async def get_with_users_by_ids(
        self, session: AsyncSession, mentee_ids: list[int]
    ) -> list[tuple[MenteeProfileEntity, UsersEntity]]:
        """
        Retrieve mentee profiles together with their owning users.

        Args:
            session (AsyncSession): Active async database session.
            mentee_ids (list[int]): Mentee profile IDs to load.

        Returns:
            list[tuple[MenteeProfileEntity, UsersEntity]]: One pair per found profile.
        """
        if not mentee_ids:
            return []

        result = await session.execute(
            select(MenteeProfileEntity, UsersEntity)
            .join(UsersEntity, UsersEntity.user_id == MenteeProfileEntity.user_id)
            .where(MenteeProfileEntity.mentee_id.in_(mentee_ids))
        )

        return [tuple(row) for row in result.all()]

    async def upsert_mentee_profile(
        self, session: AsyncSession, entity: MenteeProfileEntity
    ) -> MenteeProfileEntity:
        """
        Inserts or updates a MenteeProfileEntity in the database.

        Args:
            session (AsyncSession): Active async database session.
            entity (MenteeProfileEntity): The entity containing profile data.

        Returns:
            MenteeProfileEntity: The merged entity instance synchronized with the session.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity
