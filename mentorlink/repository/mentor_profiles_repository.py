from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity
from mentorlink.entity.users_entity import UsersEntity


class MentorProfilesRepository:
    """Repository for handling database operations related to MentorProfileEntity."""

    async def get_by_user_id(
        self, session: AsyncSession, user_id: int
    ) -> MentorProfileEntity | None:
        """Retrieve the MentorProfileEntity for a given user ID (1:1 relationship)."""
        if not user_id:
            return None

        result = await session.execute(
            select(MentorProfileEntity).where(MentorProfileEntity.user_id == user_id)
        )

        return result.scalars().one_or_none()

    async def get_by_mentor_id(
        self, session: AsyncSession, mentor_id: int
    ) -> MentorProfileEntity | None:
        """Retrieve a MentorProfileEntity by its primary key."""
        if not mentor_id:
            return None

        return await session.get(MentorProfileEntity, mentor_id)

    async def lock_by_mentor_id(
        self, session: AsyncSession, mentor_id: int
    ) -> MentorProfileEntity | None:
        """
        Load a MentorProfileEntity with a row lock (SELECT ... FOR UPDATE).

        Acceptances for the same mentor serialize on this lock until the
        surrounding transaction commits or rolls back, so the capacity
        read-check-write cannot interleave with another writer.

        Args:
            session (AsyncSession): Active async database session.
            mentor_id (int): The mentor profile to lock.

        Returns:
            MentorProfileEntity | None: The freshly loaded, locked row; None if absent.
        """
        result = await session.execute(
            select(MentorProfileEntity)
            .where(MentorProfileEntity.mentor_id == mentor_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )

        return result.scalars().one_or_none()

    async def get_all_with_users(
        self, session: AsyncSession
    ) -> list[tuple[MentorProfileEntity, UsersEntity]]:
        """
        Retrieve every mentor profile with its owning user, ordered by user name.

        Returns:
            list[tuple[MentorProfileEntity, UsersEntity]]: One pair per mentor.
        """
        result = await session.execute(
            select(MentorProfileEntity, UsersEntity)
            .join(UsersEntity, UsersEntity.user_id == MentorProfileEntity.user_id)
            .order_by(UsersEntity.name, MentorProfileEntity.mentor_id)
        )

        return [tuple(row) for row in result.all()]

    async def get_with_users_by_ids(
        self, session: AsyncSession, mentor_ids: list[int]
    ) -> list[tuple[MentorProfileEntity, UsersEntity]]:
        """Retrieve the given mentor profiles with their owning users."""
        if not mentor_ids:
            return []

        result = await session.execute(
            select(MentorProfileEntity, UsersEntity)
            .join(UsersEntity, UsersEntity.user_id == MentorProfileEntity.user_id)
            .where(MentorProfileEntity.mentor_id.in_(mentor_ids))
        )

        return [tuple(row) for row in result.all()]

    async def update_capacity(
        self, session: AsyncSession, mentor_id: int, capacity: int
    ) -> None:
        """
        Persist a new declared capacity for a mentor.

        Args:
            session (AsyncSession): Active async database session.
            mentor_id (int): Target mentor profile.
            capacity (int): New capacity value.
        """
        await session.execute(
            update(MentorProfileEntity)
            .where(MentorProfileEntity.mentor_id == mentor_id)
            .values(capacity=capacity)
        )
        await session.flush()

    async def upsert_mentor_profile(
        self, session: AsyncSession, entity: MentorProfileEntity
    ) -> MentorProfileEntity:
        """
        Inserts or updates a MentorProfileEntity in the database.

        Args:
            session (AsyncSession): Active async database session.
            entity (MentorProfileEntity): The entity containing profile data.

        Returns:
            MentorProfileEntity: The merged entity instance synchronized with the session.
        """
        merged_entity = await session.merge(entity)
        await session.flush()

        return merged_entity
