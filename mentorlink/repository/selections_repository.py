from sqlalchemy import select, update, delete, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from mentorlink.common.mentorship_enums import SelectionStatus
from mentorlink.entity.selection_entity import SelectionEntity

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SelectionsRepository:
    """
    Repository for handling database operations related to SelectionEntity.

    A selection is a mentee's request to one mentor at one preference rank.
    The (mentee_id, rank) pair is unique; writes at an existing rank overwrite it.
    """

    async def upsert_selection(
        self, session: AsyncSession, mentee_id: int, mentor_id: int, rank: int
    ) -> SelectionEntity:
        """
        Insert a PENDING selection, or overwrite the one already held at this rank.

        Runs as a single INSERT ... ON CONFLICT (mentee_id, rank) DO UPDATE so
        concurrent edits of the same rank resolve to last-writer-wins at the
        storage layer. Overwriting replaces the mentor and resets the status to
        PENDING, discarding any earlier decision at that rank.

        Args:
            session (AsyncSession): Active async database session.
            mentee_id (int): Mentee profile ID.
            mentor_id (int): Mentor profile ID to place at the rank.
            rank (int): Preference rank (1 is highest priority).

        Returns:
            SelectionEntity: The stored selection, reloaded from the database.
        """
        dialect_name = session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect_name)
        if insert is None:
            raise RuntimeError(f"Selection upsert is not supported on {dialect_name}.")

        stmt = insert(SelectionEntity).values(
            mentee_id=mentee_id,
            mentor_id=mentor_id,
            rank=rank,
            status=SelectionStatus.PENDING,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SelectionEntity.mentee_id, SelectionEntity.rank],
            set_={
                "mentor_id": stmt.excluded.mentor_id,
                "status": stmt.excluded.status,
                "updated_timestamp": func.now(),
            },
        )
        await session.execute(stmt)

        result = await session.execute(
            select(SelectionEntity)
            .where(
                SelectionEntity.mentee_id == mentee_id,
                SelectionEntity.rank == rank,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalars().one()

    async def get_by_selection_id(
        self, session: AsyncSession, selection_id: int
    ) -> SelectionEntity | None:
        """Retrieve a selection by its ID, or None if it does not exist."""
        if not selection_id:
            return None

        result = await session.execute(
            select(SelectionEntity)
            .where(SelectionEntity.selection_id == selection_id)
            .execution_options(populate_existing=True)
        )

        return result.scalars().one_or_none()

    async def get_by_mentee_id(
        self, session: AsyncSession, mentee_id: int
    ) -> list[SelectionEntity]:
        """Retrieve every selection of a mentee ordered by ascending rank."""
        result = await session.execute(
            select(SelectionEntity)
            .where(SelectionEntity.mentee_id == mentee_id)
            .order_by(SelectionEntity.rank)
        )

        return list(result.scalars().all())

    async def get_by_mentee_ids(
        self, session: AsyncSession, mentee_ids: list[int]
    ) -> list[SelectionEntity]:
        """
        Retrieve all selections belonging to any of the given mentees.

        Args:
            session (AsyncSession): Active async database session.
            mentee_ids (list[int]): Mentee profile IDs.

        Returns:
            list[SelectionEntity]: Selections ordered by mentee then rank.
        """
        if not mentee_ids:
            return []

        result = await session.execute(
            select(SelectionEntity)
            .where(SelectionEntity.mentee_id.in_(mentee_ids))
            .order_by(SelectionEntity.mentee_id, SelectionEntity.rank)
        )

        return list(result.scalars().all())

    async def get_by_mentor_id_and_status(
        self, session: AsyncSession, mentor_id: int, status: SelectionStatus
    ) -> list[SelectionEntity]:
        """
        Retrieve the selections addressed to a mentor that have the given status.

        Args:
            session (AsyncSession): Active async database session.
            mentor_id (int): Mentor profile ID.
            status (SelectionStatus): Status to filter by.

        Returns:
            list[SelectionEntity]: Matching selections ordered by ascending rank.
        """
        result = await session.execute(
            select(SelectionEntity)
            .where(
                SelectionEntity.mentor_id == mentor_id,
                SelectionEntity.status == status,
            )
            .order_by(SelectionEntity.rank, SelectionEntity.selection_id)
        )

        return list(result.scalars().all())

    async def count_accepted_by_mentor_id(
        self, session: AsyncSession, mentor_id: int
    ) -> int:
        """Count the ACCEPTED selections of a mentor."""
        result = await session.execute(
            select(func.count(SelectionEntity.selection_id)).where(
                SelectionEntity.mentor_id == mentor_id,
                SelectionEntity.status == SelectionStatus.ACCEPTED,
            )
        )

        return result.scalar_one()

    async def count_accepted_grouped_by_mentor(
        self, session: AsyncSession
    ) -> dict[int, int]:
        """
        Count ACCEPTED selections for every mentor in one query.

        Returns:
            dict[int, int]: Mapping of mentor ID to accepted count. Mentors
                            without accepted selections are absent.
        """
        result = await session.execute(
            select(SelectionEntity.mentor_id, func.count(SelectionEntity.selection_id))
            .where(SelectionEntity.status == SelectionStatus.ACCEPTED)
            .group_by(SelectionEntity.mentor_id)
        )

        return {mentor_id: count for mentor_id, count in result.all()}

    async def update_status(
        self,
        session: AsyncSession,
        selection_id: int,
        status: SelectionStatus,
        mentor_id: int,
    ) -> bool:
        """
        Set the status of a selection still addressed to the given mentor.

        The mentor condition is part of the UPDATE, so a rank the mentee moved to
        another mentor after it was read is left untouched.

        Args:
            session (AsyncSession): Active async database session.
            selection_id (int): The selection to update.
            status (SelectionStatus): New status.
            mentor_id (int): Mentor profile ID the selection must belong to.

        Returns:
            bool: True if the selection was updated.
        """
        result = await session.execute(
            update(SelectionEntity)
            .where(
                SelectionEntity.selection_id == selection_id,
                SelectionEntity.mentor_id == mentor_id,
            )
            .values(status=status, updated_timestamp=func.now())
        )
        await session.flush()

        return result.rowcount > 0

    async def delete_all(self, session: AsyncSession) -> int:
        """
        Delete every selection.

        Returns:
            int: Number of deleted rows.
        """
        result = await session.execute(delete(SelectionEntity))
        await session.flush()

        return result.rowcount
