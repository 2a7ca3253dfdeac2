from sqlalchemy.ext.asyncio import AsyncSession
from mentorlink.common.constants import (
    DEFAULT_MIGRATED_CAPACITY,
    LIMITED_SLOTS_THRESHOLD,
)
from mentorlink.common.mentorship_enums import Availability
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity


class CapacityService:
    """Tracks how many mentees each mentor has accepted against their capacity."""

    def __init__(self, logger, selections_repository, mentor_profiles_repository):
        """
        Args:
            logger: The logger instance for logging messages.
            selections_repository (SelectionsRepository): Access to selection rows.
            mentor_profiles_repository (MentorProfilesRepository): Access to mentor rows.
        """
        self.logger = logger
        self.selections_repository = selections_repository
        self.mentor_profiles_repository = mentor_profiles_repository

    async def accepted_count(self, session: AsyncSession, mentor_id: int) -> int:
        """Number of ACCEPTED selections referencing the mentor."""
        return await self.selections_repository.count_accepted_by_mentor_id(
            session=session, mentor_id=mentor_id
        )

    async def has_capacity(
        self, session: AsyncSession, mentor: MentorProfileEntity
    ) -> bool:
        """
        Whether the mentor can accept one more mentee.

        Capacity 0 is an unconfigured legacy row, not "zero slots"; call
        `ensure_capacity_configured` first so it is resolved to the default.
        """
        count = await self.accepted_count(session, mentor.mentor_id)
        return count < mentor.capacity

    async def ensure_capacity_configured(
        self, session: AsyncSession, mentor: MentorProfileEntity
    ) -> int:
        """
        Upgrade a legacy capacity of 0 to the default and persist it.

        Args:
            session (AsyncSession): Active database async session.
            mentor (MentorProfileEntity): The mentor, ideally loaded under lock.

        Returns:
            int: The effective capacity.
        """
        if mentor.capacity:
            return mentor.capacity

        await self.mentor_profiles_repository.update_capacity(
            session=session,
            mentor_id=mentor.mentor_id,
            capacity=DEFAULT_MIGRATED_CAPACITY,
        )
        mentor.capacity = DEFAULT_MIGRATED_CAPACITY
        self.logger.info(
            "[CapacityService] migrated legacy capacity for mentor_id=%s to %s",
            mentor.mentor_id,
            DEFAULT_MIGRATED_CAPACITY,
        )
        return mentor.capacity

    @staticmethod
    def classify_availability(
        capacity: int, accepted_count: int
    ) -> tuple[Availability, int]:
        """
        Classify a mentor for the directory listing. Display only.

        Args:
            capacity (int): Declared capacity (0 means not configured yet).
            accepted_count (int): Current number of accepted mentees.

        Returns:
            tuple[Availability, int]: The availability label and the open slot count.
        """
        available_slots = max(0, capacity - accepted_count)

        if capacity > 0 and available_slots == 0:
            return Availability.UNAVAILABLE, available_slots
        if capacity > 0 and available_slots <= LIMITED_SLOTS_THRESHOLD:
            return Availability.LIMITED, available_slots
        return Availability.AVAILABLE, available_slots
