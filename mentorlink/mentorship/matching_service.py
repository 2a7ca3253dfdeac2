from sqlalchemy.ext.asyncio import AsyncSession
from mentorlink.common.constants import MIN_RANK, MAX_RANK
from mentorlink.common.exceptions import (
    CapacityFullError,
    InvalidRankError,
    NotFoundError,
    UnauthorizedSelectionError,
)
from mentorlink.common.mentorship_enums import DecisionAction, SelectionStatus
from mentorlink.dto.mentee_dto import MenteeSummaryDto, MentorRequestDto
from mentorlink.dto.mentor_dto import MentorDirectoryDto, MyPreferenceDto
from mentorlink.dto.selection_dto import SelectionDto
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.selection_entity import SelectionEntity


class MatchingService:
    """
    Orchestrates the mentor-driven matching protocol.

    Mentees rank up to five mentors; each mentor sees the requests the cascade
    rule makes actionable and accepts or rejects them within their capacity.
    Every public method receives the request's user context explicitly and
    owns the commit of its own transaction.
    """

    def __init__(
        self,
        logger,
        selections_repository,
        mentor_profiles_repository,
        mentee_profiles_repository,
        cascade_resolver,
        capacity_service,
        mentorship_mapper,
        user_identity_service,
        view_cache_service,
    ):
        """
        Initializes the MatchingService with required dependencies.

        Args:
            logger: The logger instance for logging messages.
            selections_repository (SelectionsRepository): Preference store.
            mentor_profiles_repository (MentorProfilesRepository): Mentor rows.
            mentee_profiles_repository (MenteeProfilesRepository): Mentee rows.
            cascade_resolver (CascadeResolver): Computes actionable requests.
            capacity_service (CapacityService): Capacity checks and migration.
            mentorship_mapper (MentorshipMapper): Entity to DTO conversion.
            user_identity_service (UserIdentityService): Resolves caller profiles.
            view_cache_service (ViewCacheService): Cached read views.
        """
        self.logger = logger
        self.selections_repository = selections_repository
        self.mentor_profiles_repository = mentor_profiles_repository
        self.mentee_profiles_repository = mentee_profiles_repository
        self.cascade_resolver = cascade_resolver
        self.capacity_service = capacity_service
        self.mentorship_mapper = mentorship_mapper
        self.user_identity_service = user_identity_service
        self.view_cache_service = view_cache_service

    async def submit_preference(
        self,
        session: AsyncSession,
        user_context: UserContextDto | None,
        mentor_id: int,
        rank: int,
    ) -> SelectionDto:
        """
        Place a mentor at one of the caller's preference ranks.

        An existing selection at the rank is overwritten: its mentor is replaced
        and its status reset to PENDING, whatever had been decided before.
        The same mentor may be placed at several ranks, and capacity is not
        checked here; it is only enforced when a mentor accepts.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto | None): Authenticated user context.
            mentor_id (int): The mentor profile to rank.
            rank (int): Preference rank between 1 and 5.

        Returns:
            SelectionDto: The stored selection.

        Raises:
            NotAuthenticatedError: If the caller is not signed in.
            NotAnApplicantError: If the caller has no mentee profile.
            InvalidRankError: If rank is outside 1..5.
            NotFoundError: If the mentor does not exist.
        """
        mentee = await self.user_identity_service.get_mentee_profile(
            session, user_context
        )

        if isinstance(rank, bool) or not isinstance(rank, int) or not (
            MIN_RANK <= rank <= MAX_RANK
        ):
            raise InvalidRankError(f"Rank must be between {MIN_RANK} and {MAX_RANK}.")

        mentor = await self.mentor_profiles_repository.get_by_mentor_id(
            session=session, mentor_id=mentor_id
        )
        if not mentor:
            raise NotFoundError("Mentor not found.")

        selection = await self.selections_repository.upsert_selection(
            session=session, mentee_id=mentee.mentee_id, mentor_id=mentor_id, rank=rank
        )
        await session.commit()

        self.logger.info(
            "[MatchingService] mentee_id=%s ranked mentor_id=%s at rank %s",
            mentee.mentee_id,
            mentor_id,
            rank,
        )
        self.view_cache_service.invalidate_after_preference_change(mentee.mentee_id)

        return self.mentorship_mapper.map_to_selection_dto(selection)

    async def list_my_preferences(
        self, session: AsyncSession, user_context: UserContextDto | None
    ) -> list[MyPreferenceDto]:
        """
        Return the caller's ranked selections with mentor details and status.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto | None): Authenticated user context.

        Returns:
            list[MyPreferenceDto]: Selections ordered by ascending rank.
        """
        mentee = await self.user_identity_service.get_mentee_profile(
            session, user_context
        )
        cache_key = self.view_cache_service.mentee_preferences_key(mentee.mentee_id)
        cached = self.view_cache_service.get_list(cache_key, MyPreferenceDto)
        if cached is not None:
            return cached

        selections = await self.selections_repository.get_by_mentee_id(
            session=session, mentee_id=mentee.mentee_id
        )
        mentor_rows = await self.mentor_profiles_repository.get_with_users_by_ids(
            session=session, mentor_ids=sorted({s.mentor_id for s in selections})
        )
        mentors_by_id = {mentor.mentor_id: (mentor, user) for mentor, user in mentor_rows}

        preferences = self.mentorship_mapper.map_to_my_preference_dtos(
            selections, mentors_by_id
        )
        self.view_cache_service.set_list(cache_key, preferences)
        return preferences

    async def list_actionable_requests(
        self, session: AsyncSession, user_context: UserContextDto | None
    ) -> list[MentorRequestDto]:
        """
        Return the requests the calling mentor can currently decide on.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto | None): Authenticated user context.

        Returns:
            list[MentorRequestDto]: Actionable requests by ascending rank.

        Raises:
            NotAuthenticatedError: If the caller is not signed in.
            NotACandidateError: If the caller has no mentor profile.
        """
        mentor = await self.user_identity_service.get_mentor_profile(
            session, user_context
        )
        # Resolve the versioned key before reading so a concurrent write retires it.
        cache_key = self.view_cache_service.mentor_requests_key(mentor.mentor_id)
        cached = self.view_cache_service.get_list(cache_key, MentorRequestDto)
        if cached is not None:
            return cached

        actionable = await self.cascade_resolver.list_actionable_requests(
            session=session, mentor_id=mentor.mentor_id
        )
        mentees_by_id = await self._load_mentees(session, actionable)

        requests = self.mentorship_mapper.map_to_mentor_request_dtos(
            actionable, mentees_by_id
        )
        self.view_cache_service.set_list(cache_key, requests)
        return requests

    async def decide(
        self,
        session: AsyncSession,
        user_context: UserContextDto | None,
        selection_id: int,
        action: DecisionAction,
    ) -> SelectionDto:
        """
        Accept or reject one of the calling mentor's requests.

        REJECT always succeeds, including on a selection that was already
        decided. ACCEPT enforces the mentor's capacity; the mentee's other
        selections are left untouched.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto | None): Authenticated user context.
            selection_id (int): The selection to decide on.
            action (DecisionAction): ACCEPT or REJECT.

        Returns:
            SelectionDto: The selection with its new status.

        Raises:
            NotAuthenticatedError: If the caller is not signed in.
            NotACandidateError: If the caller has no mentor profile.
            NotFoundError: If the selection does not exist.
            UnauthorizedSelectionError: If the selection belongs to another mentor.
            CapacityFullError: If accepting would exceed the mentor's capacity.
        """
        mentor = await self.user_identity_service.get_mentor_profile(
            session, user_context
        )

        selection = await self.selections_repository.get_by_selection_id(
            session=session, selection_id=selection_id
        )
        if not selection:
            raise NotFoundError("Request not found.")
        if selection.mentor_id != mentor.mentor_id:
            self.logger.warning(
                "[MatchingService] mentor_id=%s attempted to decide selection_id=%s owned by mentor_id=%s",
                mentor.mentor_id,
                selection_id,
                selection.mentor_id,
            )
            raise UnauthorizedSelectionError("Unauthorized.")

        if action == DecisionAction.ACCEPT:
            await self._accept(session, mentor.mentor_id, selection)
            new_status = SelectionStatus.ACCEPTED
        else:
            await self._set_status(
                session, mentor.mentor_id, selection, SelectionStatus.REJECTED
            )
            new_status = SelectionStatus.REJECTED

        await session.commit()

        self.logger.info(
            "[MatchingService] mentor_id=%s %s selection_id=%s (mentee_id=%s, rank=%s)",
            mentor.mentor_id,
            new_status.value,
            selection.selection_id,
            selection.mentee_id,
            selection.rank,
        )
        self.view_cache_service.invalidate_after_decision(selection.mentee_id)

        return self.mentorship_mapper.map_to_selection_dto(selection).model_copy(
            update={"status": new_status}
        )

    async def _accept(
        self, session: AsyncSession, mentor_id: int, selection: SelectionEntity
    ) -> None:
        """
        Accept a selection under the mentor's row lock.

        The lock is held from the capacity read until the caller commits, so two
        concurrent acceptances for the same mentor cannot both take the last slot.
        """
        locked_mentor = await self.mentor_profiles_repository.lock_by_mentor_id(
            session=session, mentor_id=mentor_id
        )
        if not locked_mentor:
            raise NotFoundError("Mentor not found.")

        capacity = await self.capacity_service.ensure_capacity_configured(
            session, locked_mentor
        )

        if not await self.capacity_service.has_capacity(session, locked_mentor):
            # Keep a capacity migration that happened above.
            await session.commit()
            self.logger.info(
                "[MatchingService] mentor_id=%s is at capacity %s; selection_id=%s stays %s",
                mentor_id,
                capacity,
                selection.selection_id,
                selection.status.value,
            )
            raise CapacityFullError("Capacity full. Cannot accept more mentees.")

        await self._set_status(session, mentor_id, selection, SelectionStatus.ACCEPTED)

    async def _set_status(
        self,
        session: AsyncSession,
        mentor_id: int,
        selection: SelectionEntity,
        status: SelectionStatus,
    ) -> None:
        updated = await self.selections_repository.update_status(
            session=session,
            selection_id=selection.selection_id,
            status=status,
            mentor_id=mentor_id,
        )
        if not updated:
            # The mentee re-pointed this rank after it was read.
            self.logger.warning(
                "[MatchingService] selection_id=%s is no longer addressed to mentor_id=%s",
                selection.selection_id,
                mentor_id,
            )
            raise UnauthorizedSelectionError(
                "This request is no longer addressed to you."
            )

    async def list_directory(self, session: AsyncSession) -> list[MentorDirectoryDto]:
        """
        List every mentor with availability computed from accepted counts.

        Readable without authentication. The classification is for display only.

        Returns:
            list[MentorDirectoryDto]: Mentors ordered by name.
        """
        cache_key = self.view_cache_service.directory_key()
        cached = self.view_cache_service.get_list(cache_key, MentorDirectoryDto)
        if cached is not None:
            return cached

        mentor_rows = await self.mentor_profiles_repository.get_all_with_users(
            session=session
        )
        accepted_counts = (
            await self.selections_repository.count_accepted_grouped_by_mentor(
                session=session
            )
        )

        directory = []
        for mentor, user in mentor_rows:
            availability, available_slots = self.capacity_service.classify_availability(
                mentor.capacity, accepted_counts.get(mentor.mentor_id, 0)
            )
            directory.append(
                self.mentorship_mapper.map_to_mentor_directory_dto(
                    mentor, user, availability, available_slots
                )
            )

        self.view_cache_service.set_list(cache_key, directory)
        return directory

    async def list_matched(
        self, session: AsyncSession, user_context: UserContextDto | None
    ) -> list[MenteeSummaryDto]:
        """
        List the mentees the calling mentor has accepted.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto | None): Authenticated user context.

        Returns:
            list[MenteeSummaryDto]: Accepted mentees including contact email.
        """
        mentor = await self.user_identity_service.get_mentor_profile(
            session, user_context
        )
        accepted = await self.selections_repository.get_by_mentor_id_and_status(
            session=session,
            mentor_id=mentor.mentor_id,
            status=SelectionStatus.ACCEPTED,
        )
        if not accepted:
            self.logger.info(
                "[MatchingService] no accepted mentees for mentor_id=%s",
                mentor.mentor_id,
            )
            return []

        mentees_by_id = await self._load_mentees(session, accepted)
        return self.mentorship_mapper.map_to_matched_mentee_dtos(
            accepted, mentees_by_id
        )

    async def _load_mentees(
        self, session: AsyncSession, selections: list[SelectionEntity]
    ) -> dict:
        if not selections:
            return {}

        mentee_rows = await self.mentee_profiles_repository.get_with_users_by_ids(
            session=session, mentee_ids=sorted({s.mentee_id for s in selections})
        )
        return {mentee.mentee_id: (mentee, user) for mentee, user in mentee_rows}
