from sqlalchemy.ext.asyncio import AsyncSession
from mentorlink.common.exceptions import (
    NotAuthenticatedError,
    NotACandidateError,
    NotAnApplicantError,
)
from mentorlink.common.user_role import UserRole
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.users_entity import UsersEntity
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity


class UserIdentityService:
    """
    Service responsible for resolving the request's user context into the
    internal user and its role-specific profile.
    """

    def __init__(
        self,
        logger,
        users_repository,
        mentor_profiles_repository,
        mentee_profiles_repository,
    ):
        self.logger = logger
        self.users_repository = users_repository
        self.mentor_profiles_repository = mentor_profiles_repository
        self.mentee_profiles_repository = mentee_profiles_repository

    async def get_user(
        self, session: AsyncSession, user_context: UserContextDto | None
    ) -> UsersEntity:
        """
        Resolve the internal user entity referenced by the token subject.

        Args:
            session (AsyncSession): Active database async session.
            user_context (UserContextDto | None): Authenticated user context.

        Returns:
            UsersEntity: The active user.

        Raises:
            NotAuthenticatedError: If there is no context, or the user no longer
                exists or is deactivated.
        """
        if not user_context:
            raise NotAuthenticatedError("Not authenticated.")

        user = await self.users_repository.get_user_by_user_id(
            session=session, user_id=user_context.user_id
        )
        if not user or not user.is_active:
            self.logger.warning(
                "[UserIdentityService] token subject %s has no active user record",
                user_context.sub,
            )
            raise NotAuthenticatedError("Your account was not found. Please sign in again.")

        return user

    async def get_mentor_profile(
        self, session: AsyncSession, user_context: UserContextDto | None
    ) -> MentorProfileEntity:
        """
        Resolve the mentor profile of the caller.

        Raises:
            NotAuthenticatedError: If the caller is not signed in.
            NotACandidateError: If the caller is not a mentor or has no mentor profile.
        """
        user = await self.get_user(session, user_context)
        if user.role != UserRole.MENTOR:
            raise NotACandidateError("Unauthorized: You do not have a mentor profile.")

        mentor = await self.mentor_profiles_repository.get_by_user_id(
            session=session, user_id=user.user_id
        )
        if not mentor:
            raise NotACandidateError("Unauthorized: You do not have a mentor profile.")

        return mentor

    async def get_mentee_profile(
        self, session: AsyncSession, user_context: UserContextDto | None
    ) -> MenteeProfileEntity:
        """
        Resolve the mentee profile of the caller.

        Raises:
            NotAuthenticatedError: If the caller is not signed in.
            NotAnApplicantError: If the caller is not a mentee or has no mentee profile.
        """
        user = await self.get_user(session, user_context)
        if user.role != UserRole.MENTEE:
            raise NotAnApplicantError(
                "You must be a registered Mentee to select mentors."
            )

        mentee = await self.mentee_profiles_repository.get_by_user_id(
            session=session, user_id=user.user_id
        )
        if not mentee:
            raise NotAnApplicantError(
                "You must be a registered Mentee to select mentors."
            )

        return mentee

    async def get_profile_id(
        self, session: AsyncSession, user: UsersEntity
    ) -> int | None:
        """Return the ID of the user's role-specific profile, if it has one."""
        if user.role == UserRole.MENTOR:
            profile = await self.mentor_profiles_repository.get_by_user_id(
                session=session, user_id=user.user_id
            )
            return profile.mentor_id if profile else None

        profile = await self.mentee_profiles_repository.get_by_user_id(
            session=session, user_id=user.user_id
        )
        return profile.mentee_id if profile else None
