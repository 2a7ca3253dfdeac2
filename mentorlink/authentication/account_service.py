from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mentorlink.common.exceptions import EmailInUseError, InvalidCredentialsError
from mentorlink.common.user_role import UserRole
from mentorlink.dto.auth_dto import CurrentUserDto, TokenDto
from mentorlink.dto.registration_dto import (
    MentorRegistrationDto,
    MenteeRegistrationDto,
)
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.mentee_profile_entity import MenteeProfileEntity
from mentorlink.entity.mentor_profile_entity import MentorProfileEntity
from mentorlink.entity.users_entity import UsersEntity


class AccountService:
    """
    Service handling account registration, sign-in and the current-user view.
    """

    def __init__(
        self,
        logger,
        users_repository,
        mentor_profiles_repository,
        mentee_profiles_repository,
        authentication_service,
        user_identity_service,
    ):
        """
        Args:
            logger: The logger instance for logging messages.
            users_repository (UsersRepository): Access to user rows.
            mentor_profiles_repository (MentorProfilesRepository): Access to mentor rows.
            mentee_profiles_repository (MenteeProfilesRepository): Access to mentee rows.
            authentication_service (AuthenticationService): Password hashing and tokens.
            user_identity_service (UserIdentityService): Resolves the caller's profile.
        """
        self.logger = logger
        self.users_repository = users_repository
        self.mentor_profiles_repository = mentor_profiles_repository
        self.mentee_profiles_repository = mentee_profiles_repository
        self.authentication_service = authentication_service
        self.user_identity_service = user_identity_service

    async def register(
        self,
        session: AsyncSession,
        registration: MentorRegistrationDto | MenteeRegistrationDto,
    ) -> CurrentUserDto:
        """
        Create a user and its role-specific profile in one transaction.

        Args:
            session (AsyncSession): Active database async session.
            registration: Validated mentor or mentee registration payload.

        Returns:
            CurrentUserDto: The created user with its profile ID.

        Raises:
            EmailInUseError: If the email is already registered.
        """
        existing = await self.users_repository.get_user_by_primary_email(
            session, registration.email
        )
        if existing:
            raise EmailInUseError("Email already in use!")

        role = UserRole(registration.role)
        user = UsersEntity(
            name=registration.name,
            primary_email=registration.email,
            password_hash=self.authentication_service.hash_password(
                registration.password
            ),
            role=role,
            is_active=True,
        )

        try:
            user = await self.users_repository.upsert_users(session, user)
            if isinstance(registration, MentorRegistrationDto):
                profile = await self.mentor_profiles_repository.upsert_mentor_profile(
                    session, self._build_mentor_profile(user.user_id, registration)
                )
                profile_id = profile.mentor_id
            else:
                profile = await self.mentee_profiles_repository.upsert_mentee_profile(
                    session, self._build_mentee_profile(user.user_id, registration)
                )
                profile_id = profile.mentee_id
            await session.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email.
            await session.rollback()
            raise EmailInUseError("Email already in use!")

        self.logger.info(
            "[AccountService] registered %s user_id=%s profile_id=%s",
            role.value,
            user.user_id,
            profile_id,
        )
        return CurrentUserDto(
            id=user.user_id,
            name=user.name,
            primary_email=user.primary_email,
            role=role,
            profile_id=profile_id,
        )

    async def login(self, session: AsyncSession, email: str, password: str) -> TokenDto:
        """
        Verify credentials and issue an access token.

        Raises:
            InvalidCredentialsError: If the email is unknown, the account is
                inactive, or the password does not match.
        """
        user = await self.users_repository.get_user_by_primary_email(
            session, email.strip().lower()
        )
        if (
            not user
            or not user.is_active
            or not self.authentication_service.verify_password(
                password, user.password_hash
            )
        ):
            self.logger.info("[AccountService] failed sign-in for %s", email)
            raise InvalidCredentialsError("Invalid email or password.")

        return TokenDto(
            access_token=self.authentication_service.create_access_token(user),
            role=user.role,
        )

    async def get_current_user(
        self, session: AsyncSession, user_context: UserContextDto | None
    ) -> CurrentUserDto:
        """Return the signed-in user with the ID of its role-specific profile."""
        user = await self.user_identity_service.get_user(session, user_context)
        profile_id = await self.user_identity_service.get_profile_id(session, user)

        return CurrentUserDto(
            id=user.user_id,
            name=user.name,
            primary_email=user.primary_email,
            role=user.role,
            profile_id=profile_id,
        )

    @staticmethod
    def _build_mentor_profile(
        user_id: int, registration: MentorRegistrationDto
    ) -> MentorProfileEntity:
        return MentorProfileEntity(
            user_id=user_id,
            organization=registration.organization or None,
            job_title=registration.job_title or None,
            graduation_year=registration.graduation_year,
            linkedin_link=registration.linkedin or None,
            expectations=registration.expectations or None,
            expertise=registration.expertise,
            capacity=registration.capacity,
        )

    @staticmethod
    def _build_mentee_profile(
        user_id: int, registration: MenteeRegistrationDto
    ) -> MenteeProfileEntity:
        return MenteeProfileEntity(
            user_id=user_id,
            batch=registration.batch or None,
            interests=registration.interests,
            bio=registration.bio or None,
            portfolio=registration.portfolio or None,
            cv_link=registration.cv_link or None,
            github=registration.github or None,
            linkedin_link=registration.linkedin or None,
            motivation=registration.motivation or None,
            goal=registration.goal or None,
        )
