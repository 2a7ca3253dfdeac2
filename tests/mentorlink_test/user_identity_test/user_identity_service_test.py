from unittest import IsolatedAsyncioTestCase, main
from unittest.mock import AsyncMock, MagicMock

from mentorlink.user_identity.user_identity_service import UserIdentityService
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


class TestUserIdentityService(IsolatedAsyncioTestCase):
    def setUp(self):
        self.mock_logger = MagicMock()
        self.mock_users_repo = MagicMock()
        self.mock_mentor_repo = MagicMock()
        self.mock_mentee_repo = MagicMock()
        self.mock_users_repo.get_user_by_user_id = AsyncMock()
        self.mock_mentor_repo.get_by_user_id = AsyncMock()
        self.mock_mentee_repo.get_by_user_id = AsyncMock()
        self.session = AsyncMock()

        self.service = UserIdentityService(
            logger=self.mock_logger,
            users_repository=self.mock_users_repo,
            mentor_profiles_repository=self.mock_mentor_repo,
            mentee_profiles_repository=self.mock_mentee_repo,
        )

        self.mentor_user = UsersEntity(
            user_id=1,
            name="Mentor",
            primary_email="mentor@uni.edu",
            password_hash="x",
            role=UserRole.MENTOR,
            is_active=True,
        )
        self.mentee_user = UsersEntity(
            user_id=2,
            name="Mentee",
            primary_email="mentee@uni.edu",
            password_hash="x",
            role=UserRole.MENTEE,
            is_active=True,
        )
        self.mentor_context = UserContextDto(
            sub="1", primary_email="mentor@uni.edu", roles=[UserRole.MENTOR]
        )
        self.mentee_context = UserContextDto(
            sub="2", primary_email="mentee@uni.edu", roles=[UserRole.MENTEE]
        )

    async def test_get_user_without_context(self):
        with self.assertRaises(NotAuthenticatedError):
            await self.service.get_user(self.session, None)

        self.mock_users_repo.get_user_by_user_id.assert_not_awaited()

    async def test_get_user_missing_or_inactive(self):
        inactive = UsersEntity(
            user_id=1,
            name="Gone",
            primary_email="gone@uni.edu",
            password_hash="x",
            role=UserRole.MENTOR,
            is_active=False,
        )
        for stored in (None, inactive):
            with self.subTest(stored=stored):
                self.mock_users_repo.get_user_by_user_id.return_value = stored

                with self.assertRaises(NotAuthenticatedError):
                    await self.service.get_user(self.session, self.mentor_context)

    async def test_get_user_success(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor_user

        user = await self.service.get_user(self.session, self.mentor_context)

        self.assertIs(user, self.mentor_user)
        self.mock_users_repo.get_user_by_user_id.assert_awaited_once_with(
            session=self.session, user_id=1
        )

    async def test_get_mentor_profile(self):
        profile = MentorProfileEntity(mentor_id=10, user_id=1, capacity=2)
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor_user
        self.mock_mentor_repo.get_by_user_id.return_value = profile

        result = await self.service.get_mentor_profile(
            self.session, self.mentor_context
        )

        self.assertIs(result, profile)

    async def test_get_mentor_profile_wrong_role(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentee_user

        with self.assertRaises(NotACandidateError):
            await self.service.get_mentor_profile(self.session, self.mentee_context)

        self.mock_mentor_repo.get_by_user_id.assert_not_awaited()

    async def test_get_mentor_profile_missing_profile(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor_user
        self.mock_mentor_repo.get_by_user_id.return_value = None

        with self.assertRaises(NotACandidateError):
            await self.service.get_mentor_profile(self.session, self.mentor_context)

    async def test_get_mentee_profile(self):
        profile = MenteeProfileEntity(mentee_id=20, user_id=2)
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentee_user
        self.mock_mentee_repo.get_by_user_id.return_value = profile

        result = await self.service.get_mentee_profile(
            self.session, self.mentee_context
        )

        self.assertIs(result, profile)

    async def test_get_mentee_profile_rejects_mentor(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentor_user

        with self.assertRaises(NotAnApplicantError):
            await self.service.get_mentee_profile(self.session, self.mentor_context)

    async def test_get_mentee_profile_missing_profile(self):
        self.mock_users_repo.get_user_by_user_id.return_value = self.mentee_user
        self.mock_mentee_repo.get_by_user_id.return_value = None

        with self.assertRaises(NotAnApplicantError):
            await self.service.get_mentee_profile(self.session, self.mentee_context)

    async def test_get_profile_id(self):
        self.mock_mentor_repo.get_by_user_id.return_value = MentorProfileEntity(
            mentor_id=10, user_id=1
        )
        self.mock_mentee_repo.get_by_user_id.return_value = None

        self.assertEqual(
            await self.service.get_profile_id(self.session, self.mentor_user), 10
        )
        self.assertIsNone(
            await self.service.get_profile_id(self.session, self.mentee_user)
        )


if __name__ == "__main__":
    main()
