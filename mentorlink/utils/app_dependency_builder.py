from mentorlink.authentication.account_service import AccountService
from mentorlink.authentication.authentication_controller import AuthenticationController
from mentorlink.authentication.authentication_service import AuthenticationService
from mentorlink.cache.view_cache_service import ViewCacheService
from mentorlink.common.database import Database
from mentorlink.common.logger import get_logger
from mentorlink.common.redis_client import RedisClient
from mentorlink.mentorship.capacity_service import CapacityService
from mentorlink.mentorship.cascade_resolver import CascadeResolver
from mentorlink.mentorship.matching_service import MatchingService
from mentorlink.mentorship.mentorship_controller import MentorshipController
from mentorlink.mentorship.mentorship_mapper import MentorshipMapper
from mentorlink.repository.mentee_profiles_repository import MenteeProfilesRepository
from mentorlink.repository.mentor_profiles_repository import MentorProfilesRepository
from mentorlink.repository.selections_repository import SelectionsRepository
from mentorlink.repository.users_repository import UsersRepository
from mentorlink.user_identity.user_identity_service import UserIdentityService
from mentorlink.utils.fast_app_factory import FastAppFactory
from mentorlink.utils.retry_utils import RetryUtils


class AppDependencyBuilder:
    """
    A builder class responsible for constructing all service and controller dependencies
    used throughout the application.

    This class acts as a centralized place for wiring together core infrastructure such as:
    - Logging
    - Database and Redis clients
    - Repositories
    - Business services (e.g. MatchingService, AccountService)
    - HTTP API controllers

    Example:
        builder = AppDependencyBuilder()
        app = builder.fast_app_factory.create_app()
    """

    def __init__(self):
        self.logger = get_logger()
        self.retry_utils = RetryUtils()

        self.database = Database()
        self.redis_client = RedisClient(
            logger=self.logger,
            retry_utils=self.retry_utils,
        ).get_redis_client()

        self.users_repository = UsersRepository()
        self.mentor_profiles_repository = MentorProfilesRepository()
        self.mentee_profiles_repository = MenteeProfilesRepository()
        self.selections_repository = SelectionsRepository()

        self.mentorship_mapper = MentorshipMapper()
        self.view_cache_service = ViewCacheService(
            logger=self.logger,
            redis_client=self.redis_client,
            retry_utils=self.retry_utils,
        )
        self.user_identity_service = UserIdentityService(
            logger=self.logger,
            users_repository=self.users_repository,
            mentor_profiles_repository=self.mentor_profiles_repository,
            mentee_profiles_repository=self.mentee_profiles_repository,
        )
        self.cascade_resolver = CascadeResolver(
            logger=self.logger,
            selections_repository=self.selections_repository,
        )
        self.capacity_service = CapacityService(
            logger=self.logger,
            selections_repository=self.selections_repository,
            mentor_profiles_repository=self.mentor_profiles_repository,
        )
        self.matching_service = MatchingService(
            logger=self.logger,
            selections_repository=self.selections_repository,
            mentor_profiles_repository=self.mentor_profiles_repository,
            mentee_profiles_repository=self.mentee_profiles_repository,
            cascade_resolver=self.cascade_resolver,
            capacity_service=self.capacity_service,
            mentorship_mapper=self.mentorship_mapper,
            user_identity_service=self.user_identity_service,
            view_cache_service=self.view_cache_service,
        )
        self.mentorship_controller = MentorshipController(
            matching_service=self.matching_service,
            database=self.database,
        )

        self.authentication_service = AuthenticationService(logger=self.logger)
        self.account_service = AccountService(
            logger=self.logger,
            users_repository=self.users_repository,
            mentor_profiles_repository=self.mentor_profiles_repository,
            mentee_profiles_repository=self.mentee_profiles_repository,
            authentication_service=self.authentication_service,
            user_identity_service=self.user_identity_service,
        )
        self.authentication_controller = AuthenticationController(
            account_service=self.account_service,
            database=self.database,
        )

        self.fast_app_factory = FastAppFactory(
            authentication_controller=self.authentication_controller,
            authentication_service=self.authentication_service,
            mentorship_controller=self.mentorship_controller,
            database=self.database,
        )
