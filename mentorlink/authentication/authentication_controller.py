from http import HTTPStatus
from fastapi import APIRouter
from mentorlink.authentication.account_service import AccountService
from mentorlink.common.api_endpoints import (
    LOGIN_ENDPOINT,
    MY_USER_ENDPOINT,
    REGISTER_ENDPOINT,
)
from mentorlink.common.fast_api_response_wrapper import api_response
from mentorlink.dto.auth_dto import LoginRequestDto
from mentorlink.dto.registration_dto import RegistrationRequestDto
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.utils.permission_decorators import authenticate


class AuthenticationController:
    """
    Controller for account-related endpoints.

    Registration and sign-in are public; `/users/me` relies on `AuthMiddleware`
    to have placed the user context into `request.state.user`.

    Endpoints:
        POST /auth/register: Create a mentor or mentee account.
        POST /auth/login: Exchange credentials for a bearer token.
        GET /users/me: Return the signed-in user and profile ID.
    """

    def __init__(self, account_service: AccountService, database):
        if not account_service:
            raise ValueError("AccountService instance is required.")

        self.account_service = account_service
        self.database = database
        self.router = APIRouter(tags=["Authentication"])

        self.router.add_api_route(
            REGISTER_ENDPOINT,
            self.register,
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            LOGIN_ENDPOINT,
            self.login,
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MY_USER_ENDPOINT,
            authenticate()(self.get_my_user),
            methods=["GET"],
            response_model=None,
        )

    async def register(self, body: RegistrationRequestDto):
        """
        Register a new account.

        The payload is discriminated by `role`: mentors send organization and
        expertise fields, mentees send batch, interests and links.

        Example:
            {
                "success": True,
                "message": "Registration successful.",
                "data": {"id": 7, "name": "...", "primaryEmail": "...", "role": "mentee", "profileId": 3}
            }
        """
        async with self.database.session() as session:
            user = await self.account_service.register(session, body.root)

        return api_response(
            message="Registration successful.",
            data=user,
            status_code=HTTPStatus.CREATED,
        )

    async def login(self, body: LoginRequestDto):
        async with self.database.session() as session:
            token = await self.account_service.login(
                session, email=body.email, password=body.password
            )

        return api_response(message="Login successful.", data=token)

    async def get_my_user(self, current_user: UserContextDto):
        async with self.database.session() as session:
            user = await self.account_service.get_current_user(session, current_user)

        return api_response(message="Successfully", data=user)
