from http import HTTPStatus
from fastapi import APIRouter
from mentorlink.common.api_endpoints import (
    MATCHED_MENTEES_ENDPOINT,
    MENTOR_DIRECTORY_ENDPOINT,
    MENTOR_REQUEST_DECISION_ENDPOINT,
    MENTOR_REQUESTS_ENDPOINT,
    MY_PREFERENCES_ENDPOINT,
)
from mentorlink.common.fast_api_response_wrapper import api_response
from mentorlink.common.mentorship_enums import DecisionAction
from mentorlink.common.user_role import UserRole
from mentorlink.dto.selection_dto import DecisionRequestDto, PreferenceRequestDto
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.mentorship.matching_service import MatchingService
from mentorlink.utils.permission_decorators import authenticate


class MentorshipController:
    def __init__(self, matching_service: MatchingService, database):
        """
        Initialize the MentorshipController with required dependencies and register routes.

        Args:
            matching_service: MatchingService instance.
            database (Database): Database access object providing async session management.
        """
        if not matching_service:
            raise ValueError("MatchingService instance is required.")

        self.matching_service = matching_service
        self.database = database

        self.router = APIRouter(tags=["mentorship"])

        self.router.add_api_route(
            MENTOR_DIRECTORY_ENDPOINT,
            endpoint=self.get_mentor_directory,
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MY_PREFERENCES_ENDPOINT,
            endpoint=authenticate(role=UserRole.MENTEE)(self.submit_preference),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            MY_PREFERENCES_ENDPOINT,
            endpoint=authenticate(role=UserRole.MENTEE)(self.get_my_preferences),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTOR_REQUESTS_ENDPOINT,
            endpoint=authenticate(role=UserRole.MENTOR)(self.get_mentor_requests),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTOR_REQUEST_DECISION_ENDPOINT,
            endpoint=authenticate(role=UserRole.MENTOR)(self.decide_request),
            methods=["POST"],
            response_model=None,
        )
        self.router.add_api_route(
            MATCHED_MENTEES_ENDPOINT,
            endpoint=authenticate(role=UserRole.MENTOR)(self.get_matched_mentees),
            methods=["GET"],
            response_model=None,
        )

    async def get_mentor_directory(self):
        """
        Public mentor directory with availability labels.

        Return:
            API response containing a list of MentorDirectoryDto.
        """
        async with self.database.session() as session:
            directory = await self.matching_service.list_directory(session)

        return api_response(
            message="Successfully fetched mentor directory.",
            data=directory,
        )

    async def submit_preference(
        self, body: PreferenceRequestDto, current_user: UserContextDto
    ):
        """
        Place a mentor at one of the signed-in mentee's five preference ranks.

        Args:
            body (PreferenceRequestDto): `mentorId` and `rank` (1-5).
            current_user (UserContextDto): Injected by the authenticate decorator.

        Return:
            API response containing the stored SelectionDto.
        """
        async with self.database.session() as session:
            selection = await self.matching_service.submit_preference(
                session=session,
                user_context=current_user,
                mentor_id=body.mentor_id,
                rank=body.rank,
            )

        return api_response(
            message="Preference saved.",
            data=selection,
        )

    async def get_my_preferences(self, current_user: UserContextDto):
        async with self.database.session() as session:
            preferences = await self.matching_service.list_my_preferences(
                session=session, user_context=current_user
            )

        return api_response(
            message="Successfully fetched preferences.",
            data=preferences,
        )

    async def get_mentor_requests(self, current_user: UserContextDto):
        """
        List the requests the signed-in mentor can act on right now.

        Return:
            API response containing a list of MentorRequestDto.
        """
        async with self.database.session() as session:
            requests = await self.matching_service.list_actionable_requests(
                session=session, user_context=current_user
            )

        return api_response(
            message="Successfully fetched mentorship requests.",
            data=requests,
        )

    async def decide_request(
        self,
        selection_id: int,
        body: DecisionRequestDto,
        current_user: UserContextDto,
    ):
        """
        Accept or reject a mentorship request.

        Args:
            selection_id (int): Path parameter identifying the request.
            body (DecisionRequestDto): `{"action": "ACCEPT" | "REJECT"}`.
            current_user (UserContextDto): Injected by the authenticate decorator.

        Return:
            API response containing the updated SelectionDto.
        """
        async with self.database.session() as session:
            selection = await self.matching_service.decide(
                session=session,
                user_context=current_user,
                selection_id=selection_id,
                action=body.action,
            )

        message = (
            "Request accepted."
            if body.action == DecisionAction.ACCEPT
            else "Request rejected."
        )
        return api_response(message=message, data=selection, status_code=HTTPStatus.OK)

    async def get_matched_mentees(self, current_user: UserContextDto):
        async with self.database.session() as session:
            mentees = await self.matching_service.list_matched(
                session=session, user_context=current_user
            )

        return api_response(
            message="Successfully fetched matched mentees.",
            data=mentees,
        )
