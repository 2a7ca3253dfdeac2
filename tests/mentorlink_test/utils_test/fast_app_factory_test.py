import unittest
from unittest.mock import MagicMock, AsyncMock, patch
from http import HTTPStatus

from fastapi import FastAPI
from fastapi.testclient import TestClient

from mentorlink.utils.fast_app_factory import FastAppFactory
from mentorlink.utils.auth_middleware import AuthMiddleware
from mentorlink.authentication.authentication_service import AuthenticationService
from mentorlink.authentication.authentication_controller import (
    AuthenticationController,
)
from mentorlink.mentorship.mentorship_controller import MentorshipController
from mentorlink.dto.selection_dto import SelectionDto
from mentorlink.entity.users_entity import UsersEntity
from mentorlink.common.mentorship_enums import DecisionAction, SelectionStatus
from mentorlink.common.user_role import UserRole
from mentorlink.common.exceptions import CapacityFullError, InvalidRankError

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


class TestFastAppFactory(unittest.TestCase):
    def setUp(self):
        self.mock_controller = MagicMock()
        self.mock_controller.router = MagicMock()
        self.mock_service = MagicMock()

        self.factory = FastAppFactory(
            authentication_controller=self.mock_controller,
            authentication_service=self.mock_service,
            mentorship_controller=self.mock_controller,
        )

    def test_create_app_returns_fastapi_instance(self):
        app = self.factory.create_app()
        self.assertIsInstance(app, FastAPI)
        self.assertEqual(app.docs_url, "/docs")

    def test_create_app_prod_disables_docs(self):
        app = self.factory.create_app(is_prod=True)

        self.assertIsNone(app.docs_url)
        self.assertIsNone(app.redoc_url)
        self.assertIsNone(app.openapi_url)

    @patch("mentorlink.utils.fast_app_factory.register_exception_handlers")
    def test_exception_handler_registration_called(self, mock_register):
        self.factory.create_app()

        mock_register.assert_called_once()
        self.assertIsInstance(mock_register.call_args[0][0], FastAPI)

    def test_auth_middleware_added(self):
        app = self.factory.create_app()
        middleware_classes = [m.cls for m in app.user_middleware]
        self.assertIn(AuthMiddleware, middleware_classes)


class TestMentorshipApi(unittest.TestCase):
    """HTTP-level checks of routing, authentication and the response envelope."""

    def setUp(self):
        self.auth_service = AuthenticationService(MagicMock(), jwt_secret=TEST_SECRET)

        self.mock_matching_service = MagicMock()
        self.mock_matching_service.list_directory = AsyncMock(return_value=[])
        self.mock_matching_service.submit_preference = AsyncMock()
        self.mock_matching_service.decide = AsyncMock()
        self.mock_account_service = MagicMock()

        self.mock_database = MagicMock()
        self.mock_session = AsyncMock()
        self.mock_database.session.return_value.__aenter__.return_value = (
            self.mock_session
        )
        self.mock_database.session.return_value.__aexit__.return_value = None

        factory = FastAppFactory(
            authentication_controller=AuthenticationController(
                account_service=self.mock_account_service,
                database=self.mock_database,
            ),
            authentication_service=self.auth_service,
            mentorship_controller=MentorshipController(
                matching_service=self.mock_matching_service,
                database=self.mock_database,
            ),
        )
        self.client = TestClient(factory.create_app())

    def _auth_header(self, user_id, role):
        token = self.auth_service.create_access_token(
            UsersEntity(user_id=user_id, primary_email="u@uom.lk", role=role)
        )
        return {"Authorization": f"Bearer {token}"}

    def test_health_check(self):
        response = self.client.get("/fastapi/health")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json(), {"Hello": "World!"})

    def test_directory_is_public(self):
        response = self.client.get("/api/mentors")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(
            response.json(),
            {
                "success": True,
                "message": "Successfully fetched mentor directory.",
                "data": [],
            },
        )

    def test_protected_endpoint_without_token(self):
        response = self.client.get("/api/mentorship/requests")

        self.assertEqual(response.status_code, HTTPStatus.UNAUTHORIZED)
        self.assertEqual(response.json()["data"], {"errorCode": "NOT_AUTHENTICATED"})

    def test_submit_preference_camel_case(self):
        self.mock_matching_service.submit_preference.return_value = SelectionDto(
            id=1, mentee_id=4, mentor_id=3, rank=2, status=SelectionStatus.PENDING
        )

        response = self.client.put(
            "/api/mentorship/preferences",
            json={"mentorId": 3, "rank": 2},
            headers=self._auth_header(11, UserRole.MENTEE),
        )

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(
            response.json()["data"],
            {"id": 1, "menteeId": 4, "mentorId": 3, "rank": 2, "status": "pending"},
        )
        kwargs = self.mock_matching_service.submit_preference.await_args.kwargs
        self.assertEqual(kwargs["user_context"].user_id, 11)

    def test_submit_preference_invalid_rank(self):
        self.mock_matching_service.submit_preference.side_effect = InvalidRankError(
            "Rank must be between 1 and 5."
        )

        response = self.client.put(
            "/api/mentorship/preferences",
            json={"mentorId": 3, "rank": 9},
            headers=self._auth_header(11, UserRole.MENTEE),
        )

        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)
        self.assertEqual(response.json()["data"], {"errorCode": "INVALID_RANK"})

    def test_mentor_cannot_submit_preferences(self):
        response = self.client.put(
            "/api/mentorship/preferences",
            json={"mentorId": 3, "rank": 1},
            headers=self._auth_header(5, UserRole.MENTOR),
        )

        self.assertEqual(response.status_code, HTTPStatus.FORBIDDEN)
        self.assertEqual(response.json()["data"], {"errorCode": "NOT_AN_APPLICANT"})
        self.mock_matching_service.submit_preference.assert_not_awaited()

    def test_decision_capacity_full(self):
        self.mock_matching_service.decide.side_effect = CapacityFullError(
            "Capacity full. Cannot accept more mentees."
        )

        response = self.client.post(
            "/api/mentorship/requests/9/decision",
            json={"action": "ACCEPT"},
            headers=self._auth_header(5, UserRole.MENTOR),
        )

        self.assertEqual(response.status_code, HTTPStatus.CONFLICT)
        self.assertEqual(
            response.json(),
            {
                "success": False,
                "message": "Capacity full. Cannot accept more mentees.",
                "data": {"errorCode": "CAPACITY_FULL"},
            },
        )
        kwargs = self.mock_matching_service.decide.await_args.kwargs
        self.assertEqual(kwargs["selection_id"], 9)
        self.assertEqual(kwargs["action"], DecisionAction.ACCEPT)

    def test_decision_invalid_action(self):
        response = self.client.post(
            "/api/mentorship/requests/9/decision",
            json={"action": "MAYBE"},
            headers=self._auth_header(5, UserRole.MENTOR),
        )

        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)
        self.assertFalse(response.json()["success"])
        self.mock_matching_service.decide.assert_not_awaited()


if __name__ == "__main__":
    unittest.main()
