import unittest
from unittest.mock import MagicMock
from http import HTTPStatus

from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from mentorlink.utils.auth_middleware import AuthMiddleware


class TestAuthMiddleware(unittest.TestCase):
    def setUp(self):
        """
        Builds a Starlette application with one protected and one public route,
        wrapped by AuthMiddleware with a mocked AuthenticationService.
        """
        self.mock_auth_service = MagicMock()

        async def user_endpoint(request):
            return JSONResponse({"user": request.state.user})

        routes = [
            Route("/api/mentorship/requests", user_endpoint),
            Route("/api/mentors", user_endpoint),
        ]

        self.app = Starlette(routes=routes)
        self.app.add_middleware(AuthMiddleware, auth_service=self.mock_auth_service)
        self.client = TestClient(self.app)

    def test_authentication_success(self):
        """The decoded user context is placed on request.state.user."""
        expected_user = {"sub": "7", "roles": ["mentor"]}
        self.mock_auth_service.authenticate_request.return_value = expected_user

        response = self.client.get(
            "/api/mentorship/requests", headers={"Authorization": "Bearer token"}
        )

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json(), {"user": expected_user})

    def test_protected_path_invalid_token(self):
        """A ValueError from token validation yields 401 NOT_AUTHENTICATED."""
        self.mock_auth_service.authenticate_request.side_effect = ValueError(
            "Token expired"
        )

        response = self.client.get(
            "/api/mentorship/requests", headers={"Authorization": "Bearer old"}
        )

        self.assertEqual(response.status_code, HTTPStatus.UNAUTHORIZED)
        body = response.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["message"], "Token expired")
        self.assertEqual(body["data"], {"errorCode": "NOT_AUTHENTICATED"})

    def test_protected_path_unexpected_error(self):
        self.mock_auth_service.authenticate_request.side_effect = RuntimeError("boom")

        response = self.client.get(
            "/api/mentorship/requests", headers={"Authorization": "Bearer token"}
        )

        self.assertEqual(response.status_code, HTTPStatus.FORBIDDEN)
        self.assertEqual(response.json()["message"], "Authentication failed")

    def test_public_path_without_token(self):
        """Public paths are served anonymously without calling the service."""
        response = self.client.get("/api/mentors")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json(), {"user": None})
        self.mock_auth_service.authenticate_request.assert_not_called()

    def test_public_path_with_invalid_token(self):
        """An invalid token on a public path falls back to anonymous access."""
        self.mock_auth_service.authenticate_request.side_effect = ValueError("bad")

        response = self.client.get(
            "/api/mentors", headers={"Authorization": "Bearer bad"}
        )

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json(), {"user": None})

    def test_public_path_with_unexpected_error(self):
        """An unexpected failure on a public path is still served anonymously."""
        self.mock_auth_service.authenticate_request.side_effect = RuntimeError("boom")

        response = self.client.get(
            "/api/mentors", headers={"Authorization": "Bearer token"}
        )

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json(), {"user": None})


if __name__ == "__main__":
    unittest.main()
