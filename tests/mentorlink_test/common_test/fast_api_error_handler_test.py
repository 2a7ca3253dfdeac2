from unittest import TestCase, main
from unittest.mock import patch
from http import HTTPStatus
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from mentorlink.common.fast_api_error_handler import register_exception_handlers
from mentorlink.common.exceptions import (
    CapacityFullError,
    NotFoundError,
    UnauthorizedSelectionError,
)

VALUE_ERROR_MSG = "Invalid input"
RUNTIME_ERROR_MSG = "Service unavailable"
UNEXPECTED_ERROR_MSG = "Unexpected fatal error"
GENERIC_SERVER_ERROR_MSG = "Internal Server Error. Please contact support."
ERROR_KEY = "message"


def _raiser(error):
    def trigger_error():
        raise error

    return trigger_error


class TestFastAPIExceptionHandler(TestCase):
    def setUp(self):
        self.app = FastAPI()
        register_exception_handlers(self.app)

        # Ignore server exceptions so we can inspect API responses
        self.client = TestClient(self.app, raise_server_exceptions=False)

        self.logger_patcher = patch("mentorlink.common.fast_api_error_handler.logger")
        self.mock_logger = self.logger_patcher.start()

    def tearDown(self):
        self.logger_patcher.stop()

    def test_handle_domain_errors(self):
        """Domain errors keep their status, expose their code and log at info."""
        cases = [
            (CapacityFullError("Capacity full."), HTTPStatus.CONFLICT, "CAPACITY_FULL"),
            (NotFoundError("Request not found."), HTTPStatus.NOT_FOUND, "NOT_FOUND"),
            (
                UnauthorizedSelectionError("Unauthorized."),
                HTTPStatus.FORBIDDEN,
                "UNAUTHORIZED",
            ),
        ]
        for index, (error, status, code) in enumerate(cases):
            route = f"/api/mentorship/domain_{index}"

            self.app.add_api_route(route, _raiser(error), methods=["GET"])

            with self.subTest(code=code):
                response = self.client.get(route)

                self.assertEqual(response.status_code, status)
                self.assertEqual(
                    response.json(),
                    {
                        "success": False,
                        "message": error.message,
                        "data": {"errorCode": code},
                    },
                )

        self.assertEqual(self.mock_logger.info.call_count, len(cases))
        self.mock_logger.error.assert_not_called()
        self.mock_logger.warning.assert_not_called()

    def test_handle_value_error(self):
        """400 Client Error (ValueError): the raw message is shown and logged as warning."""
        route = "/api/test/value_error"

        @self.app.get(route)
        def trigger_error():
            raise ValueError(VALUE_ERROR_MSG)

        response = self.client.get(route)

        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)
        self.assertEqual(response.json().get(ERROR_KEY), VALUE_ERROR_MSG)
        self.mock_logger.warning.assert_called_once()
        self.mock_logger.error.assert_not_called()

        # /api/test/value_error -> resource = "test"
        args, _ = self.mock_logger.warning.call_args
        self.assertIn("test", args)

    def test_handle_request_validation_error(self):
        route = "/api/test/validation"

        class Item(BaseModel):
            rank: int

        @self.app.post(route)
        def trigger_validation(item: Item):
            return item

        response = self.client.post(route, json={"rank": "first"})

        self.assertEqual(response.status_code, HTTPStatus.BAD_REQUEST)
        message = response.json().get(ERROR_KEY)
        self.assertTrue(message.startswith("Validation Error"))
        self.assertIn("rank", message)

    def test_handle_runtime_error(self):
        route = "/api/test/runtime"

        @self.app.get(route)
        def trigger_error():
            raise RuntimeError(RUNTIME_ERROR_MSG)

        response = self.client.get(route)

        self.assertEqual(response.status_code, HTTPStatus.SERVICE_UNAVAILABLE)
        self.assertEqual(response.json().get(ERROR_KEY), GENERIC_SERVER_ERROR_MSG)
        self.mock_logger.error.assert_called_once()

    def test_handle_unexpected_error(self):
        """500: details are hidden from the client and logged with the stack trace."""
        route = "/api/test/unexpected"

        @self.app.get(route)
        def trigger_error():
            raise KeyError(UNEXPECTED_ERROR_MSG)

        response = self.client.get(route)

        self.assertEqual(response.status_code, HTTPStatus.INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json().get(ERROR_KEY), GENERIC_SERVER_ERROR_MSG)
        _, kwargs = self.mock_logger.error.call_args
        self.assertTrue(kwargs.get("exc_info"))


if __name__ == "__main__":
    main()
