from enum import Enum
from http import HTTPStatus


class MatchingErrorCode(str, Enum):
    INVALID_RANK = "INVALID_RANK"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    NOT_AN_APPLICANT = "NOT_AN_APPLICANT"
    NOT_A_CANDIDATE = "NOT_A_CANDIDATE"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    CAPACITY_FULL = "CAPACITY_FULL"
    EMAIL_IN_USE = "EMAIL_IN_USE"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"


class MatchingError(Exception):
    """
    Base class for recoverable, user-facing errors of the mentorship domain.

    Subclasses fix the error code and HTTP status so the global exception
    handler can render them without inspecting the message.
    """

    error_code: MatchingErrorCode
    status_code: HTTPStatus = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRankError(MatchingError):
    error_code = MatchingErrorCode.INVALID_RANK
    status_code = HTTPStatus.BAD_REQUEST


class NotAuthenticatedError(MatchingError):
    error_code = MatchingErrorCode.NOT_AUTHENTICATED
    status_code = HTTPStatus.UNAUTHORIZED


class NotAnApplicantError(MatchingError):
    error_code = MatchingErrorCode.NOT_AN_APPLICANT
    status_code = HTTPStatus.FORBIDDEN


class NotACandidateError(MatchingError):
    error_code = MatchingErrorCode.NOT_A_CANDIDATE
    status_code = HTTPStatus.FORBIDDEN


class NotFoundError(MatchingError):
    error_code = MatchingErrorCode.NOT_FOUND
    status_code = HTTPStatus.NOT_FOUND


class UnauthorizedSelectionError(MatchingError):
    error_code = MatchingErrorCode.UNAUTHORIZED
    status_code = HTTPStatus.FORBIDDEN


class CapacityFullError(MatchingError):
    error_code = MatchingErrorCode.CAPACITY_FULL
    status_code = HTTPStatus.CONFLICT


class EmailInUseError(MatchingError):
    error_code = MatchingErrorCode.EMAIL_IN_USE
    status_code = HTTPStatus.CONFLICT


class InvalidCredentialsError(MatchingError):
    error_code = MatchingErrorCode.INVALID_CREDENTIALS
    status_code = HTTPStatus.UNAUTHORIZED
