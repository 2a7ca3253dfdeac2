from http import HTTPStatus
from mentorlink.common.exceptions import MatchingError
from mentorlink.common.fast_api_response_wrapper import api_response
from mentorlink.common.logger import get_logger
from fastapi import Request, FastAPI
from fastapi.exceptions import RequestValidationError

logger = get_logger()


async def matching_exception_handler(request: Request, exc: MatchingError):
    """
    Render a domain error (capacity full, wrong role, unknown selection...) as a
    unified API response.

    These are expected outcomes of user actions, so they are logged at info level
    and the error code is returned for the client to branch on.
    """
    logger.info(
        "[Domain Error] %s on path [%s]: %s",
        exc.error_code.value,
        request.url.path,
        exc.message,
    )

    return api_response(
        success=False,
        message=exc.message,
        data={"errorCode": exc.error_code.value},
        status_code=exc.status_code,
    )


async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler used to convert Python exceptions into a unified API response.
    It also performs structured logging while preventing sensitive information from leaking
    to the client.
    """

    # Determine the HTTP status code based on the type of exception.
    match exc:
        case ValueError() | RequestValidationError():
            status = HTTPStatus.BAD_REQUEST
        case RuntimeError():
            status = HTTPStatus.SERVICE_UNAVAILABLE
        case _:
            status = HTTPStatus.INTERNAL_SERVER_ERROR

    # Extract the resource segment from the request path, e.g. /api/mentorship/... -> mentorship.
    parts = request.url.path.strip("/").split("/")
    resource = parts[1] if len(parts) > 1 else "unknown"
    is_server_error = status >= 500

    log_msg = str(exc)

    # Server errors hide their details from the client.
    if is_server_error:
        user_message = "Internal Server Error. Please contact support."
    elif isinstance(exc, RequestValidationError):
        first_error = exc.errors()[0]
        user_message = (
            f"Validation Error: {first_error.get('loc', [])[-1]} - "
            f"{first_error.get('msg')}"
        )
    else:
        user_message = str(exc)

    # Full stack traces are logged only for server-side errors.
    log_method = logger.error if is_server_error else logger.warning
    log_method(
        "[%s] %s on resource [%s]: %s",
        "Server Error" if is_server_error else "Client Error",
        type(exc).__name__,
        resource,
        log_msg,
        exc_info=is_server_error,
    )

    return api_response(
        success=False,
        message=user_message,
        status_code=status,
    )


def register_exception_handlers(app: FastAPI):
    """
    Registers the exception handlers on the provided FastAPI application.

    Domain errors get their own handler; every other exception falls through to
    the global handler and is returned in the standard API response format.
    """
    app.add_exception_handler(MatchingError, matching_exception_handler)
    for exc_cls in (Exception, RequestValidationError):
        app.add_exception_handler(exc_cls, global_exception_handler)
