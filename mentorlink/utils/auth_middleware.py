from http import HTTPStatus
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from mentorlink.common.api_endpoints import PUBLIC_PATHS
from mentorlink.common.exceptions import MatchingErrorCode
from mentorlink.common.fast_api_response_wrapper import api_response


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware for authenticating incoming HTTP requests.

    Delegates bearer-token verification to `AuthenticationService` and stores
    the resulting `UserContextDto` in `request.state.user` so that route
    handlers receive the caller's identity explicitly.

    Public paths (directory, registration, login, health, docs) are served
    without a token; a token sent to them is still decoded when valid so the
    handler can see who is calling. Every other path requires a valid token.

    Attributes:
        auth_service: An instance of `AuthenticationService` responsible for token validation.
        public_paths: Paths that can be reached anonymously.

    Usage:
        app.add_middleware(AuthMiddleware, auth_service=auth_service)

    Exception Handling:
        - ValueError (missing/invalid/expired token): HTTP 401 with the error message.
        - Other exceptions: HTTP 403 FORBIDDEN with "Authentication failed".
        On public paths both cases fall through with an anonymous user.
    """

    def __init__(self, app, auth_service, public_paths=PUBLIC_PATHS):
        super().__init__(app)
        self.auth_service = auth_service
        self.public_paths = public_paths

    async def dispatch(self, request: Request, call_next):
        """
        Authenticate the request, then hand it to the next handler.

        Args:
            request (Request): The incoming FastAPI request object.
            call_next (Callable): The next middleware or route handler to call.

        Returns:
            Response: The response returned by the next handler, or an error response
                    if authentication fails.
        """
        request.state.user = None
        is_public = request.url.path.rstrip("/") in self.public_paths or (
            request.method == "OPTIONS"
        )

        if is_public and not request.headers.get("Authorization"):
            return await call_next(request)

        try:
            request.state.user = self.auth_service.authenticate_request(
                request.headers
            )
        except ValueError as e:
            if not is_public:
                return api_response(
                    success=False,
                    message=str(e),
                    data={"errorCode": MatchingErrorCode.NOT_AUTHENTICATED.value},
                    status_code=HTTPStatus.UNAUTHORIZED,
                )
        except Exception:
            if is_public:
                return await call_next(request)
            return api_response(
                success=False,
                message="Authentication failed",
                status_code=HTTPStatus.FORBIDDEN,
                data=None,
            )

        return await call_next(request)
