import functools
import inspect
from enum import Enum
from starlette.requests import Request
from mentorlink.common.exceptions import (
    NotAuthenticatedError,
    NotACandidateError,
    NotAnApplicantError,
)
from mentorlink.common.user_role import UserRole

_ROLE_ERRORS = {
    UserRole.MENTOR: (NotACandidateError, "Unauthorized: You do not have a mentor profile."),
    UserRole.MENTEE: (
        NotAnApplicantError,
        "You must be a registered Mentee to select mentors.",
    ),
}


class ApiParamName(str, Enum):
    REQUEST = "request"
    CURRENT_USER = "current_user"
    USER_SUB = "user_sub"


def authenticate(role: UserRole | None = None):
    """
    Authentication and role check decorator for FastAPI endpoints.

    The decorator rewrites the endpoint signature to include a
    `request: Request` parameter so FastAPI injects the request object, then:
    1. Ensures a user exists in `request.state.user`
       (raises NotAuthenticatedError otherwise).
    2. If `role` is given, ensures the user holds it (raises NotACandidateError
       for mentor-only and NotAnApplicantError for mentee-only endpoints).
    3. Injects user-related parameters into the wrapped function if it declares them.

    Raised errors are rendered by the registered exception handlers.

    Supported injectable parameters (by name):
    - `request`      → Starlette/FastAPI Request object
    - `current_user` → Full user object from `request.state.user`
    - `user_sub`     → `user.sub` shortcut value

    Args:
        role: The role required to call the endpoint, or None to only
              require a signed-in user.

    Returns:
        The decorated async function.

    Example:
        class MyController:
            def __init__(self):
                self.router = APIRouter()
                self.router.add_api_route(
                    "/mentorship/requests",
                    endpoint=authenticate(role=UserRole.MENTOR)(self.list_requests),
                    methods=["GET"],
                )

            async def list_requests(self, current_user: UserContextDto):
                ...
    """

    def decorator(func):
        sig = inspect.signature(func)
        original_params = sig.parameters

        api_params = [
            p
            for name, p in original_params.items()
            if name
            not in {
                ApiParamName.USER_SUB.value,
                ApiParamName.CURRENT_USER.value,
                ApiParamName.REQUEST.value,
            }
        ]

        # FastAPI must see `request` in the signature to inject it.
        api_params.insert(
            0,
            inspect.Parameter(
                "request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request
            ),
        )

        @functools.wraps(func)
        async def wrapper(request: Request, *args, **kwargs):
            user = getattr(request.state, "user", None)
            if not user:
                raise NotAuthenticatedError("Not authenticated.")

            if role is not None and not user.has_role(role):
                error_cls, message = _ROLE_ERRORS[role]
                raise error_cls(message)

            business_kwargs = {
                k: v for k, v in kwargs.items() if k != ApiParamName.REQUEST.value
            }

            if ApiParamName.REQUEST.value in original_params:
                business_kwargs[ApiParamName.REQUEST.value] = request

            if ApiParamName.CURRENT_USER.value in original_params:
                business_kwargs[ApiParamName.CURRENT_USER.value] = user

            if ApiParamName.USER_SUB.value in original_params:
                business_kwargs[ApiParamName.USER_SUB.value] = getattr(
                    user, "sub", None
                )

            return await func(*args, **business_kwargs)

        wrapper.__signature__ = sig.replace(parameters=api_params)
        return wrapper

    return decorator
