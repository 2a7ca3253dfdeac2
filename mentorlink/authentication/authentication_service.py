import os
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from starlette.datastructures import Headers
from mentorlink.common.constants import (
    BCRYPT_MAX_BYTES,
    DEFAULT_JWT_EXPIRE_MINUTES,
    JWT_ALGORITHM,
)
from mentorlink.common.environment_constants import JWT_SECRET, JWT_EXPIRE_MINUTES
from mentorlink.common.user_role import UserRole
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.entity.users_entity import UsersEntity


class AuthenticationService:
    """
    Service responsible for credentials and bearer tokens.

    Passwords are stored as bcrypt hashes. Signed-in users receive an HS256
    JWT carrying their user ID (`sub`), email and role; the auth middleware
    turns that token back into a `UserContextDto` on every request.
    """

    def __init__(self, logger, jwt_secret: str | None = None):
        """
        Initialize the AuthenticationService.

        Args:
            logger: A logger instance.
            jwt_secret (str | None): Signing secret; defaults to the JWT_SECRET
                environment variable.

        Raises:
            ValueError: If no signing secret is configured.
        """
        self.logger = logger
        self.jwt_secret = jwt_secret or os.getenv(JWT_SECRET)
        if not self.jwt_secret:
            raise ValueError(f"Please set environment variable: {JWT_SECRET}.")
        self.expire_minutes = int(
            os.getenv(JWT_EXPIRE_MINUTES, DEFAULT_JWT_EXPIRE_MINUTES)
        )

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password with bcrypt (input truncated to bcrypt's 72-byte limit)."""
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Verify a plain password against a stored bcrypt hash."""
        if not password_hash:
            return False
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(password_bytes, password_hash.encode("utf-8"))
        except ValueError:
            return False

    def create_access_token(self, user: UsersEntity) -> str:
        """
        Issue a signed access token for a user.

        Args:
            user (UsersEntity): The signed-in user.

        Returns:
            str: Encoded JWT.
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user.user_id),
            "email": user.primary_email,
            "role": user.role.value,
            "iat": now,
            "exp": now + timedelta(minutes=self.expire_minutes),
        }
        return jwt.encode(payload, self.jwt_secret, algorithm=JWT_ALGORITHM)

    def authenticate_request(self, headers: Headers) -> UserContextDto:
        """
        Authenticate an incoming request from its `Authorization: Bearer` header.

        Args:
            headers (Headers): The request headers.

        Returns:
            UserContextDto: Contains the user's sub, primary_email, and roles.

        Raises:
            ValueError: If the header is missing or the token is invalid.
        """
        auth_header = headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            raise ValueError("Missing authentication credentials")

        token = auth_header.split(" ", 1)[1].strip()
        return self._verify_token(token)

    def _verify_token(self, token: str) -> UserContextDto:
        """
        Verify a token and build the user context from its claims.

        Args:
            token (str): Encoded JWT.

        Returns:
            UserContextDto: User information including roles.
        """
        try:
            payload = jwt.decode(
                token,
                key=self.jwt_secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Token Invalid: {str(e)}")

        try:
            role = UserRole(payload.get("role"))
            int(payload["sub"])
        except (ValueError, TypeError):
            raise ValueError("Token Invalid: unexpected claims")

        return UserContextDto(
            sub=payload["sub"],
            primary_email=payload.get("email", ""),
            roles=[role],
        )
