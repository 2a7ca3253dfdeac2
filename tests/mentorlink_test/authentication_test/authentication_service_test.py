import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import jwt
from starlette.datastructures import Headers

from mentorlink.authentication.authentication_service import AuthenticationService
from mentorlink.entity.users_entity import UsersEntity
from mentorlink.common.user_role import UserRole

TEST_SECRET = "test-secret-key-with-enough-length-for-hs256"


class TestAuthenticationService(unittest.TestCase):
    """
    Unit tests for AuthenticationService.

    This suite verifies:
    - bcrypt password hashing and verification
    - access token issuing
    - bearer header parsing and token validation errors
    """

    def setUp(self):
        self.mock_logger = MagicMock()
        self.auth_service = AuthenticationService(
            self.mock_logger, jwt_secret=TEST_SECRET
        )
        self.user = UsersEntity(
            user_id=42, primary_email="mentor@uom.lk", role=UserRole.MENTOR
        )

    def _token(self, **overrides):
        now = datetime.now(timezone.utc)
        payload = {
            "sub": "42",
            "email": "mentor@uom.lk",
            "role": "mentor",
            "exp": now + timedelta(minutes=5),
        }
        payload.update(overrides)
        return jwt.encode(payload, TEST_SECRET, algorithm="HS256")

    def test_requires_secret(self):
        with patch.dict("os.environ", {}, clear=True):
            with self.assertRaises(ValueError):
                AuthenticationService(self.mock_logger)

    def test_secret_from_environment(self):
        with patch.dict(
            "os.environ", {"JWT_SECRET": TEST_SECRET, "JWT_EXPIRE_MINUTES": "10"}
        ):
            service = AuthenticationService(self.mock_logger)

        self.assertEqual(service.jwt_secret, TEST_SECRET)
        self.assertEqual(service.expire_minutes, 10)

    def test_hash_and_verify_password(self):
        password_hash = AuthenticationService.hash_password("password123")

        self.assertNotEqual(password_hash, "password123")
        self.assertTrue(
            AuthenticationService.verify_password("password123", password_hash)
        )
        self.assertFalse(AuthenticationService.verify_password("wrong", password_hash))

    def test_verify_password_rejects_empty_or_malformed_hash(self):
        self.assertFalse(AuthenticationService.verify_password("password123", ""))
        self.assertFalse(
            AuthenticationService.verify_password("password123", "not-a-bcrypt-hash")
        )

    def test_long_password_truncated_to_bcrypt_limit(self):
        """Test passwords longer than 72 bytes hash and verify without error."""
        long_password = "x" * 100
        password_hash = AuthenticationService.hash_password(long_password)

        self.assertTrue(
            AuthenticationService.verify_password(long_password, password_hash)
        )

    def test_create_access_token_round_trip(self):
        token = self.auth_service.create_access_token(self.user)

        result = self.auth_service.authenticate_request(
            Headers({"Authorization": f"Bearer {token}"})
        )

        self.assertEqual(result.sub, "42")
        self.assertEqual(result.user_id, 42)
        self.assertEqual(result.primary_email, "mentor@uom.lk")
        self.assertEqual(result.roles, [UserRole.MENTOR])

    def test_missing_header(self):
        with self.assertRaisesRegex(ValueError, "Missing authentication credentials"):
            self.auth_service.authenticate_request(Headers({}))

    def test_non_bearer_header(self):
        with self.assertRaises(ValueError):
            self.auth_service.authenticate_request(
                Headers({"Authorization": "Basic abc"})
            )

    def test_expired_token(self):
        token = self._token(exp=datetime.now(timezone.utc) - timedelta(minutes=1))

        with self.assertRaisesRegex(ValueError, "Token expired"):
            self.auth_service.authenticate_request(
                Headers({"Authorization": f"Bearer {token}"})
            )

    def test_wrong_signature(self):
        token = jwt.encode(
            {"sub": "42", "role": "mentor", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
            "another-secret-key-with-enough-length-0000",
            algorithm="HS256",
        )

        with self.assertRaisesRegex(ValueError, "Token Invalid"):
            self.auth_service.authenticate_request(
                Headers({"Authorization": f"Bearer {token}"})
            )

    def test_unexpected_claims(self):
        for overrides in ({"role": "admin"}, {"sub": "not-a-number"}):
            with self.subTest(overrides=overrides):
                token = self._token(**overrides)
                with self.assertRaisesRegex(ValueError, "unexpected claims"):
                    self.auth_service.authenticate_request(
                        Headers({"Authorization": f"Bearer {token}"})
                    )


if __name__ == "__main__":
    unittest.main()
