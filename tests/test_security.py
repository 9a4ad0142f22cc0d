"""Unit tests for blog_api.core.security: password hashing and the token service."""

import unittest
from datetime import timedelta

import jwt

from blog_api.core.errors import Unauthorized
from blog_api.core.security import TokenService, hash_password, verify_password

SECRET = "test-secret"


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_salted_and_verifies(self) -> None:
        first = hash_password("secret123")
        second = hash_password("secret123")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("secret123", first))
        self.assertFalse(verify_password("secret124", first))

    def test_garbage_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("secret123", "not-a-bcrypt-hash"))


class TestTokenService(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(SECRET)

    def test_issue_then_verify(self) -> None:
        identity = self.tokens.verify(self.tokens.issue("abc123", "Alice"))
        self.assertEqual(identity.id, "abc123")
        self.assertEqual(identity.name, "Alice")

    def test_default_lifetime_is_one_day(self) -> None:
        payload = jwt.decode(self.tokens.issue("u1", "Alice"), SECRET, algorithms=["HS256"])
        self.assertEqual(payload["exp"] - payload["iat"], 24 * 60 * 60)

    def test_expired_token_fails(self) -> None:
        expired = TokenService(SECRET, expires_in=timedelta(seconds=-1)).issue("u1", "Alice")
        with self.assertRaises(Unauthorized):
            self.tokens.verify(expired)

    def test_foreign_key_fails(self) -> None:
        forged = TokenService("another-secret").issue("u1", "Alice")
        with self.assertRaises(Unauthorized):
            self.tokens.verify(forged)

    def test_tampered_payload_fails(self) -> None:
        header, _, signature = self.tokens.issue("u1", "Alice").split(".")
        _, other_payload, _ = self.tokens.issue("admin", "Mallory").split(".")
        # Valid signature from one token grafted onto another token's payload.
        tampered = ".".join([header, other_payload, signature])
        with self.assertRaises(Unauthorized):
            self.tokens.verify(tampered)

    def test_missing_or_malformed_token_fails(self) -> None:
        for token in (None, "", "not-a-jwt", "a.b.c"):
            with self.subTest(token=token):
                with self.assertRaises(Unauthorized):
                    self.tokens.verify(token)

    def test_token_without_name_fails(self) -> None:
        token = jwt.encode({"sub": "u1", "exp": 9999999999}, SECRET, algorithm="HS256")
        with self.assertRaises(Unauthorized):
            self.tokens.verify(token)

    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TokenService("")


if __name__ == "__main__":
    unittest.main()
