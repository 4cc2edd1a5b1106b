"""
Tests para el módulo de criptografía.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from src.utils.crypto import (
    hash_password,
    verify_password,
    validate_password_strength,
    JWTService,
)

SECRET = "unit-test-secret-key-0123456789abcdef"


class TestPasswordHashing:
    """Tests para hashing de contraseñas."""

    def test_hash_password_returns_hash(self):
        hashed = hash_password("Test123!")

        assert hashed
        assert hashed != "Test123!"
        assert hashed.startswith("$2")

    def test_hash_password_different_for_same_password(self):
        """El salt hace que cada hash sea distinto."""
        assert hash_password("Test123!") != hash_password("Test123!")

    def test_verify_password_correct(self):
        hashed = hash_password("Test123!")

        assert verify_password("Test123!", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("Test123!")

        assert verify_password("Wrong456!", hashed) is False

    def test_verify_password_invalid_hash(self):
        assert verify_password("any", "invalid_hash") is False


class TestPasswordStrength:
    """Tests para validación de fortaleza de contraseñas."""

    def test_valid_password(self):
        ok, error = validate_password_strength("Admin123!")

        assert ok is True
        assert error == ""

    @pytest.mark.parametrize("password", ["Ab1", "admin1234", "ADMIN1234", "AdminAdmin"])
    def test_weak_passwords(self, password):
        ok, error = validate_password_strength(password)

        assert ok is False
        assert error

    def test_custom_min_length(self):
        ok, _ = validate_password_strength("Admin123!", min_length=12)

        assert ok is False


class TestJWTService:
    """Tests para emisión y verificación de tokens."""

    @pytest.fixture
    def service(self):
        return JWTService(secret_key=SECRET)

    def test_requires_secret(self):
        with pytest.raises(ValueError):
            JWTService(secret_key="")

    def test_token_roundtrip_claims(self, service):
        token = service.create_access_token(7, "admin@tienda.test", "Admin")

        payload = service.verify_token(token)

        assert payload["id"] == 7
        assert payload["email"] == "admin@tienda.test"
        assert payload["nombre"] == "Admin"
        assert payload["exp"] - payload["iat"] == 8 * 3600

    def test_custom_expiration(self):
        service = JWTService(secret_key=SECRET, expire_hours=1)
        payload = service.verify_token(service.create_access_token(1, "a@b.c", "A"))

        assert payload["exp"] - payload["iat"] == 3600

    def test_expired_token(self, service):
        issued = datetime.now(timezone.utc) - timedelta(hours=9)
        token = service.create_access_token(1, "a@b.c", "A", now=issued)

        assert service.verify_token(token) is None

    def test_wrong_secret(self, service):
        other = JWTService(secret_key="another-secret-key-0123456789abcdef")
        token = other.create_access_token(1, "a@b.c", "A")

        assert service.verify_token(token) is None

    def test_tampered_payload(self, service):
        header, _, signature = service.create_access_token(1, "a@b.c", "A").split(".")
        forged = jwt.encode(
            {"id": 99, "email": "x@y.z", "nombre": "X",
             "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "otro-secreto-0123456789abcdef0123",
            algorithm="HS256",
        ).split(".")[1]

        assert service.verify_token(f"{header}.{forged}.{signature}") is None

    def test_token_without_exp_rejected(self, service):
        token = jwt.encode({"id": 1}, SECRET, algorithm="HS256")

        assert service.verify_token(token) is None

    def test_garbage_token(self, service):
        assert service.verify_token("no-es-un-jwt") is None
