"""Unit tests for validation, password hashing and token helpers."""
import jwt
import pytest
from datetime import datetime, timedelta, timezone

from student_portal.student_portal.auth_service.auth import (
    validate_email,
    validate_phone_number,
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
)
from student_portal.student_portal.auth_service.config import settings
from student_portal.student_portal.auth_service.errors import (
    AuthServiceError,
    ValidationError,
    DuplicateEmailError,
    NotFoundError,
    InvalidCredentialsError,
    DatabaseError,
    PasswordHashingError,
)


@pytest.mark.parametrize("email", [
    "student@example.com",
    "first.last@school.edu",
    "under_score-dash@mail.example.org",
    "UPPER@EXAMPLE.IO",
])
def test_validate_email_accepts_standard_addresses(email):
    validate_email(email)


@pytest.mark.parametrize("email", [
    "plainaddress",
    "@example.com",
    "user@",
    "user@example",
    "user@example.toolongtld",
    "user name@example.com",
    None,
])
def test_validate_email_rejects_malformed_addresses(email):
    with pytest.raises(ValidationError) as exc_info:
        validate_email(email)
    assert exc_info.value.message == "Invalid email format"


def test_validate_phone_number_minimum_length():
    validate_phone_number("0123456789")
    validate_phone_number("+1 (555) 123-4567")
    with pytest.raises(ValidationError):
        validate_phone_number("012345678")
    with pytest.raises(ValidationError):
        validate_phone_number(None)


def test_hash_password_is_salted_bcrypt_cost_10():
    first = hash_password("correct horse")
    second = hash_password("correct horse")
    assert first != second
    assert first.startswith("$2b$10$")
    assert second.startswith("$2b$10$")


def test_verify_password():
    hashed = hash_password("correct horse")
    assert verify_password("correct horse", hashed) is True
    assert verify_password("battery staple", hashed) is False
    assert verify_password("correct\x00horse", hashed) is False


def test_verify_password_unreadable_hash():
    with pytest.raises(PasswordHashingError) as exc_info:
        verify_password("anything", "plaintext-not-a-hash")
    assert exc_info.value.message == "Password comparison error"
    assert exc_info.value.status_code == 500


def test_access_token_carries_user_id_and_expires_in_one_hour():
    before = datetime.now(timezone.utc).replace(microsecond=0)
    token = create_access_token(42)
    claims = decode_access_token(token)

    assert claims["userId"] == 42
    assert claims["exp"] - claims["iat"] == 3600
    assert claims["iat"] >= int(before.timestamp())


def test_decode_rejects_expired_token():
    expired = jwt.encode(
        {"userId": 1, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(expired)


def test_decode_rejects_foreign_signature():
    forged = jwt.encode({"userId": 1}, "some-other-secret-key-of-decent-length", algorithm="HS256")
    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(forged)


@pytest.mark.parametrize("error_cls, status_code, message", [
    (ValidationError, 400, "Invalid request"),
    (DuplicateEmailError, 400, "Email already in use"),
    (NotFoundError, 404, "User not found"),
    (InvalidCredentialsError, 400, "Invalid password"),
    (DatabaseError, 500, "Database error"),
    (PasswordHashingError, 500, "Password hashing error"),
])
def test_error_status_and_default_message(error_cls, status_code, message):
    err = error_cls()
    assert isinstance(err, AuthServiceError)
    assert err.status_code == status_code
    assert err.message == message
    assert str(err) == message
