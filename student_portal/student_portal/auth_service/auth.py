from passlib.context import CryptContext
from passlib.exc import PasswordValueError
from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import json
import logging
import re
import jwt

from .config import settings
from .errors import (
    ValidationError,
    DuplicateEmailError,
    NotFoundError,
    InvalidCredentialsError,
    DatabaseError,
    PasswordHashingError,
)
from .models import User
from .schemas import UserCreate, UserLogin

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,6}$")
MIN_PHONE_LENGTH = 10

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def validate_email(email: str) -> None:
    if not email or not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError("Invalid email format")


def validate_phone_number(phone_number: str) -> None:
    if phone_number is None or len(phone_number) < MIN_PHONE_LENGTH:
        raise ValidationError(f"Phone number must be at least {MIN_PHONE_LENGTH} characters long")


def hash_password(password: str) -> str:
    try:
        return pwd_context.hash(password)
    except (ValueError, TypeError) as e:
        raise PasswordHashingError("Password hashing error") from e


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    Returns False for a mismatch, including a submitted password bcrypt
    refuses to hash.

    Raises:
        PasswordHashingError: if the stored hash is unreadable
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except PasswordValueError:
        # submitted secret bcrypt cannot take (NUL byte); treat as a mismatch
        return False
    except (ValueError, TypeError) as e:
        raise PasswordHashingError("Password comparison error") from e


def create_access_token(user_id: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    Verify signature and expiry of a token issued by ``create_access_token``.

    Raises:
        jwt.InvalidTokenError: on a bad signature, malformed or expired token
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def register_user(payload: UserCreate, db: Session) -> User:
    """
    Validate a signup payload and insert the new user.

    Email and phone checks run before any query. The email lookup runs before
    the insert; the unique constraint on ``users.email`` catches a concurrent
    signup that slips between the two.

    Raises:
        ValidationError: bad email format or short phone number
        DuplicateEmailError: email already registered
        PasswordHashingError: hashing failed
        DatabaseError: any other database failure
    """
    validate_email(payload.email)
    validate_phone_number(payload.phone_number)

    try:
        existing = db.query(User).filter(User.email == payload.email).first()
    except SQLAlchemyError as e:
        logger.exception("Query error while checking email %s", payload.email)
        raise DatabaseError() from e
    if existing:
        raise DuplicateEmailError()

    hashed_pw = hash_password(payload.password)

    new_user = User(
        first_name=payload.first_name,
        last_name=payload.last_name,
        email=payload.email,
        password=hashed_pw,
        phone_number=payload.phone_number,
        date_of_birth=payload.date_of_birth,
        gender=payload.gender,
        class_name=payload.class_name,
        school_name=payload.school_name,
        description=payload.description,
        exams=json.dumps(payload.exams) if payload.exams is not None else None,
    )
    try:
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEmailError() from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Insert error for %s", payload.email)
        raise DatabaseError() from e

    return new_user


def authenticate_user(credentials: UserLogin, db: Session) -> User:
    """
    Look up a user by email and check the password.

    Raises:
        NotFoundError: no user with that email
        InvalidCredentialsError: password does not match
        PasswordHashingError: stored hash is unreadable
        DatabaseError: lookup failed
    """
    try:
        user = db.query(User).filter(User.email == credentials.email).first()
    except SQLAlchemyError as e:
        logger.exception("Query error while looking up %s", credentials.email)
        raise DatabaseError() from e
    if not user:
        raise NotFoundError()

    if not verify_password(credentials.password, user.password):
        raise InvalidCredentialsError()

    return user
