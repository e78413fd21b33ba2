"""Account sign-up and credential checks."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ..errors import AuthError, ErrorKind, ValidationError
from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models.user import User

_hasher = PasswordHasher()
MIN_PASSWORD_LENGTH = 6

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _validate_credentials(email: str, password: str) -> None:
    errors: dict[str, list[str]] = {}
    if "@" not in email:
        errors.setdefault("email", []).append("Enter a valid email address.")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors.setdefault("password", []).append(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        )
    if errors:
        raise ValidationError(errors)


def get_user_by_email(email: str, session_factory: SessionFactory) -> Optional[User]:
    """Fetch a user by email."""
    email = normalize_email(email)
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user:
            session.expunge(user)
        return user


def sign_up(*, email: str, password: str, session_factory: SessionFactory) -> User:
    """Create a new user with an argon2 password hash."""

    email = normalize_email(email)
    _validate_credentials(email, password)
    password_hash = _hasher.hash(password)
    try:
        with session_factory() as session:
            existing = session.exec(select(User).where(User.email == email)).first()
            if existing:
                raise ValidationError({"email": ["An account with this email already exists."]})
            user = User(email=email, password_hash=password_hash)
            session.add(user)
            session.flush()
            session.refresh(user)
            session.expunge(user)
    except IntegrityError as exc:
        # Lost a race with a concurrent sign-up for the same address.
        raise ValidationError({"email": ["An account with this email already exists."]}) from exc
    logger.info("User signed up", extra={"owner_id": user.id})
    return user


def sign_in(*, email: str, password: str, session_factory: SessionFactory) -> User:
    """Validate credentials and return the user, raising ``AuthError`` otherwise."""

    email = normalize_email(email)
    if not email or not password:
        raise AuthError("Email and password are required.")
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == email)).first()
        if user is None:
            raise AuthError("Invalid email or password.")
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError) as exc:
            raise AuthError("Invalid email or password.") from exc

        if _hasher.check_needs_rehash(user.password_hash):
            user.password_hash = _hasher.hash(password)
        user.last_login = datetime.now()
        session.add(user)
        session.flush()
        session.refresh(user)
        session.expunge(user)
    logger.info("User signed in", extra={"owner_id": user.id})
    return user


def require_owner(owner_id: Optional[str]) -> str:
    """Return ``owner_id`` or raise when no user is signed in."""

    if not owner_id:
        raise AuthError("Sign in to continue.", kind=ErrorKind.UNAUTHENTICATED)
    return owner_id
