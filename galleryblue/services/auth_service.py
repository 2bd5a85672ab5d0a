"""Account registration and password login."""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from galleryblue.core.security import (
    MAX_PASSWORD_BYTES,
    generate_session_token,
    hash_password,
    verify_password,
)
from galleryblue.database import repository
from galleryblue.database.models import User
from galleryblue.utils.error_handling import (
    AlreadyExistsError,
    AuthenticationError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    """Outcome of a successful login."""

    session_token: str
    user: User


def validate_password(password: str) -> None:
    """Reject passwords bcrypt cannot hash."""
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")


def conflict_error(
    db: Session,
    email: Optional[str],
    display_name: Optional[str],
    exclude_user_id: Optional[str] = None,
) -> AlreadyExistsError:
    """Work out which unique field an insert/update collided on."""
    if email and repository.email_taken(db, email, exclude_user_id):
        return AlreadyExistsError("user with this email already exists")
    if display_name and repository.display_name_taken(db, display_name, exclude_user_id):
        return AlreadyExistsError("user with this display name already exists")
    return AlreadyExistsError("user already exists")


def register(db: Session, email: str, password: str, display_name: Optional[str] = None) -> User:
    """
    Create an account.

    Uniqueness of email and display name is enforced by the database, so two
    concurrent registrations for the same email end with exactly one winner.
    """
    if not email or not password:
        raise ValidationError("email and password are required")
    validate_password(password)

    try:
        user = repository.create_user(
            db,
            email=email,
            password_hash=hash_password(password),
            display_name=display_name or None,
        )
    except IntegrityError as e:
        logger.info(f"Registration rejected for {email}: unique constraint violated")
        raise conflict_error(db, email, display_name) from e

    logger.info(f"Registered user: id={user.id}")
    return user


def login(db: Session, email: str, password: str) -> LoginResult:
    """Check credentials and issue a session token.

    Unknown email and wrong password produce the same error.
    """
    if not email or not password:
        raise ValidationError("email and password are required")

    user = repository.get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError("invalid email or password")

    # TODO: persist tokens server-side once sessions are validated on ingress
    token = generate_session_token()
    logger.info(f"User logged in: id={user.id}")
    return LoginResult(session_token=token, user=user)
