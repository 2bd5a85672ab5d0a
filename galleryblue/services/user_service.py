"""Profile lookup and self-service profile updates."""
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from galleryblue.core.security import hash_password, verify_password
from galleryblue.core.user_context import require_current_user
from galleryblue.database import repository
from galleryblue.database.models import User
from galleryblue.services.auth_service import conflict_error, validate_password
from galleryblue.utils.error_handling import (
    AlreadyExistsError,
    PermissionDeniedError,
    ResourceNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: str) -> User:
    if not user_id:
        raise ValidationError("user id is required")
    user = repository.get_user_by_id(db, user_id)
    if user is None:
        raise ResourceNotFoundError("user not found")
    return user


def update_user(
    db: Session,
    user_id: Optional[str],
    current_password: str,
    new_display_name: Optional[str] = None,
    new_email: Optional[str] = None,
    new_password: Optional[str] = None,
) -> User:
    """
    Update the caller's own profile after re-checking their password.

    Fields left as None or empty keep their current value.

    Raises:
        AuthenticationError: No caller id
        ValidationError: Missing current password or unusable new password
        ResourceNotFoundError: Caller id does not match a user
        PermissionDeniedError: Current password is wrong
        AlreadyExistsError: New email/display name belongs to someone else
    """
    user_id = require_current_user(user_id)
    if not current_password:
        raise ValidationError("current password is required")

    user = repository.get_user_by_id(db, user_id)
    if user is None:
        raise ResourceNotFoundError("user not found")
    if not verify_password(current_password, user.password_hash):
        raise PermissionDeniedError("incorrect password")

    display_name = user.display_name
    email = user.email
    password_hash = user.password_hash

    if new_display_name:
        if repository.display_name_taken(db, new_display_name, exclude_user_id=user_id):
            raise AlreadyExistsError("display name already taken")
        display_name = new_display_name

    if new_email:
        if repository.email_taken(db, new_email, exclude_user_id=user_id):
            raise AlreadyExistsError("email already taken")
        email = new_email

    if new_password:
        validate_password(new_password)
        password_hash = hash_password(new_password)

    try:
        user = repository.update_user(db, user, display_name, email, password_hash)
    except IntegrityError as e:
        raise conflict_error(db, new_email, new_display_name, exclude_user_id=user_id) from e

    logger.info(f"Updated user profile: id={user.id}")
    return user
