"""users.v1.UserService: profile lookup and update."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from galleryblue.api.schemas.users import (
    GetUserRequest,
    GetUserResponse,
    UpdateUserRequest,
    UpdateUserResponse,
)
from galleryblue.core.database import get_db
from galleryblue.core.user_context import get_current_user_id
from galleryblue.services import user_service
from galleryblue.utils.error_handling import InternalError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users.v1.UserService", tags=["users"])


@router.post("/GetUser", response_model=GetUserResponse)
def get_user(request: GetUserRequest, db: Session = Depends(get_db)):
    """Get a user's public profile by id."""
    try:
        user = user_service.get_user(db, request.id)
    except SQLAlchemyError as e:
        logger.error(f"Error getting user {request.id}: {e}", exc_info=True)
        raise InternalError("database error") from e

    return GetUserResponse(id=user.id, name=user.display_name or "", email=user.email)


@router.post("/UpdateUser", response_model=UpdateUserResponse)
def update_user(
    request: UpdateUserRequest,
    db: Session = Depends(get_db),
    user_id: Optional[str] = Depends(get_current_user_id),
):
    """Update the caller's display name, email or password."""
    try:
        user = user_service.update_user(
            db,
            user_id=user_id,
            current_password=request.current_password,
            new_display_name=request.new_display_name,
            new_email=request.new_email,
            new_password=request.new_password,
        )
    except SQLAlchemyError as e:
        logger.error(f"Error updating user {user_id}: {e}", exc_info=True)
        raise InternalError("failed to update user") from e

    return UpdateUserResponse(
        user_id=user.id,
        display_name=user.display_name or "",
        email=user.email,
    )
