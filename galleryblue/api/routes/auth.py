"""users.v1.AuthService: account registration and login."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from galleryblue.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from galleryblue.core.database import get_db
from galleryblue.services import auth_service
from galleryblue.utils.error_handling import InternalError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users.v1.AuthService", tags=["auth"])


@router.post("/Register", response_model=RegisterResponse)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create a new account."""
    try:
        user = auth_service.register(
            db,
            email=request.email,
            password=request.password,
            display_name=request.display_name,
        )
    except SQLAlchemyError as e:
        logger.error(f"Error registering user: {e}", exc_info=True)
        raise InternalError("failed to create user") from e

    return RegisterResponse(
        user_id=user.id,
        display_name=user.display_name or "",
        email=user.email,
    )


@router.post("/Login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate with email and password and receive a session token."""
    try:
        result = auth_service.login(db, email=request.email, password=request.password)
    except SQLAlchemyError as e:
        logger.error(f"Error during login: {e}", exc_info=True)
        raise InternalError("database error") from e

    return LoginResponse(
        session_token=result.session_token,
        user_id=result.user.id,
        display_name=result.user.display_name or "",
        email=result.user.email,
    )
