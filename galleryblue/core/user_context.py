"""Caller identity for request handling.

The caller is identified by the ``X-User-ID`` request header. The header is
trusted as-is: no session token is checked against it.
"""
import logging
from typing import Optional

from fastapi import Header

from galleryblue.utils.error_handling import AuthenticationError

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-ID"


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias=USER_ID_HEADER),
) -> Optional[str]:
    """FastAPI dependency returning the caller id, or None when absent."""
    if x_user_id is None:
        return None
    user_id = x_user_id.strip()
    return user_id or None


def require_current_user(user_id: Optional[str]) -> str:
    """Return the caller id or raise if the request is anonymous.

    Raises:
        AuthenticationError: If no caller id was supplied
    """
    if not user_id:
        raise AuthenticationError("authentication required")
    return user_id
