"""Messages for users.v1.UserService."""
from typing import Optional

from galleryblue.api.schemas.common import ConnectMessage


class GetUserRequest(ConnectMessage):
    id: str = ""


class GetUserResponse(ConnectMessage):
    id: str
    name: str
    email: str


class UpdateUserRequest(ConnectMessage):
    """Optional fields that are absent keep their stored value."""

    current_password: str = ""
    new_display_name: Optional[str] = None
    new_email: Optional[str] = None
    new_password: Optional[str] = None


class UpdateUserResponse(ConnectMessage):
    user_id: str
    display_name: str
    email: str
