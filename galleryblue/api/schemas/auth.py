"""Messages for users.v1.AuthService."""
from galleryblue.api.schemas.common import ConnectMessage


class RegisterRequest(ConnectMessage):
    email: str = ""
    password: str = ""
    display_name: str = ""


class RegisterResponse(ConnectMessage):
    user_id: str
    display_name: str
    email: str


class LoginRequest(ConnectMessage):
    email: str = ""
    password: str = ""


class LoginResponse(ConnectMessage):
    session_token: str
    user_id: str
    display_name: str
    email: str
