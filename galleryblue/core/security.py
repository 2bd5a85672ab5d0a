"""Password hashing and session token generation."""
import logging
import secrets
from typing import Optional

import bcrypt

from galleryblue.core.settings import get_settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72
SESSION_TOKEN_BYTES = 32


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash *password* with a fresh salt; the cost is embedded in the digest."""
    if rounds is None:
        rounds = get_settings().security.bcrypt_rounds
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if *password* matches the stored bcrypt digest."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long password
        logger.warning("Password verification failed on an unusable hash or password")
        return False


def generate_session_token() -> str:
    """Random bearer token, hex encoded."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)
