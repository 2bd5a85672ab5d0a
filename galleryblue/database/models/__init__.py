"""Database models."""

from galleryblue.database.models.image import Image
from galleryblue.database.models.user import User

__all__ = [
    "Image",
    "User",
]
