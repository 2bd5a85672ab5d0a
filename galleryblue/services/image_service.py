"""Image upload, thumbnail generation, listing and owner-only edits."""
import logging
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.orm import Session

from galleryblue.core.user_context import require_current_user
from galleryblue.database import repository
from galleryblue.database.models import Image
from galleryblue.database.repository import ImageInfo
from galleryblue.utils.error_handling import (
    PermissionDeniedError,
    ResourceNotFoundError,
    ValidationError,
)
from galleryblue.utils.image_utils import generate_thumbnail

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
SUPPORTED_CONTENT_TYPE = "image/jpeg"

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


@dataclass
class ImagePage:
    """A page of listing projections and the unpaged total."""

    images: List[ImageInfo]
    total: int


@dataclass
class ImageDetail:
    """Full image record plus the owner's display name."""

    image: Image
    owner_display_name: Optional[str]


def upload_image(
    db: Session,
    owner_id: Optional[str],
    filename: str,
    content_type: str,
    data: bytes,
    title: Optional[str] = None,
    description: Optional[str] = None,
) -> Image:
    """
    Upload an image: validate, generate thumbnail, save to database.

    Original bytes, thumbnail and metadata go into a single row. A failed
    thumbnail never fails the upload; the row is stored without one.
    The caller must be an existing user.
    """
    # 1. Validate (fail fast, no side effects)
    owner_id = require_current_user(owner_id)
    if not filename:
        raise ValidationError("filename is required")
    if content_type != SUPPORTED_CONTENT_TYPE:
        raise ValidationError(
            f"unsupported content type: {content_type or '(none)'} (only {SUPPORTED_CONTENT_TYPE} is accepted)"
        )
    if not data:
        raise ValidationError("image data is required")
    if len(data) > MAX_FILE_SIZE:
        raise ValidationError(f"image too large: {len(data)} bytes (max {MAX_FILE_SIZE})")
    if repository.get_user_by_id(db, owner_id) is None:
        raise ResourceNotFoundError("user not found")

    # 2. Generate thumbnail (in-memory, no side effects)
    thumbnail = _thumbnail_or_none(data, content_type, filename)

    # 3. Save everything to database
    image = repository.create_image(
        db,
        owner_id=owner_id,
        filename=filename,
        content_type=content_type,
        data=data,
        thumbnail=thumbnail,
        title=title,
        description=description,
    )

    logger.info(
        f"Uploaded image: {image.filename} (id={image.id}, {len(data)} bytes, "
        f"thumbnail={'yes' if thumbnail else 'no'})"
    )
    return image


def _thumbnail_or_none(data: bytes, content_type: str, filename: str) -> Optional[bytes]:
    try:
        return generate_thumbnail(data, content_type)
    except Exception as e:
        # Any decode/resize/encode failure degrades to "no thumbnail"
        logger.warning(f"Failed to generate thumbnail for {filename}: {e}")
        return None


def get_image(db: Session, image_id: str) -> ImageDetail:
    """Fetch a full image record by id (public)."""
    if not image_id:
        raise ValidationError("image id is required")

    found = repository.get_image_with_owner(db, image_id)
    if found is None:
        raise ResourceNotFoundError("image not found")

    image, owner_display_name = found
    return ImageDetail(image=image, owner_display_name=owner_display_name)


def clamp_limit(limit: Optional[int]) -> int:
    """Page sizes outside (0, MAX_PAGE_SIZE] fall back to the default."""
    if limit is None or limit <= 0 or limit > MAX_PAGE_SIZE:
        return DEFAULT_PAGE_SIZE
    return limit


def list_images(db: Session, limit: Optional[int] = 0, offset: Optional[int] = 0) -> ImagePage:
    """Public gallery feed, newest first."""
    return _list(db, limit, offset, owner_id=None)


def list_my_images(
    db: Session,
    user_id: Optional[str],
    limit: Optional[int] = 0,
    offset: Optional[int] = 0,
) -> ImagePage:
    """Images owned by the caller, newest first."""
    user_id = require_current_user(user_id)
    return _list(db, limit, offset, owner_id=user_id)


def _list(db: Session, limit: Optional[int], offset: Optional[int], owner_id: Optional[str]) -> ImagePage:
    effective_limit = clamp_limit(limit)
    effective_offset = max(offset or 0, 0)
    images, total = repository.list_image_infos(
        db, limit=effective_limit, offset=effective_offset, owner_id=owner_id,
    )
    return ImagePage(images=images, total=total)


def _get_owned_image(db: Session, user_id: Optional[str], image_id: str, action: str) -> Image:
    """Resolve an image and check the caller owns it."""
    user_id = require_current_user(user_id)
    if not image_id:
        raise ValidationError("image id is required")

    owner_id = repository.get_image_owner(db, image_id)
    if owner_id is None:
        raise ResourceNotFoundError("image not found")
    if owner_id != user_id:
        logger.warning(f"User {user_id} attempted to {action} image {image_id} owned by {owner_id}")
        raise PermissionDeniedError(f"you can only {action} your own images")

    image = repository.get_image_by_id(db, image_id)
    if image is None:
        # Deleted between the owner lookup and now
        raise ResourceNotFoundError("image not found")
    return image


def update_image(
    db: Session,
    user_id: Optional[str],
    image_id: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
) -> Image:
    """Update title/description (owner only).

    ``None`` means "leave as is"; an empty string is stored as given.
    """
    image = _get_owned_image(db, user_id, image_id, "edit")

    new_title = title if title is not None else image.title
    new_description = description if description is not None else image.description

    image = repository.update_image(db, image, new_title, new_description)
    logger.info(f"Updated image metadata: id={image.id}")
    return image


def delete_image(db: Session, user_id: Optional[str], image_id: str) -> None:
    """Hard-delete an image (owner only)."""
    image = _get_owned_image(db, user_id, image_id, "delete")
    repository.delete_image(db, image)
    logger.info(f"Deleted image: {image_id}")
