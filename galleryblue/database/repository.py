"""Query helpers for the ``users`` and ``images`` tables.

Plain parameterized reads and single-row writes, no business rules. Every
write commits its own transaction and rolls back if the commit fails, so a
failed call leaves the session usable and the database untouched.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from galleryblue.database.models import Image, User


@dataclass(frozen=True)
class ImageInfo:
    """Listing projection of an image: no original bytes, no description."""

    id: str
    owner_id: str
    owner_display_name: Optional[str]
    filename: str
    title: Optional[str]
    created_at: datetime
    thumbnail: Optional[bytes]


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


# ===== Users =====

def create_user(db: Session, email: str, password_hash: str, display_name: Optional[str]) -> User:
    """Insert a user. Unique violations surface as ``IntegrityError``."""
    user = User(email=email, password_hash=password_hash, display_name=display_name or None)
    db.add(user)
    _commit(db)
    db.refresh(user)
    return user


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def email_taken(db: Session, email: str, exclude_user_id: Optional[str] = None) -> bool:
    """True if another user already has *email*."""
    q = db.query(User.id).filter(User.email == email)
    if exclude_user_id is not None:
        q = q.filter(User.id != exclude_user_id)
    return q.first() is not None


def display_name_taken(db: Session, display_name: str, exclude_user_id: Optional[str] = None) -> bool:
    """True if another user already has *display_name*."""
    q = db.query(User.id).filter(User.display_name == display_name)
    if exclude_user_id is not None:
        q = q.filter(User.id != exclude_user_id)
    return q.first() is not None


def update_user(
    db: Session,
    user: User,
    display_name: Optional[str],
    email: str,
    password_hash: str,
) -> User:
    user.display_name = display_name or None
    user.email = email
    user.password_hash = password_hash
    _commit(db)
    db.refresh(user)
    return user


# ===== Images =====

def create_image(
    db: Session,
    owner_id: str,
    filename: str,
    content_type: str,
    data: bytes,
    thumbnail: Optional[bytes],
    title: Optional[str],
    description: Optional[str],
) -> Image:
    """Insert one image row holding both payloads and the metadata."""
    image = Image(
        owner_id=owner_id,
        filename=filename,
        content_type=content_type,
        data=data,
        thumbnail=thumbnail,
        title=title,
        description=description,
    )
    db.add(image)
    _commit(db)
    db.refresh(image)
    return image


def get_image_with_owner(db: Session, image_id: str) -> Optional[tuple[Image, Optional[str]]]:
    """Return ``(image, owner_display_name)`` or None."""
    row = (
        db.query(Image, User.display_name)
        .outerjoin(User, Image.owner_id == User.id)
        .filter(Image.id == image_id)
        .first()
    )
    if row is None:
        return None
    return row[0], row[1]


def get_image_by_id(db: Session, image_id: str) -> Optional[Image]:
    return db.query(Image).filter(Image.id == image_id).first()


def get_image_owner(db: Session, image_id: str) -> Optional[str]:
    """Owner id of an image, or None if the image does not exist."""
    row = db.query(Image.owner_id).filter(Image.id == image_id).first()
    return row[0] if row else None


def list_image_infos(
    db: Session,
    limit: int,
    offset: int,
    owner_id: Optional[str] = None,
) -> tuple[list[ImageInfo], int]:
    """One page of images, newest first, plus the total matching count.

    The count uses the same owner predicate as the page query and ignores
    ``limit``/``offset``.
    """
    q = db.query(
        Image.id,
        Image.owner_id,
        User.display_name,
        Image.filename,
        Image.title,
        Image.created_at,
        Image.thumbnail,
    ).outerjoin(User, Image.owner_id == User.id)
    count_q = db.query(func.count(Image.id))

    if owner_id is not None:
        q = q.filter(Image.owner_id == owner_id)
        count_q = count_q.filter(Image.owner_id == owner_id)

    rows = (
        q.order_by(Image.created_at.desc(), Image.id.desc())
        .limit(limit)
        .offset(offset)
        .all()
    )
    total = count_q.scalar() or 0

    images = [
        ImageInfo(
            id=r.id,
            owner_id=r.owner_id,
            owner_display_name=r.display_name,
            filename=r.filename,
            title=r.title,
            created_at=r.created_at,
            thumbnail=r.thumbnail,
        )
        for r in rows
    ]
    return images, total


def update_image(db: Session, image: Image, title: Optional[str], description: Optional[str]) -> Image:
    image.title = title
    image.description = description
    _commit(db)
    db.refresh(image)
    return image


def delete_image(db: Session, image: Image) -> None:
    db.delete(image)
    _commit(db)
