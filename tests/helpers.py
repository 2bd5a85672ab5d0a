"""Database helpers for building test rows with sensible defaults."""
import base64
import io
import uuid
from datetime import datetime

from PIL import Image as PILImage

from galleryblue.core.security import hash_password
from galleryblue.database.models import Image, User

DEFAULT_PASSWORD = "correct horse battery staple"


def make_jpeg(width: int, height: int, color=(0, 128, 255), mode: str = "RGB") -> bytes:
    """Encode a solid-colour JPEG of the given size."""
    buf = io.BytesIO()
    PILImage.new(mode, (width, height), color=color).save(buf, format="JPEG")
    return buf.getvalue()


def create_test_user(db_session, password: str = DEFAULT_PASSWORD, **overrides) -> User:
    """Insert a User; email and display name are unique per call by default."""
    suffix = uuid.uuid4().hex[:8]
    defaults = dict(
        email=f"user-{suffix}@example.com",
        display_name=f"user-{suffix}",
        password_hash=hash_password(password, rounds=4),
    )
    defaults.update(overrides)
    user = User(**defaults)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def create_test_image(db_session, owner: User, **overrides) -> Image:
    """Insert an Image owned by *owner* without going through the pipeline."""
    defaults = dict(
        owner_id=owner.id,
        filename="test.jpg",
        content_type="image/jpeg",
        data=b"\xff\xd8\xff" + b"\x00" * 100,  # JPEG-like bytes
        thumbnail=b"\xff\xd8\xff\xe0thumb",
        title="Test image",
        description="Test description",
        created_at=datetime.utcnow(),
        updated_at=datetime.utcnow(),
    )
    defaults.update(overrides)
    image = Image(**defaults)
    db_session.add(image)
    db_session.commit()
    db_session.refresh(image)
    return image


def as_user(user: User) -> dict:
    """Request headers identifying *user* as the caller."""
    return {"X-User-ID": user.id}


def b64(content: bytes) -> str:
    return base64.b64encode(content).decode("ascii")
