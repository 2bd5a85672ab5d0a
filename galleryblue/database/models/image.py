"""Image model: original bytes and thumbnail stored together in one row."""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, LargeBinary, String, Text
from sqlalchemy.orm import relationship

from galleryblue.core.database import Base


class Image(Base):
    """Uploaded image with binary data stored directly in the database.

    ``data`` holds the original upload (bytea on PostgreSQL, max 5MB enforced
    at application level). ``thumbnail`` holds a JPEG no larger than 300x200,
    or NULL when it could not be generated.
    """

    __tablename__ = "images"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    filename = Column(String(255), nullable=False)
    content_type = Column(String(50), nullable=False)  # always image/jpeg for now

    data = Column(LargeBinary, nullable=False)
    thumbnail = Column(LargeBinary, nullable=True)

    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    owner = relationship("User", back_populates="images")

    __table_args__ = (
        Index("ix_images_created_at", "created_at"),
        Index("ix_images_owner_created_at", "owner_id", "created_at"),
    )

    def __repr__(self):
        return f"<Image(id='{self.id}', filename='{self.filename}', owner_id='{self.owner_id}')>"
