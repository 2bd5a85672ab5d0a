"""User account model."""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from galleryblue.core.database import Base


class User(Base):
    """Registered account.

    Email is always unique. Display name is optional and stored as NULL when
    empty, so the unique constraint only applies to names actually chosen.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(255), unique=True, nullable=True)
    password_hash = Column(String(255), nullable=False)  # bcrypt, cost and salt embedded

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    images = relationship("Image", back_populates="owner")

    def __repr__(self):
        return f"<User(id='{self.id}', email='{self.email}')>"
