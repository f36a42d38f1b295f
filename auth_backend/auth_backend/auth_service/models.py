from sqlalchemy import Column, String, ForeignKey, DateTime, Integer
from datetime import datetime, timezone
from sqlalchemy.orm import relationship
from .db import Base
import uuid


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value):
    """Attach UTC to naive datetimes; SQLite returns stored values without an offset."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, index=True, nullable=False)
    phone_number = Column(String, unique=True, index=True, nullable=False)
    # bcrypt digest, never the plaintext
    password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    details = relationship(
        "UserDetails",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="joined",
    )

    @property
    def full_name(self):
        return self.details.full_name if self.details else None

    def to_public_dict(self) -> dict:
        """
        Fields that may leave the service. The password digest is never included.
        """
        return {
            "id": self.id,
            "email": self.email,
            "phone_number": self.phone_number,
            "full_name": self.full_name,
            "created_at": as_utc(self.created_at),
            "updated_at": as_utc(self.updated_at),
        }


class UserDetails(Base):
    __tablename__ = "user_details"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    full_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="details")
