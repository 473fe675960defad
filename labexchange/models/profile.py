"""Seller profile model."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from labexchange.database import Base
from labexchange.models.mixins import TimestampMixin


class Profile(Base, TimestampMixin):
    """Seller profile, one-to-one with a user. Rows are created lazily."""

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    full_name = Column(String(100), nullable=True)
    company = Column(String(100), nullable=True)
    verified = Column(Boolean, nullable=False, default=False)  # admin-controlled

    # Relationships
    user = relationship("User", back_populates="profile")

    @property
    def email(self) -> str | None:
        return self.user.email if self.user else None
