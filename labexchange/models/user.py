"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from labexchange.database import Base
from labexchange.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Account that owns listings and, optionally, a seller profile."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Relationships
    profile = relationship("Profile", back_populates="user", uselist=False)
    equipment = relationship("Equipment", back_populates="owner")
