"""Equipment listing model."""

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from labexchange.database import Base
from labexchange.models.enums import AvailabilityStatus, CertificationStatus
from labexchange.models.mixins import TimestampMixin


class Equipment(Base, TimestampMixin):
    """A single piece of used laboratory equipment offered for sale."""

    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=False)
    model = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    condition = Column(String(20), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    certification_status = Column(
        String(20), nullable=False, default=CertificationStatus.UNCERTIFIED.value
    )
    availability_status = Column(
        String(20), nullable=False, default=AvailabilityStatus.AVAILABLE.value, index=True
    )
    location = Column(String(255), nullable=True)
    images = Column(JSON, nullable=False, default=list)  # ordered image URIs
    tags = Column(JSON, nullable=False, default=list)

    # Relationships
    owner = relationship("User", back_populates="equipment")

    @property
    def seller(self):
        """Owner's public profile, or None when no profile row exists yet."""
        return self.owner.profile if self.owner else None
