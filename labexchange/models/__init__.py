"""SQLAlchemy models."""

from labexchange.models.equipment import Equipment
from labexchange.models.profile import Profile
from labexchange.models.user import User

__all__ = [
    "User",
    "Profile",
    "Equipment",
]
