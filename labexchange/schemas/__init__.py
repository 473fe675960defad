"""Pydantic schemas for API requests and responses."""

from labexchange.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse
from labexchange.schemas.equipment import (
    EquipmentCreate,
    EquipmentDraft,
    EquipmentResponse,
    EquipmentUpdate,
    SellerContact,
    SellerSummary,
)
from labexchange.schemas.profile import ProfileLookup, ProfileResponse, ProfileUpdate

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "EquipmentDraft",
    "EquipmentCreate",
    "EquipmentUpdate",
    "EquipmentResponse",
    "SellerSummary",
    "SellerContact",
    "ProfileUpdate",
    "ProfileResponse",
    "ProfileLookup",
]
