"""Seller profile schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from labexchange.core.sanitize import MAX_LENGTHS, sanitize_optional_text, sanitize_text

# Letters (any script), spaces, hyphens and apostrophes
FULL_NAME_PATTERN = re.compile(r"(?:[^\W\d_]|[ '\-])+")


class ProfileUpdate(BaseModel):
    """Fields a seller may edit on their own profile."""

    full_name: str = Field(..., min_length=2, max_length=100)
    company: str | None = Field(None, max_length=100)

    @field_validator("full_name", mode="before")
    @classmethod
    def clean_full_name(cls, value):
        return sanitize_text(value, MAX_LENGTHS["full_name"])

    @field_validator("full_name")
    @classmethod
    def check_full_name_characters(cls, value: str) -> str:
        if not FULL_NAME_PATTERN.fullmatch(value):
            raise ValueError("may only contain letters, spaces, hyphens and apostrophes")
        return value

    @field_validator("company", mode="before")
    @classmethod
    def clean_company(cls, value):
        return sanitize_optional_text(value, MAX_LENGTHS["company"])


class ProfileResponse(BaseModel):
    """Profile response. email and verified are read-only."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    full_name: str | None = None
    company: str | None = None
    verified: bool = False
    email: str | None = None
    updated_at: datetime


class ProfileLookup(BaseModel):
    """Result of a profile read; profile is None when no row exists yet."""

    profile: ProfileResponse | None = None
