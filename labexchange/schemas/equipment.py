"""Equipment listing schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from labexchange.core.sanitize import MAX_LENGTHS, sanitize_optional_text, sanitize_text
from labexchange.models.enums import AvailabilityStatus, CertificationStatus, Condition

# Fields a seller may change after creation. owner_id, created_at and
# availability_status are never written by the seller.
MUTABLE_FIELDS = (
    "name",
    "brand",
    "model",
    "description",
    "price",
    "condition",
    "category",
    "location",
)
REQUIRED_TEXT_FIELDS = ("name", "brand", "category")
OPTIONAL_TEXT_FIELDS = ("model", "description", "location")


class _SanitizedFields(BaseModel):
    """Runs free-text sanitization before the length and type checks."""

    @field_validator(*REQUIRED_TEXT_FIELDS, mode="before", check_fields=False)
    @classmethod
    def clean_required_text(cls, value, info):
        if value is None:
            return value
        return sanitize_text(value, MAX_LENGTHS[info.field_name])

    @field_validator(*OPTIONAL_TEXT_FIELDS, mode="before", check_fields=False)
    @classmethod
    def clean_optional_text(cls, value, info):
        return sanitize_optional_text(value, MAX_LENGTHS[info.field_name])


class EquipmentDraft(_SanitizedFields):
    """A listing as submitted by its seller, before the store assigns identity."""

    name: str = Field(..., min_length=3, max_length=255)
    brand: str = Field(..., min_length=2, max_length=255)
    model: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    price: float = Field(..., gt=0, allow_inf_nan=False)
    condition: Condition = Condition.GOOD
    category: str = Field(..., min_length=2, max_length=100)
    location: str | None = Field(None, max_length=255)


class EquipmentCreate(EquipmentDraft):
    """Create a new listing. Ownership and status come from the server."""


class EquipmentUpdate(_SanitizedFields):
    """Update the mutable fields of a listing; unset fields are left alone."""

    name: str | None = Field(None, min_length=3, max_length=255)
    brand: str | None = Field(None, min_length=2, max_length=255)
    model: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    price: float | None = Field(None, gt=0, allow_inf_nan=False)
    condition: Condition | None = None
    category: str | None = Field(None, min_length=2, max_length=100)
    location: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def required_fields_not_cleared(self) -> "EquipmentUpdate":
        for name in (*REQUIRED_TEXT_FIELDS, "price", "condition"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self


class SellerSummary(BaseModel):
    """Public part of a seller profile shown alongside listings."""

    model_config = ConfigDict(from_attributes=True)

    full_name: str | None = None
    company: str | None = None
    verified: bool = False


class EquipmentResponse(BaseModel):
    """Listing response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    brand: str
    model: str | None = None
    description: str | None = None
    price: float
    condition: Condition
    category: str
    certification_status: CertificationStatus = CertificationStatus.UNCERTIFIED
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    location: str | None = None
    images: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    seller: SellerSummary | None = None


class SellerContact(BaseModel):
    """Seller contact details, only handed out to signed-in buyers."""

    listing_id: int
    full_name: str | None = None
    email: str | None = None
