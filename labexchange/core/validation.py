"""Listing and profile form validation.

Each form goes through two steps: free-text sanitization (see
``labexchange.core.sanitize``) and then the pydantic schema shared with the
backend. Both steps report problems as a list of ``FieldError`` so a form can
show them inline; nothing here touches the network.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from labexchange.core.results import FieldError, Invalid, Valid
from labexchange.core.sanitize import sanitize_fields
from labexchange.schemas.equipment import (
    OPTIONAL_TEXT_FIELDS,
    REQUIRED_TEXT_FIELDS,
    EquipmentDraft,
)
from labexchange.schemas.profile import ProfileUpdate

# Friendly messages for the common failures of each field
_FIELD_MESSAGES: dict[tuple[str, str], str] = {
    ("name", "string_too_short"): "Name must be at least 3 characters long",
    ("name", "missing"): "Name must be at least 3 characters long",
    ("brand", "string_too_short"): "Brand is required",
    ("brand", "missing"): "Brand is required",
    ("category", "string_too_short"): "Category is required",
    ("category", "missing"): "Category is required",
    ("price", "greater_than"): "Price must be a positive number",
    ("price", "float_parsing"): "Price must be a positive number",
    ("price", "float_type"): "Price must be a positive number",
    ("price", "finite_number"): "Price must be a positive number",
    ("price", "missing"): "Price must be a positive number",
    ("condition", "enum"): "Condition must be one of: new, excellent, good, fair, poor",
    ("full_name", "string_too_short"): "Full name must be at least 2 characters.",
    ("full_name", "missing"): "Full name must be at least 2 characters.",
}


def _field_errors(exc: PydanticValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "__all__"
        message = _FIELD_MESSAGES.get((field, error["type"]))
        if message is None:
            message = error["msg"].removeprefix("Value error, ")
            if error["type"] == "value_error":
                message = f"{field.replace('_', ' ').capitalize()} {message}"
        errors.append(FieldError(field, message))
    return errors


def _validate(
    schema: type[BaseModel],
    raw: Mapping[str, Any],
    text_fields: tuple[str, ...],
    optional_fields: tuple[str, ...],
) -> Valid[Any] | Invalid:
    sanitized = sanitize_fields(raw, text_fields, optional_fields)
    if isinstance(sanitized, Invalid):
        return sanitized
    try:
        return Valid(schema.model_validate(sanitized.value))
    except PydanticValidationError as e:
        return Invalid(_field_errors(e))


def validate_listing_draft(raw: Mapping[str, Any]) -> Valid[EquipmentDraft] | Invalid:
    """Sanitize and validate a submitted listing form."""
    return _validate(
        EquipmentDraft,
        raw,
        REQUIRED_TEXT_FIELDS + OPTIONAL_TEXT_FIELDS,
        OPTIONAL_TEXT_FIELDS,
    )


def validate_profile_update(raw: Mapping[str, Any]) -> Valid[ProfileUpdate] | Invalid:
    """Sanitize and validate a submitted profile form."""
    return _validate(ProfileUpdate, raw, ("full_name", "company"), ("company",))
