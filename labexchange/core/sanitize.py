"""Free-text sanitization applied before anything reaches storage."""

from collections.abc import Iterable, Mapping
from typing import Any

from labexchange.core.results import FieldError, Invalid, Valid

# Maximum stored length per free-text field
MAX_LENGTHS: dict[str, int] = {
    "name": 255,
    "brand": 255,
    "model": 255,
    "description": 5000,
    "category": 100,
    "location": 255,
    "full_name": 100,
    "company": 100,
}

DEFAULT_MAX_LENGTH = 255


def sanitize_text(value: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Trim a string and reject NUL characters or over-length input.

    Raises:
        ValueError: if the value is not a string, contains a NUL character,
            or is longer than ``max_length`` after trimming.
    """
    if not isinstance(value, str):
        raise ValueError("must be text")
    if "\x00" in value:
        raise ValueError("contains a disallowed null character")
    value = value.strip()
    if len(value) > max_length:
        raise ValueError(f"must be at most {max_length} characters")
    return value


def sanitize_optional_text(value: str | None, max_length: int = DEFAULT_MAX_LENGTH) -> str | None:
    """Like sanitize_text, but blank input normalizes to None."""
    if value is None:
        return None
    value = sanitize_text(value, max_length)
    return value or None


def sanitize_fields(
    raw: Mapping[str, Any],
    text_fields: Iterable[str],
    optional_fields: Iterable[str] = (),
) -> Valid[dict[str, Any]] | Invalid:
    """Sanitize every free-text field of a submitted form.

    Non-text fields (price, condition) pass through untouched for the
    validation step. All field problems are collected, not just the first.
    """
    optional = set(optional_fields)
    cleaned: dict[str, Any] = dict(raw)
    errors: list[FieldError] = []

    for name in text_fields:
        if name not in raw:
            continue
        max_length = MAX_LENGTHS.get(name, DEFAULT_MAX_LENGTH)
        try:
            if name in optional:
                cleaned[name] = sanitize_optional_text(raw[name], max_length)
            else:
                cleaned[name] = sanitize_text(raw[name], max_length)
        except ValueError as e:
            errors.append(FieldError(name, f"{name.replace('_', ' ').capitalize()} {e}"))

    if errors:
        return Invalid(errors)
    return Valid(cleaned)
