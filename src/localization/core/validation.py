"""Input checks shared by the translation and glossary layers.

The bounds and enumerations themselves live as constants next to the models
that own them; these helpers turn a violation into a ValidationError naming
the offending field.
"""

from enum import Enum
from typing import TypeVar

from localization.core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_text(value: str | None, field: str, max_length: int) -> str:
    """Require a non-blank string no longer than `max_length`."""
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    if len(value) > max_length:
        raise ValidationError(
            f"{field} must be at most {max_length} characters", field=field
        )
    return value


def optional_text(value: str | None, field: str, max_length: int) -> str | None:
    if value is not None and len(value) > max_length:
        raise ValidationError(
            f"{field} must be at most {max_length} characters", field=field
        )
    return value


def parse_choice(enum_cls: type[E], value: str | E, field: str) -> E:
    """Coerce `value` to a member of `enum_cls`."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(
            f"Invalid {field} '{value}'. Must be one of: {allowed}", field=field
        ) from None


def require_non_negative(value: int, field: str) -> int:
    if value < 0:
        raise ValidationError(f"{field} must not be negative", field=field)
    return value
