"""Identifier checks shared by every command that takes a record id."""

from uuid import UUID

from protean.exceptions import ValidationError


def is_valid_identifier(value) -> bool:
    if value is None:
        return False
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


def ensure_identifier(value, label: str) -> str:
    """Return ``value`` as a canonical identifier string.

    Raises ``ValidationError`` keyed on ``<label>_id`` with the message
    ``Invalid <label> ID`` when the value is not a well-formed identifier.
    """
    if not is_valid_identifier(value):
        raise ValidationError({f"{label}_id": [f"Invalid {label} ID"]})
    return str(UUID(str(value)))


class IdentifierListValidator:
    """Field validator: every item of a list must be a well-formed identifier."""

    def __init__(self, label: str) -> None:
        self.message = f"Invalid {label} ID"

    def __call__(self, values) -> None:
        if not all(is_valid_identifier(value) for value in values):
            raise ValidationError(self.message)
