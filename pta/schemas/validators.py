"""Custom validators and types."""

import re
from typing import Annotated

from pydantic import AfterValidator, EmailStr, Field

# Optional leading +, then 7-15 digits once separators are stripped
CONTACT_NUMBER_PATTERN = re.compile(r"^\+?[0-9]{7,15}$")


def validate_contact_number(value: str) -> str:
    """
    Validate and normalize a contact phone number.

    Accepts formats:
    - +639171234567
    - +63 917 123 4567
    - (0917) 123-4567

    Returns the number without spaces, dashes or parentheses.
    """
    normalized = re.sub(r"[\s\-\(\)\.]", "", value)

    if not CONTACT_NUMBER_PATTERN.match(normalized):
        raise ValueError(
            "Invalid contact number. Use 7-15 digits with an optional leading + (e.g., +63 917 123 4567)"
        )

    return normalized


def lowercase_email(value: str) -> str:
    """Lowercase an email address that EmailStr already validated."""
    return value.lower()


def reject_null(value):
    """Reject an explicit null for a column that cannot be empty."""
    if value is None:
        raise ValueError("Field cannot be null")
    return value


# Annotated types
ContactNumber = Annotated[
    str,
    Field(min_length=7, max_length=30),
    AfterValidator(validate_contact_number),
]

Email = Annotated[
    EmailStr,
    AfterValidator(lowercase_email),
]
