"""Field format checks for the account and application forms.

Every function returns ``None`` when the value is acceptable and raises
:class:`~lpg_connect.errors.ValidationError` otherwise. The error message is
meant to be shown to the user as-is.
"""

import re
from typing import Optional

from lpg_connect.errors import ValidationError

MOBILE_PATTERN = re.compile(r"[0-9]{10}")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def validate_mobile(mobile: Optional[str]) -> None:
    """Require exactly ten ASCII digits and nothing else.

    Raises:
        ValidationError: If the value is missing or not ten digits.
    """
    if mobile is None or not MOBILE_PATTERN.fullmatch(mobile):
        raise ValidationError("Mobile number must be exactly 10 digits.")


def validate_positive_integer(
    value: Optional[str], field_name: str = "Number of Connections"
) -> None:
    """Require a base-10 32-bit integer greater than zero.

    A value that does not parse and a value that parses but is not positive
    raise the same error type with different messages.

    Raises:
        ValidationError: If the value is not a 32-bit integer or is <= 0.
    """
    if value is None or not INTEGER_PATTERN.fullmatch(value):
        raise ValidationError(f"{field_name} must be a valid integer.")
    try:
        number = int(value)
    except ValueError:
        # longer than the interpreter will convert
        raise ValidationError(f"{field_name} must be a valid integer.") from None
    if not INT_MIN <= number <= INT_MAX:
        raise ValidationError(f"{field_name} must be a valid integer.")
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive number.")


def validate_non_empty(value: Optional[str], field_name: str) -> None:
    """Reject ``None``, empty and whitespace-only strings.

    Raises:
        ValidationError: Naming ``field_name`` in the message.
    """
    if value is None or not value.strip():
        raise ValidationError(f"{field_name} cannot be empty.")
