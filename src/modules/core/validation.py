"""Explicit, side-effect free field validation.

Entity validators build a list of ``Violation`` objects with the helpers
below and return it; callers decide whether to raise.  Nothing here touches
the database.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Optional

from django.core.exceptions import ValidationError
from django.core.validators import validate_email


@dataclass(frozen=True)
class Violation:
    """A single broken rule on a single field."""

    field: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


def check_text(
    field: str,
    value: Optional[str],
    *,
    label: str,
    max_length: int,
    min_length: Optional[int] = None,
    required: bool = True,
) -> List[Violation]:
    """Validate a string for presence and length bounds.

    Blank means ``None`` or whitespace only.  With ``min_length`` the length
    message reads "between <min> and <max> characters", otherwise
    "max <max> characters".
    """
    if value is None or not str(value).strip():
        if required:
            return [Violation(field, f"{label} cannot be blank")]
        return []

    length = len(value)
    if min_length is not None:
        if not min_length <= length <= max_length:
            return [
                Violation(
                    field,
                    f"{label} must be between {min_length} and {max_length} characters",
                )
            ]
    elif length > max_length:
        return [Violation(field, f"{label} must be max {max_length} characters")]
    return []


def check_email(field: str, value: Optional[str], *, label: str = "Email") -> List[Violation]:
    if value is None or not value.strip():
        return [Violation(field, f"{label} cannot be blank")]
    try:
        validate_email(value)
    except ValidationError:
        return [Violation(field, f"{label} must be a well-formed email address")]
    if len(value) > 255:
        return [Violation(field, f"{label} must be max 255 characters")]
    return []


def check_decimal_min(
    field: str, value: Any, *, label: str, minimum: Decimal, message: str
) -> List[Violation]:
    if value is None:
        return [Violation(field, f"{label} cannot be null")]
    try:
        amount = Decimal(value)
    except (ArithmeticError, TypeError, ValueError):
        return [Violation(field, f"{label} must be a decimal number")]
    if not amount.is_finite() or amount < minimum:
        return [Violation(field, message)]
    return []


def check_non_negative_int(field: str, value: Any, *, label: str) -> List[Violation]:
    if value is None:
        return [Violation(field, f"{label} cannot be null")]
    if isinstance(value, bool) or not isinstance(value, int):
        return [Violation(field, f"{label} must be an integer")]
    if value < 0:
        return [Violation(field, f"{label} cannot be negative")]
    return []


def check_choice(field: str, value: Any, *, label: str, choices: Any) -> List[Violation]:
    if value not in choices.values:
        allowed = ", ".join(str(v) for v in choices.values)
        return [Violation(field, f"{label} must be one of: {allowed}")]
    return []
