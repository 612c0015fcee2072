"""Cross-module exceptions and the DRF error envelope.

Every error leaving the API has the shape::

    {"type": "<category>", "errors": [{"code": "...", "detail": "..."}]}
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from rest_framework import status as http_status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.validation import Violation


class EntityValidationError(Exception):
    """An entity failed its validation pass; nothing was written."""

    def __init__(self, violations: Iterable[Violation]) -> None:
        self.violations: List[Violation] = list(violations)
        super().__init__("; ".join(v.message for v in self.violations))


def error_response(
    code: str,
    detail: str,
    status: int,
    *,
    type_: Optional[str] = None,
    headers: Optional[dict[str, str]] = None,
) -> Response:
    """Build a single-error response in the standard envelope."""
    return Response(
        {
            "type": type_ or code,
            "errors": [{"code": code, "detail": detail}],
        },
        status=status,
        headers=headers,
    )


def _flatten(detail: Any, prefix: str = "") -> List[dict[str, str]]:
    if isinstance(detail, dict):
        errors: List[dict[str, str]] = []
        for key, value in detail.items():
            field = f"{prefix}.{key}" if prefix else str(key)
            errors.extend(_flatten(value, field))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten(item, prefix))
        return errors
    entry = {"code": getattr(detail, "code", "error"), "detail": str(detail)}
    if prefix:
        entry["field"] = prefix
    return [entry]


def standard_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    """Wrap DRF's default handler output in the standard error envelope."""
    if isinstance(exc, EntityValidationError):
        return Response(
            {
                "type": "validation_error",
                "errors": [
                    {"code": "invalid", "detail": v.message, "field": v.field}
                    for v in exc.violations
                ],
            },
            status=http_status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    error_type = getattr(exc, "default_code", "error")
    detail = response.data
    # Non-field errors arrive as {"detail": ...}
    if isinstance(detail, dict) and set(detail) == {"detail"}:
        detail = detail["detail"]
    response.data = {"type": error_type, "errors": _flatten(detail)}
    return response
