"""
Input validation for caller-supplied values.

Purpose
-------
Single place for the low-level rules applied to request bodies: presence of
required fields and trimmed-text constraints (length, allowed characters).
Every failure raises ``ValidationError`` whose ``validation_message`` is the
exact user-facing text returned by the API.

Validators are stateless and deterministic; they return the normalized value
on success and never fail silently.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, List, Mapping, NoReturn, Optional

from ghostagotchi.core.logging.logger import get_logger
from ghostagotchi.modules.shared.exceptions import ValidationError

logger = get_logger(__name__)


def _raise_validation_error(field_name: str, value: Any, message: str) -> NoReturn:
    logger.debug(
        "Input validation failed",
        extra={
            "field_name": field_name,
            "raw_value": repr(value),
            "reason": message,
        },
    )
    raise ValidationError(field_name, message)


class InputValidator:
    """Centralized validation for request inputs."""

    @staticmethod
    def missing_fields(body: Optional[Mapping[str, Any]], required: Iterable[str]) -> List[str]:
        """
        Names of required fields that are absent, ``None`` or the empty string.

        >>> InputValidator.missing_fields({"name": ""}, ["name", "message"])
        ['name', 'message']
        """
        body = body or {}
        return [
            field
            for field in required
            if body.get(field) is None or body.get(field) == ""
        ]

    @staticmethod
    def validate_text(
        value: Any,
        field_name: str,
        label: str,
        min_length: int = 1,
        max_length: Optional[int] = None,
        pattern: Optional[str] = None,
        pattern_message: Optional[str] = None,
    ) -> str:
        """
        Validate a free-text field and return it trimmed.

        Length bounds apply to the trimmed value.

        Args:
            value: Raw input
            field_name: Field name for the error details
            label: Human label used in messages ("Pet name", "Message")
            min_length: Minimum trimmed length (at least 1)
            max_length: Maximum trimmed length
            pattern: Full-match regex the trimmed value must satisfy
            pattern_message: Message used when ``pattern`` does not match

        Raises:
            ValidationError: With the user-facing reason
        """
        if not isinstance(value, str) or not value.strip():
            _raise_validation_error(
                field_name, value, f"{label} must be a non-empty string"
            )

        text = value.strip()

        if len(text) < min_length:
            _raise_validation_error(
                field_name, text, f"{label} must be at least {min_length} characters"
            )

        if max_length is not None and len(text) > max_length:
            _raise_validation_error(
                field_name, text, f"{label} must be {max_length} characters or less"
            )

        if pattern is not None and not re.fullmatch(pattern, text):
            _raise_validation_error(
                field_name,
                text,
                pattern_message or f"{label} contains invalid characters",
            )

        return text
