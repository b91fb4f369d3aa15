"""Validation utilities for session inputs."""

import logging

from pomprfun.core.phrases import PATTERN_TYPES, is_valid_hex

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def normalize_hex_input(raw: str) -> str:
    """Normalize typed colour text for display and validation.

    The text is stripped and uppercased, and a leading ``#`` is added when
    missing.  Empty input stays empty.

    Args:
        raw: Text typed into the colour field

    Returns:
        Normalized text (which may still be an invalid colour)
    """
    value = (raw or "").strip().upper()
    if not value:
        return ""
    return value if value.startswith("#") else f"#{value}"


def validate_hex_color(value: str) -> str:
    """Validate an already-normalized colour.

    Raises:
        ValidationError: If the value is not ``#RRGGBB``
    """
    if not is_valid_hex(value):
        raise ValidationError(f"Invalid colour: {value!r} (expected #RRGGBB)")
    return value


def validate_pattern_type(pattern_type: str) -> str:
    """Validate a pattern type against the fixed vocabulary.

    Args:
        pattern_type: Pattern name, or empty to clear the pattern

    Returns:
        The stripped pattern type

    Raises:
        ValidationError: If the type is not in the vocabulary
    """
    value = (pattern_type or "").strip()
    if value and value not in PATTERN_TYPES:
        logger.warning(f"Rejected unknown pattern type: {value!r}")
        raise ValidationError(
            f"Unknown pattern type: {value!r}. Choose one of: {', '.join(PATTERN_TYPES)}"
        )
    return value


def validate_manual_prompt(text: str) -> str:
    """Validate the user-edited prompt buffer before compiling it.

    Returns:
        The stripped text

    Raises:
        ValidationError: If the buffer is blank
    """
    value = (text or "").strip()
    if not value:
        raise ValidationError("Edit Prompt is empty.")
    return value


def clamp_scale(scale: int) -> int:
    """Clamp a pattern scale into [0, 100]."""
    return max(0, min(100, int(scale)))
