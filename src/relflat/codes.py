"""Validation code constants for relflat.api.validate_headings().

These constants prevent stringly-typed error codes and ensure
client code uses the correct validation codes.
"""

from enum import Enum


class ValidationCode(str, Enum):
    """Validation error and warning codes."""

    # Errors (blocking)
    INVALID_STRUCTURE = "INVALID_STRUCTURE"
    UNSUPPORTED_SHAPE = "UNSUPPORTED_SHAPE"
    DEPTH_EXCEEDED = "DEPTH_EXCEEDED"
    CYCLE_DETECTED = "CYCLE_DETECTED"

    # Warnings (non-blocking)
    DUPLICATE_LABEL = "DUPLICATE_LABEL"
    LEGACY_FORMAT = "LEGACY_FORMAT"
