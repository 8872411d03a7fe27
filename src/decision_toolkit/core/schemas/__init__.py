"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_comparison,
    ValidationError,
    COMPARISON_SCHEMA_VERSION,
)

__all__ = [
    "validate_comparison",
    "ValidationError",
    "COMPARISON_SCHEMA_VERSION",
]
