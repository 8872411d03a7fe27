"""
Serialization Utilities

Provides to/from dict utilities for comparison documents. The dict form is
how the input layer hands an initial document to the history store; reading
and writing files is left to the caller.

- Clean separation: `serialize_*` and `deserialize_*` functions
- All models have `to_dict()` and `from_dict()` methods
- Validation via schemas before deserialization
- Never store derived values (categories)
"""

from __future__ import annotations

from typing import Any

from ..models.comparison import Comparison
from ..schemas.validator import COMPARISON_SCHEMA_VERSION, ValidationError, validate_comparison


def serialize_comparison(comparison: Comparison) -> dict[str, Any]:
    """
    Serialize a Comparison to a dictionary.

    The output will pass `validate_comparison(..., strict=True)`.

    Note:
        Categories are NOT included - they are always derived from points.
    """
    data: dict[str, Any] = {"schema_version": COMPARISON_SCHEMA_VERSION}
    data.update(comparison.to_dict())
    return data


def deserialize_comparison(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Comparison:
    """
    Deserialize a Comparison from a dictionary.

    Args:
        data: Dictionary payload
        validate: Whether to validate before building models
        strict: Also run JSON Schema validation (implies validate)

    Returns:
        Comparison instance

    Raises:
        ValidationError: If validation is enabled and data is invalid
        ValueError: If data cannot be turned into valid models
    """
    if validate or strict:
        validate_comparison(data, strict=strict)

    try:
        return Comparison.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ValidationError(f"Malformed comparison payload: {e}") from e
