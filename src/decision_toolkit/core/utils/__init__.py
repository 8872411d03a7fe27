"""
Utils Package

Serialization utility functions.
"""

from .serialization import (
    serialize_comparison,
    deserialize_comparison,
)

__all__ = [
    "serialize_comparison",
    "deserialize_comparison",
]
