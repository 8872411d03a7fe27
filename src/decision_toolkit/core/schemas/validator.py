"""
Schema Validation Utilities

Validates raw comparison payloads (dicts handed over by the input layer)
before they are turned into models.

- Basic structural checks always run and report a dotted path
- `strict=True` additionally validates against `comparison.schema.json`
- Fail fast on the first violation
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

from ..models.comparison import name_key
from ..models.points import MAX_WEIGHT, MIN_WEIGHT, PointType, category_key, is_valid_rating


COMPARISON_SCHEMA_VERSION = 1

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}

_POINT_TYPES = tuple(t.value for t in PointType)


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_comparison(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate a comparison payload.

    Args:
        data: Comparison dictionary to validate
        strict: If True, also run full JSON Schema validation

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Comparison payload must be a dict")

    version = data.get("schema_version", COMPARISON_SCHEMA_VERSION)
    if version != COMPARISON_SCHEMA_VERSION:
        raise ValidationError(
            f"Unsupported comparison schema version: {version} (expected {COMPARISON_SCHEMA_VERSION})",
            path="schema_version"
        )

    items = data.get("items")
    if not isinstance(items, list):
        raise ValidationError("items must be a list", path="items")

    seen_ids: set[str] = set()
    seen_names: set[str] = set()
    for i, item in enumerate(items):
        path = f"items[{i}]"
        _validate_item(item, path)
        if item["id"] in seen_ids:
            raise ValidationError(f"Duplicate item id: {item['id']!r}", path=f"{path}.id")
        name = name_key(item["name"])
        if name in seen_names:
            raise ValidationError(f"Duplicate item name: {item['name']!r}", path=f"{path}.name")
        seen_ids.add(item["id"])
        seen_names.add(name)

    preferences = data.get("preferences", {})
    if not isinstance(preferences, dict):
        raise ValidationError("preferences must be a dict", path="preferences")
    _validate_preferences(preferences, "preferences")

    if strict:
        schema = _load_schema("comparison")
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            )


def _validate_item(data: Any, path: str) -> None:
    """Validate one item and its points."""
    if not isinstance(data, dict):
        raise ValidationError("item must be a dict", path=path)
    missing = [f for f in ("id", "name") if f not in data]
    if missing:
        raise ValidationError(
            f"Item missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )
    if not _is_text(data["id"]):
        raise ValidationError("Item id must be a non-blank string", path=f"{path}.id")
    if not _is_text(data["name"]):
        raise ValidationError("Item name must be a non-blank string", path=f"{path}.name")

    points = data.get("points", [])
    if not isinstance(points, list):
        raise ValidationError("points must be a list", path=f"{path}.points")
    seen: set[str] = set()
    for j, point in enumerate(points):
        point_path = f"{path}.points[{j}]"
        _validate_point(point, point_path)
        if point["id"] in seen:
            raise ValidationError(f"Duplicate point id: {point['id']!r}", path=f"{point_path}.id")
        seen.add(point["id"])


def _validate_point(data: Any, path: str) -> None:
    """Validate a single point."""
    if not isinstance(data, dict):
        raise ValidationError("point must be a dict", path=path)
    required = ["id", "category", "text", "weight", "type"]
    missing = [f for f in required if f not in data]
    if missing:
        raise ValidationError(
            f"Point missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing]
        )
    if not _is_text(data["id"]):
        raise ValidationError("Point id must be a non-blank string", path=f"{path}.id")
    if not _is_text(data["category"]):
        raise ValidationError("category must be a non-blank string", path=f"{path}.category")
    if not _is_text(data["text"]):
        raise ValidationError("text must be a non-blank string", path=f"{path}.text")
    if not is_valid_rating(data["weight"]):
        raise ValidationError(
            f"Invalid weight: {data['weight']!r} (must be {MIN_WEIGHT}-{MAX_WEIGHT})",
            path=f"{path}.weight"
        )
    if data["type"] not in _POINT_TYPES:
        raise ValidationError(
            f"Invalid point type: {data['type']!r}",
            path=f"{path}.type"
        )


def _validate_preferences(data: dict[str, Any], path: str) -> None:
    weights = data.get("category_weights", [])
    if not isinstance(weights, list):
        raise ValidationError("category_weights must be a list", path=f"{path}.category_weights")
    seen: set[str] = set()
    for k, weight in enumerate(weights):
        weight_path = f"{path}.category_weights[{k}]"
        if not isinstance(weight, dict) or not _is_text(weight.get("category")):
            raise ValidationError("category weight needs a non-blank category", path=weight_path)
        if not is_valid_rating(weight.get("importance")):
            raise ValidationError(
                f"Invalid importance: {weight.get('importance')!r} (must be {MIN_WEIGHT}-{MAX_WEIGHT})",
                path=f"{weight_path}.importance"
            )
        key = category_key(weight["category"])
        if key in seen:
            raise ValidationError(
                f"Duplicate category weight: {weight['category']!r}",
                path=f"{weight_path}.category"
            )
        seen.add(key)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())
