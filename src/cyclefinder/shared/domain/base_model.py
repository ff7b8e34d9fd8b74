"""
Base domain model with camelCase JSON output.

Report-style models (counts, summaries) inherit from BaseDomainModel so the
CLI can print them as JSON with the same key style everywhere.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


def to_camel_case(snake_str: str) -> str:
    """
    Convert snake_case to camelCase.

    Examples:
        >>> to_camel_case("typed_fields")
        'typedFields'
    """
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


@dataclass(frozen=True)
class BaseDomainModel:
    """
    Base class for serialisable domain models.

    - to_json() serializes to camelCase keys
    - Enum members are serialized by value
    - Nested models and lists of models are serialized recursively
    """

    def to_json(self) -> dict[str, Any]:
        """Serialize to a camelCase dictionary."""
        result: dict[str, Any] = {}
        for field in fields(self):
            result[to_camel_case(field.name)] = _to_json_value(getattr(self, field.name))
        return result


def _to_json_value(value: Any) -> Any:
    if isinstance(value, BaseDomainModel):
        return value.to_json()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {k: _to_json_value(v) for k, v in value.items()}
    return value
