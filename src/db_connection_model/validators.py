from collections.abc import Mapping
from enum import Enum
from typing import Any

from .exceptions import ModelConfigError


class FieldKind(str, Enum):
    OBJECT = "object"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    STRING = "string"


def type_name(value: Any) -> str:
    """Describe a runtime value with the same vocabulary as FieldKind."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return FieldKind.BOOLEAN.value
    if isinstance(value, int):
        return FieldKind.INTEGER.value
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return FieldKind.STRING.value
    if isinstance(value, Mapping):
        return FieldKind.OBJECT.value
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def matches(value: Any, kind: FieldKind) -> bool:
    if kind is FieldKind.OBJECT:
        return isinstance(value, Mapping)
    if kind is FieldKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is FieldKind.INTEGER:
        # bool is an int subclass
        return isinstance(value, int) and not isinstance(value, bool)
    if kind is FieldKind.STRING:
        return isinstance(value, str)
    return False


def require_field(obj: Mapping, name: str, nullable: bool = False) -> Any:
    """Return obj[name]; absent (or null, unless nullable) is a missing field."""
    if name not in obj:
        raise ModelConfigError.missing_field(name)
    value = obj[name]
    if value is None and not nullable:
        raise ModelConfigError.missing_field(name)
    return value


def optional_field(obj: Mapping, name: str, default: Any, nullable: bool = False) -> Any:
    """Return obj[name], or default when the field is absent."""
    if name not in obj:
        return default
    value = obj[name]
    if value is None and not nullable:
        raise ModelConfigError.missing_field(name)
    return value


def assert_type(value: Any, kind: FieldKind, field: str, nullable: bool = False) -> Any:
    if value is None and nullable:
        return None
    if not matches(value, kind):
        raise ModelConfigError.type_mismatch(field, kind.value, type_name(value))
    return value
