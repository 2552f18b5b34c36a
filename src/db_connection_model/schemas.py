from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from .constants import (
    KEY_HOST,
    KEY_PORT,
    KEY_USERNAME,
    KEY_PASSWORD,
    KEY_DATABASE,
    KEY_DIALECT,
    KEY_PROTOCOL,
    KEY_LOGGING,
    KEY_OMIT_NULL,
    KEY_OPERATORS_ALIASES,
    KEY_SYNC_FORCE,
    KEY_SYNC_ALTER,
    KEY_POOL_MAX,
    KEY_POOL_MIN,
    KEY_POOL_IDLE,
    KEY_POOL_ACQUIRE,
    KEY_POOL_EVICT,
    KEY_TRANSACTION_TYPE,
    KEY_TRANSACTION_ISOLATION_LEVEL,
    KEY_RETRY_MAX,
)
from .validators import FieldKind, assert_type, optional_field, require_field


@dataclass(frozen=True)
class FieldSpec:
    """A single document key, the attribute it populates and its expected kind."""
    key: str
    attr: str
    kind: FieldKind
    nullable: bool = False


SYNC_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(KEY_SYNC_FORCE, "force", FieldKind.BOOLEAN),
    FieldSpec(KEY_SYNC_ALTER, "alter", FieldKind.BOOLEAN),
)

POOL_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(KEY_POOL_MAX, "max", FieldKind.INTEGER),
    FieldSpec(KEY_POOL_MIN, "min", FieldKind.INTEGER),
    FieldSpec(KEY_POOL_IDLE, "idle", FieldKind.INTEGER),
    FieldSpec(KEY_POOL_ACQUIRE, "acquire", FieldKind.INTEGER),
    FieldSpec(KEY_POOL_EVICT, "evict", FieldKind.INTEGER),
)

TRANSACTION_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(KEY_TRANSACTION_TYPE, "type", FieldKind.STRING),
    FieldSpec(KEY_TRANSACTION_ISOLATION_LEVEL, "isolation_level", FieldKind.STRING),
)

RETRY_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(KEY_RETRY_MAX, "max", FieldKind.INTEGER),
)

MODEL_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec(KEY_HOST, "host", FieldKind.STRING),
    FieldSpec(KEY_PORT, "port", FieldKind.INTEGER),
    FieldSpec(KEY_USERNAME, "username", FieldKind.STRING, nullable=True),
    FieldSpec(KEY_PASSWORD, "password", FieldKind.STRING, nullable=True),
    FieldSpec(KEY_DATABASE, "database", FieldKind.STRING, nullable=True),
    FieldSpec(KEY_DIALECT, "dialect", FieldKind.STRING),
    FieldSpec(KEY_PROTOCOL, "protocol", FieldKind.STRING),
    FieldSpec(KEY_LOGGING, "logging", FieldKind.BOOLEAN),
    FieldSpec(KEY_OMIT_NULL, "omit_null", FieldKind.BOOLEAN),
    FieldSpec(KEY_OPERATORS_ALIASES, "operators_aliases", FieldKind.OBJECT, nullable=True),
)


def freeze(value: Any) -> Any:
    """Read-only copy of a mapping tree (mappings become MappingProxyType, lists tuples)."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Plain dict/list copy of a frozen tree."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


def _normalize(value: Any, spec: FieldSpec) -> Any:
    # Config objects own their mappings, read-only.
    if spec.kind is FieldKind.OBJECT and value is not None:
        return freeze(value)
    return value


def extract_required(tree: Mapping, fields: Tuple[FieldSpec, ...]) -> Dict[str, Any]:
    """Read every field from a fully specified tree (the default document)."""
    values = {}
    for spec in fields:
        value = require_field(tree, spec.key, spec.nullable)
        values[spec.attr] = _normalize(assert_type(value, spec.kind, spec.key, spec.nullable), spec)
    return values


def extract_optional(raw: Mapping, fields: Tuple[FieldSpec, ...], fallback: Any) -> Dict[str, Any]:
    """Read every field from a partial tree, falling back to attributes of `fallback`."""
    values = {}
    for spec in fields:
        value = optional_field(raw, spec.key, getattr(fallback, spec.attr), spec.nullable)
        values[spec.attr] = _normalize(assert_type(value, spec.kind, spec.key, spec.nullable), spec)
    return values
