import logging
from types import MappingProxyType
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .constants import (
    COMPONENT_MODEL,
    COMPONENT_SYNC,
    COMPONENT_POOL,
    COMPONENT_TRANSACTION,
    COMPONENT_RETRY,
)
from .defaults import load_defaults
from .exceptions import ModelConfigError
from .schemas import (
    FieldSpec,
    SYNC_FIELDS,
    POOL_FIELDS,
    TRANSACTION_FIELDS,
    RETRY_FIELDS,
    MODEL_FIELDS,
    extract_optional,
    extract_required,
    thaw,
)
from .validators import FieldKind, assert_type, optional_field, require_field

logger = logging.getLogger(__name__)


class GroupConfig(BaseModel):
    """
    Base for the nested configuration groups.

    Subclasses name their document sub-tree (COMPONENT) and its fields (FIELDS);
    default() reads the bundled document, from_raw() overlays a raw mapping on it.
    """
    model_config = ConfigDict(frozen=True, strict=True)

    COMPONENT: ClassVar[str]
    FIELDS: ClassVar[Tuple[FieldSpec, ...]]

    @classmethod
    def default(cls):
        try:
            tree = require_field(load_defaults(), cls.COMPONENT)
            assert_type(tree, FieldKind.OBJECT, cls.COMPONENT)
            values = extract_required(tree, cls.FIELDS)
        except ModelConfigError as e:
            raise ModelConfigError.default_invalid(cls.COMPONENT, e) from e
        return cls(**values)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]):
        fallback = cls.default()
        try:
            assert_type(raw, FieldKind.OBJECT, cls.COMPONENT)
            values = extract_optional(raw, cls.FIELDS, fallback)
        except ModelConfigError as e:
            raise ModelConfigError.user_invalid(cls.COMPONENT, e) from e
        logger.debug(f"Resolved {cls.COMPONENT} configuration: {values}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {spec.key: getattr(self, spec.attr) for spec in self.FIELDS}


class SyncConfig(GroupConfig):
    """Model sync flags: force drops tables before creating them, alter alters them to fit."""
    COMPONENT: ClassVar[str] = COMPONENT_SYNC
    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = SYNC_FIELDS

    force: bool
    alter: bool


class PoolConfig(GroupConfig):
    """
    Connection pool settings.

    idle, acquire and evict are milliseconds. min <= max is not checked.
    """
    COMPONENT: ClassVar[str] = COMPONENT_POOL
    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = POOL_FIELDS

    max: int
    min: int
    idle: int
    acquire: int
    evict: int


class TransactionConfig(GroupConfig):
    """Default transaction type and isolation level, passed through unchecked."""
    COMPONENT: ClassVar[str] = COMPONENT_TRANSACTION
    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = TRANSACTION_FIELDS

    type: str
    isolation_level: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transactionType": self.type,
            "isolationLevel": self.isolation_level,
        }


class RetryConfig(GroupConfig):
    COMPONENT: ClassVar[str] = COMPONENT_RETRY
    FIELDS: ClassVar[Tuple[FieldSpec, ...]] = RETRY_FIELDS

    max: int


# attribute -> builder, in resolution order
GROUPS: Tuple[Tuple[str, type], ...] = (
    ("sync", SyncConfig),
    ("transaction", TransactionConfig),
    ("pool", PoolConfig),
    ("retry", RetryConfig),
)


class ModelConfig(BaseModel):
    """
    Fully resolved model configuration.

    operators_aliases is held as a read-only mapping; to_dict() hands out a plain copy.
    """
    model_config = ConfigDict(frozen=True, strict=True, arbitrary_types_allowed=True)

    host: str
    port: int
    username: Optional[str]
    password: Optional[str]
    database: Optional[str]
    dialect: str
    protocol: str
    sync: SyncConfig
    logging: bool
    omit_null: bool
    pool: PoolConfig
    transaction: TransactionConfig
    retry: RetryConfig
    operators_aliases: Optional[MappingProxyType]

    @classmethod
    def default(cls) -> "ModelConfig":
        try:
            values = extract_required(load_defaults(), MODEL_FIELDS)
        except ModelConfigError as e:
            raise ModelConfigError.default_invalid(COMPONENT_MODEL, e) from e

        for attr, group in GROUPS:
            values[attr] = group.default()
        return cls(**values)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "ModelConfig":
        fallback = cls.default()
        try:
            assert_type(raw, FieldKind.OBJECT, COMPONENT_MODEL)
            values = extract_optional(raw, MODEL_FIELDS, fallback)
            subtrees = {
                attr: assert_type(optional_field(raw, attr, {}), FieldKind.OBJECT, attr)
                for attr, _ in GROUPS
            }
        except ModelConfigError as e:
            raise ModelConfigError.user_invalid(COMPONENT_MODEL, e) from e

        # Nested errors are already wrapped by their own builder.
        for attr, group in GROUPS:
            values[attr] = group.from_raw(subtrees[attr])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Flat options keyed by the client's field names."""
        transaction = self.transaction.to_dict()
        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "password": self.password,
            "database": self.database,
            "dialect": self.dialect,
            "protocol": self.protocol,
            "sync": self.sync.to_dict(),
            "logging": self.logging,
            "omitNull": self.omit_null,
            "pool": self.pool.to_dict(),
            "transactionType": transaction["transactionType"],
            "isolationLevel": transaction["isolationLevel"],
            "retry": self.retry.to_dict(),
            "operatorsAliases": thaw(self.operators_aliases),
        }
