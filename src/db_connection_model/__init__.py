from .config import ModelConfig, SyncConfig, PoolConfig, TransactionConfig, RetryConfig
from .defaults import load_defaults
from .exceptions import ConfigErrorKind, FactoryErrorKind, ModelConfigError, ModelFactoryError
from .factory import ModelClientFactory, create_client
from .session import ModelClient

__all__ = [
    "ModelConfig",
    "SyncConfig",
    "PoolConfig",
    "TransactionConfig",
    "RetryConfig",
    "load_defaults",
    "ConfigErrorKind",
    "FactoryErrorKind",
    "ModelConfigError",
    "ModelFactoryError",
    "ModelClientFactory",
    "create_client",
    "ModelClient",
]
