from enum import Enum
from typing import Any, Optional


class ConfigErrorKind(str, Enum):
    MISSING_FIELD = "missing_field"
    TYPE_MISMATCH = "type_mismatch"
    DEFAULT_CONFIG_INVALID = "default_config_invalid"
    USER_CONFIG_INVALID = "user_config_invalid"
    IO = "io"
    PARSE = "parse"


class FactoryErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    AUTHENTICATE = "authenticate"


class ModelConfigError(ValueError):
    """Raised when the model configuration (or its bundled defaults) is invalid."""

    def __init__(
        self,
        kind: ConfigErrorKind,
        message: str,
        field: Optional[str] = None,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
        component: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.field = field
        self.expected = expected
        self.actual = actual
        self.component = component
        self.cause = cause

    @classmethod
    def missing_field(cls, field: str) -> "ModelConfigError":
        return cls(ConfigErrorKind.MISSING_FIELD, f'Field "{field}" is required.', field=field)

    @classmethod
    def type_mismatch(cls, field: str, expected: str, actual: str) -> "ModelConfigError":
        return cls(
            ConfigErrorKind.TYPE_MISMATCH,
            f'Field "{field}" must be {expected}, got {actual}.',
            field=field,
            expected=expected,
            actual=actual,
        )

    @classmethod
    def default_invalid(cls, component: str, cause: BaseException) -> "ModelConfigError":
        return cls(
            ConfigErrorKind.DEFAULT_CONFIG_INVALID,
            f'Load default {component} configuration error. (error = "{cause}")',
            component=component,
            cause=cause,
        )

    @classmethod
    def user_invalid(cls, component: str, cause: BaseException) -> "ModelConfigError":
        return cls(
            ConfigErrorKind.USER_CONFIG_INVALID,
            f'Load {component} configuration error. (error = "{cause}")',
            component=component,
            cause=cause,
        )

    @property
    def origin(self) -> "ModelConfigError":
        """Innermost ModelConfigError in the cause chain."""
        err = self
        while isinstance(err.cause, ModelConfigError):
            err = err.cause
        return err

    @property
    def recoverable(self) -> bool:
        """True when the caller can fix the raw configuration and retry."""
        return self.kind in (
            ConfigErrorKind.USER_CONFIG_INVALID,
            ConfigErrorKind.MISSING_FIELD,
            ConfigErrorKind.TYPE_MISMATCH,
        )


class ModelFactoryError(RuntimeError):
    """Raised when the client factory cannot produce a client."""

    def __init__(self, kind: FactoryErrorKind, message: str, cause: Optional[Any] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause
