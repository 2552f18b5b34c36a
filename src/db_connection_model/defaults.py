import os
import logging
from typing import Any, Dict, Optional

import yaml

from .constants import DEFAULT_CONFIG_FILENAME, ENV_MODEL_DEFAULT_CONFIG
from .exceptions import ConfigErrorKind, ModelConfigError

logger = logging.getLogger(__name__)


def default_config_path(path: Optional[str] = None) -> str:
    """
    Resolve the default document path in order:
    1. Direct argument
    2. Environment variable
    3. Bundled document
    """
    if path:
        return path
    env_path = os.getenv(ENV_MODEL_DEFAULT_CONFIG)
    if env_path:
        return env_path
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), DEFAULT_CONFIG_FILENAME)


def load_defaults(path: Optional[str] = None) -> Dict[str, Any]:
    """Read and parse the default model configuration document (no caching)."""
    resolved = default_config_path(path)
    logger.debug(f"Loading default model configuration from {resolved}")

    try:
        with open(resolved, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise ModelConfigError(
            ConfigErrorKind.IO,
            f'Read model default configuration file error. (error = "{e}")',
            cause=e,
        ) from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ModelConfigError(
            ConfigErrorKind.PARSE,
            f'Invalid default model configuration. (error = "{e}")',
            cause=e,
        ) from e

    if not isinstance(data, dict):
        raise ModelConfigError(
            ConfigErrorKind.PARSE,
            f"Invalid default model configuration. (error = \"document must be a mapping, got {type(data).__name__}\")",
        )
    return data
