import logging
from typing import Any, Mapping

from .config import ModelConfig
from .exceptions import FactoryErrorKind, ModelConfigError, ModelFactoryError
from .session import ModelClient

logger = logging.getLogger(__name__)


class ModelClientFactory:
    """Builds ModelClient instances from raw model configuration."""

    async def create(self, cfg: Mapping[str, Any], wait_for_authenticate: bool = True) -> ModelClient:
        """
        Resolve the configuration and construct a client.

        Raises ModelFactoryError(CONFIGURATION) if the configuration is invalid
        or the engine cannot be built for it (unknown dialect, missing driver),
        ModelFactoryError(AUTHENTICATE) if the connectivity check fails.
        """
        try:
            model_cfg = ModelConfig.from_raw(cfg)
        except ModelConfigError as e:
            logger.error(f"Invalid model configuration: {e}")
            raise ModelFactoryError(FactoryErrorKind.CONFIGURATION, str(e), cause=e) from e

        client = ModelClient(model_cfg.to_dict())
        try:
            client.engine
        except Exception as e:
            logger.error(f"Engine construction failed: {e}")
            raise ModelFactoryError(FactoryErrorKind.CONFIGURATION, str(e), cause=e) from e
        logger.info(f"Created model client for dialect={model_cfg.dialect} host={model_cfg.host} port={model_cfg.port}")

        if wait_for_authenticate:
            try:
                await client.authenticate()
            except Exception as e:
                logger.error(f"Authenticate failed: {e}")
                await self._dispose_quietly(client)
                raise ModelFactoryError(FactoryErrorKind.AUTHENTICATE, str(e), cause=e) from e

        return client

    @staticmethod
    async def _dispose_quietly(client: ModelClient) -> None:
        # The authentication error is the one worth reporting.
        try:
            await client.dispose()
        except Exception as e:
            logger.warning(f"Dispose after failed authenticate also failed: {e}")


async def create_client(cfg: Mapping[str, Any], wait_for_authenticate: bool = True) -> ModelClient:
    """Convenience function to create a client."""
    return await ModelClientFactory().create(cfg, wait_for_authenticate)
