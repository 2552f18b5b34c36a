import copy
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from .client import get_async_sqlalchemy_engine
from .constants import AUTHENTICATE_QUERY

logger = logging.getLogger(__name__)


class ModelClient:
    """
    Database client built from serialized model options.

    The engine (and its pool) is created on first use; ModelClientFactory
    builds it up front.
    """

    def __init__(self, options: Mapping[str, Any]):
        self._options: Dict[str, Any] = copy.deepcopy(dict(options))
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def options(self) -> Dict[str, Any]:
        """Copy of the options this client was constructed with."""
        return copy.deepcopy(self._options)

    @property
    def engine(self) -> AsyncEngine:
        """Lazy load engine."""
        if self._engine is None:
            self._engine = get_async_sqlalchemy_engine(self._options)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Lazy load session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
                class_=AsyncSession
            )
        return self._session_factory

    @asynccontextmanager
    async def async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Async context manager provided a transactional session.
        Commits on success, rolls back on error, closes on exit.
        """
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Session rollback due to exception: {e}")
            raise
        finally:
            await session.close()

    async def authenticate(self) -> None:
        """Open a connection and run a trivial query; raises on failure."""
        async with self.engine.connect() as conn:
            await conn.execute(text(AUTHENTICATE_QUERY))
        logger.info(f"Authenticated against {self._options.get('host')}:{self._options.get('port')}")

    async def dispose(self) -> None:
        """Dispose of the connection pool."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
