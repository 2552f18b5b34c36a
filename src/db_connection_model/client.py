import logging
from typing import Any, Dict, Mapping

from sqlalchemy.engine.url import URL
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine

from .constants import DIALECT_ASYNC_DRIVERS, DIALECT_ISOLATION_LEVELS, UNPOOLED_DIALECTS

logger = logging.getLogger(__name__)


def get_driver_name(dialect: str) -> str:
    """Map a dialect name to its SQLAlchemy async driver; explicit or unknown names pass through."""
    if "+" in dialect:
        return dialect
    return DIALECT_ASYNC_DRIVERS.get(dialect.lower(), dialect)


def _base_dialect(dialect: str) -> str:
    return dialect.split("+", 1)[0].lower()


def build_url(options: Mapping[str, Any]) -> URL:
    """Return the SQLAlchemy URL for serialized model options."""
    drivername = get_driver_name(options["dialect"])
    if _base_dialect(drivername) in UNPOOLED_DIALECTS:
        # File based: only the database path matters.
        return URL.create(drivername=drivername, database=options.get("database"))

    return URL.create(
        drivername=drivername,
        username=options.get("username"),
        password=options.get("password"),
        host=options.get("host"),
        port=options.get("port"),
        database=options.get("database"),
    )


def get_engine_kwargs(options: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Translate serialized model options into create_async_engine arguments.

    pool.min, pool.evict, transactionType, omitNull, retry and operatorsAliases
    have no engine counterpart and stay on the client options. isolationLevel
    only reaches the engine when the dialect accepts it.
    """
    dialect = _base_dialect(get_driver_name(options["dialect"]))
    kwargs: Dict[str, Any] = {"echo": options["logging"]}

    isolation_level = (options.get("isolationLevel") or "").replace("_", " ").upper()
    if isolation_level in DIALECT_ISOLATION_LEVELS.get(dialect, ()):
        kwargs["isolation_level"] = isolation_level
    elif isolation_level:
        logger.debug(f"Isolation level {isolation_level} not supported by {dialect}; left advisory")

    if dialect not in UNPOOLED_DIALECTS:
        pool = options["pool"]
        kwargs["pool_size"] = pool["max"]
        kwargs["max_overflow"] = 0
        kwargs["pool_timeout"] = pool["acquire"] / 1000
        kwargs["pool_recycle"] = pool["idle"] / 1000

    return kwargs


def get_async_sqlalchemy_engine(options: Mapping[str, Any]) -> AsyncEngine:
    """
    Create and return a SQLAlchemy AsyncEngine.
    """
    url = build_url(options)
    kwargs = get_engine_kwargs(options)

    logger.info(f"Creating SQLAlchemy AsyncEngine for {url.render_as_string(hide_password=True)}")
    logger.debug(f"Engine kwargs: {kwargs}")

    return create_async_engine(url, **kwargs)
