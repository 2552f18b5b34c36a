from .fastapi import get_client, get_db, SessionDep, create_db_lifespan

__all__ = [
    "get_client",
    "get_db",
    "SessionDep",
    "create_db_lifespan",
]
