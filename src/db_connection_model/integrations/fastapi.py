from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Annotated, Mapping, Optional

from fastapi import FastAPI, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..factory import ModelClientFactory
from ..session import ModelClient


def get_client(request: Request) -> ModelClient:
    """The client created by the lifespan."""
    return request.app.state.db_client


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides an async database session.
    """
    async with get_client(request).async_session() as session:
        yield session

SessionDep = Annotated[AsyncSession, Depends(get_db)]

def create_db_lifespan(cfg: Optional[Mapping[str, Any]] = None, wait_for_authenticate: bool = True):
    """
    Create a lifespan context manager for FastAPI applications.
    Creates the client on startup (failing startup on configuration or
    authentication errors) and disposes it on shutdown.
    """
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = await ModelClientFactory().create(cfg or {}, wait_for_authenticate)
        app.state.db_client = client

        yield

        await client.dispose()

    return lifespan
