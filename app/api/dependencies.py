from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio.session import AsyncSession

from app.db.database import async_session
from app.services.auth.identity import Identity, identity_from_claims


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


async def get_user(request: Request) -> dict | None:
    # this is done by the middleware
    return getattr(request.state, "user", None)


async def get_identity(user: dict | None = Depends(get_user)) -> Identity:
    identity = identity_from_claims(user)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not authenticated.",
        )
    return identity
