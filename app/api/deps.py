"""
FastAPI Dependencies
"""

from typing import AsyncGenerator, Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import async_session
from app.core.exceptions import Unauthorized
from app.core.security import JWTError, decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Database session dependency"""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()

async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> int:
    """User id taken from the bearer token's subject claim"""
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authenticated")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise Unauthorized("Could not validate credentials")

    sub = payload.get("sub")
    if sub is None:
        raise Unauthorized("Invalid token (no sub)")

    try:
        return int(sub)
    except (TypeError, ValueError):
        raise Unauthorized("Invalid token subject")
