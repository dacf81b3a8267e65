from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

# Create async engine
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    future=True
)

# Create async session
async_session = sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

# Base class for models
Base = declarative_base()


class UnitOfWork:
    """
    Explicit transaction boundary on a session of its own.

    Usage:
        async with UnitOfWork(db.bind) as uow:
            ...
            await uow.commit()

    The unit of work opens its session on the given engine and never touches
    the caller's session or the instances it holds. Leaving the block with an
    exception rolls the transaction back. The session is released on every
    exit path, so anything not committed is discarded.
    """

    def __init__(self, bind=None):
        self.bind = bind if bind is not None else engine
        self.session: Optional[AsyncSession] = None

    async def begin(self):
        self.session = async_session(bind=self.bind)
        await self.session.begin()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    async def release(self):
        await self.session.close()

    async def __aenter__(self) -> "UnitOfWork":
        await self.begin()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        try:
            if exc_type is not None:
                await self.rollback()
        finally:
            await self.release()
        return False
