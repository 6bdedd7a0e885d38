from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .settings import DATABASE_URL, DB_ECHO, DB_ISOLATION_LEVEL

engine_options = {"echo": DB_ECHO}
if DB_ISOLATION_LEVEL:
    engine_options["isolation_level"] = DB_ISOLATION_LEVEL

engine = create_async_engine(DATABASE_URL, **engine_options)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


class TransactionProvider:
    """
    Hands out one session per unit of work, wrapped in a transaction.

    Leaving the ``transaction()`` block normally commits, leaving it through
    an exception rolls back, and the session is closed on every exit path.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            async with session.begin():
                yield session


transaction_provider = TransactionProvider(AsyncSessionLocal)


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


def get_transaction_provider() -> TransactionProvider:
    return transaction_provider


async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
