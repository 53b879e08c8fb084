from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from infrastructure.persistence.models.currency import Base


class Database:
    def __init__(self, db_url: str):
        engine_options = {}
        if db_url.startswith('sqlite') and ':memory:' in db_url:
            # In-memory SQLite (tests) lives on one shared connection, so concurrent
            # sessions share its transaction; the coordinator serialises cache writes
            engine_options = {'poolclass': StaticPool, 'connect_args': {'check_same_thread': False}}

        self.engine = create_async_engine(db_url, **engine_options)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            autoflush=True,
            expire_on_commit=False
        )

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self):
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()
