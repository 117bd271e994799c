# money_manager/core/database.py
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from fastapi import Request
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

logger = logging.getLogger(__name__)

# Base class for all models
Base = declarative_base()


class Database:
    """Owns the async engine and session factory for one process.

    Built explicitly at startup (see ``money_manager.main.lifespan``) and
    disposed at shutdown. Request handlers reach it through ``app.state.db``.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    def _engine_kwargs(self) -> dict:
        engine_kwargs = {
            "echo": self.echo,
            "future": True,
            "pool_pre_ping": True,    # Check connection before using
        }
        if self.url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update({
                "pool_size": 5,
                "max_overflow": 5,
                "pool_timeout": 30,       # Seconds to wait for a free connection
                "pool_recycle": 300,      # Recycle connections after 5 minutes
            })
        return engine_kwargs

    def connect(self) -> "Database":
        if self.engine is not None:
            return self
        self.engine = create_async_engine(self.url, **self._engine_kwargs())
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )
        logger.info(f"🔌 Database engine created for {self.engine.url.render_as_string(hide_password=True)}")
        return self

    async def create_all(self) -> None:
        """Create missing tables (local development and tests; production uses Alembic)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        session = self.session_factory()
        try:
            yield session
        except Exception as e:
            # Log the error and rollback
            logger.error(f"Database session error: {str(e)}")
            await session.rollback()
            raise
        finally:
            await session.close()
            logger.debug("Database session closed")


# Dependency to get DB session with proper exception handling
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session
