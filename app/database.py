import logging

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.ext.declarative import declarative_base
from app.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _async_url(url: str) -> str:
    # Ensure we use the async driver
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class DatabaseState:
    """Process-wide engine and session factory.

    The engine is created on first use and then shared by every request in
    the process. ``configure`` points the state at another URL and drops the
    cached engine so the next caller builds a fresh one.
    """

    def __init__(self, url: str | None = None):
        self._url = url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def url(self) -> str:
        return _async_url(self._url or settings.database_url)

    def engine(self) -> AsyncEngine:
        if self._engine is None:
            logger.info("Creating database engine")
            self._engine = create_async_engine(self.url, echo=False, pool_pre_ping=True)
            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False
            )
        else:
            logger.debug("Reusing cached database engine")
        return self._engine

    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        self.engine()
        return self._session_factory

    def configure(self, url: str | None) -> None:
        self._url = url
        self._engine = None
        self._session_factory = None

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None


db_state = DatabaseState()


async def init_db():
    # Importing the models registers their tables on Base.metadata
    from app.models import tasks, user  # noqa: F401

    async with db_state.engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db():
    async with db_state.session_factory()() as db:
        try:
            yield db
        finally:
            await db.close()
