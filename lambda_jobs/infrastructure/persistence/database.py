import ssl

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from ...config import Settings
from .models import Base


def _insecure_ssl_context() -> ssl.SSLContext:
    """TLS context that skips certificate and hostname verification."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


class Database:
    """Database connection manager, opened once per invocation."""

    def __init__(self, url: str, use_ssl: bool = False) -> None:
        connect_args = {"ssl": _insecure_ssl_context()} if use_ssl else {}
        self._engine = create_async_engine(
            url,
            echo=False,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, use_ssl=settings.db_ssl)

    async def create_tables(self) -> None:
        """Create the bookkeeping tables if they don't exist."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def session(self) -> AsyncSession:
        """Create a new session."""
        return self._session_factory()

    async def close(self) -> None:
        """Close the database connection."""
        await self._engine.dispose()
