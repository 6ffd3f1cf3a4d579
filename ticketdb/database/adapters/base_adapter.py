# ==============================================================================
# BASE DATABASE ADAPTER - Abstract Interface
# ==============================================================================
# One pooled SQLAlchemy async engine per adapter. The concrete adapters
# are the two variants of the database handle.
# ==============================================================================

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, ClassVar, Dict, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import QueuePool

from ticketdb.core.constants import DatabaseConstants
from ticketdb.core.exceptions import ConnectionError
from ticketdb.core.settings import DatabaseType

logger = logging.getLogger(__name__)


class BaseDatabaseAdapter(ABC):
    """
    Abstract Base Class for Database Adapters.

    Owns a SQLAlchemy async engine (and so a connection pool capped at
    ``pool_size`` connections) built from a user-facing connection string.
    Subclasses translate the connection string to their async driver URL
    and choose engine options; everything else is shared.

    Class Attributes:
        database_type: Tag identifying the backend variant
        prefix: Connection string prefix that selects this variant

    Example:
        >>> adapter = SQLiteAdapter("sqlite://test.db")
        >>> await adapter.connect()
        >>> async with adapter.session() as session:
        ...     await session.execute(text("SELECT 1"))
        >>> await adapter.disconnect()
    """

    database_type: ClassVar[DatabaseType]
    prefix: ClassVar[str]

    def __init__(
        self,
        connection_string: str,
        pool_size: int = DatabaseConstants.DEFAULT_POOL_SIZE,
        echo: bool = False,
    ) -> None:
        """
        Initialize adapter.

        Args:
            connection_string: URL as given on the command line
            pool_size: Maximum concurrent connections
            echo: Log every SQL statement
        """
        self._connection_string = connection_string
        self._database_url = self.to_async_url(connection_string)
        self._pool_size = pool_size
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    # ==========================================================================
    # VARIANT-SPECIFIC HOOKS
    # ==========================================================================

    @classmethod
    def matches(cls, connection_string: str) -> bool:
        """Check whether the connection string selects this variant."""
        return connection_string.startswith(cls.prefix)

    @classmethod
    @abstractmethod
    def to_async_url(cls, connection_string: str) -> str:
        """
        Rewrite a user-facing connection string to a SQLAlchemy async URL.

        Args:
            connection_string: URL starting with ``cls.prefix``

        Returns:
            URL naming the async driver for this backend
        """
        pass

    @abstractmethod
    def engine_options(self) -> Dict[str, Any]:
        """
        Keyword arguments for ``create_async_engine``.

        Must cap the pool at ``self.pool_size`` connections.
        """
        pass

    # ==========================================================================
    # LIFECYCLE METHODS
    # ==========================================================================

    async def connect(self) -> None:
        """
        Create the engine and verify the pool can hand out a connection.

        Raises:
            ConnectionError: If the engine cannot be created or the
                first connection fails
        """
        if self._engine is not None:
            return

        try:
            self._engine = create_async_engine(
                self._database_url,
                **self.engine_options(),
            )
            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        except Exception as e:
            logger.error(f"Failed to connect to {self.database_type.value}: {e}")
            await self.disconnect()
            raise ConnectionError(
                f"{self.database_type.value} connection failed: {e}",
                details={"url": self.safe_url},
            ) from e

        logger.info(
            f"{self.database_type.value} pool opened "
            f"(max {self._pool_size} connections) at {self.safe_url}"
        )

    async def disconnect(self) -> None:
        """Close pooled connections and dispose the engine."""
        if self._engine is not None:
            await self._engine.dispose()
            logger.info(f"{self.database_type.value} pool disposed")
        self._engine = None
        self._session_factory = None

    # ==========================================================================
    # SESSION MANAGEMENT
    # ==========================================================================

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a session bound to this adapter's pool.

        Commits on successful exit, rolls back on exception.

        Yields:
            AsyncSession instance

        Raises:
            RuntimeError: If database not connected
        """
        if not self._session_factory:
            raise RuntimeError(
                "Database not connected. Call connect() first."
            )

        session: AsyncSession = self._session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    # ==========================================================================
    # PROPERTIES
    # ==========================================================================

    @property
    def engine(self) -> AsyncEngine:
        """Get the SQLAlchemy engine."""
        if self._engine is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def pool_size(self) -> int:
        return self._pool_size

    @property
    def database_url(self) -> str:
        """Async driver URL, password included."""
        return self._database_url

    @property
    def safe_url(self) -> str:
        """Async driver URL with the password masked, for logs."""
        return make_url(self._database_url).render_as_string(hide_password=True)

    def pool_status(self) -> Dict[str, int]:
        """
        Get current connection pool statistics.

        Returns:
            Dict with size, checked_in, checked_out and overflow counts.
            Pools that hold a single shared connection report size 1.
        """
        pool = self.engine.pool
        if not isinstance(pool, QueuePool):
            return {"size": 1, "checked_in": 0, "checked_out": 0, "overflow": 0}
        return {
            "size": pool.size(),
            "checked_in": pool.checkedin(),
            "checked_out": pool.checkedout(),
            "overflow": pool.overflow(),
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.safe_url}>"
