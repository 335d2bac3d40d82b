import threading
from typing import Any

from loguru import logger
from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from slowcinema.core.config import Settings
from slowcinema.models.movie import Movie
from slowcinema.models.revalidation_event import RevalidationEvent
from slowcinema.models.review import Review

__all__ = [
    "COLLECTIONS",
    "StoreGateway",
]

COLLECTIONS: dict[str, type[SQLModel]] = {
    "movies": Movie,
    "reviews": Review,
    "revalidation_events": RevalidationEvent,
}


class StoreGateway:
    """
    Handle on the content store, built once at process start and passed to
    whatever needs it.

    The engine (and with it the connection pool) is created lazily on first
    use. Creation happens under a lock so concurrent first callers share one
    engine instead of each opening their own pool.
    """

    def __init__(
        self,
        database_url: str,
        *,
        database_name: str | None = None,
        pool_max_size: int = 10,
        pool_min_size: int = 5,
        pool_idle_timeout: int = 60,
        connect_timeout: int = 10,
        socket_timeout: int = 45,
        echo: bool = False,
    ):
        if not database_url:
            raise ValueError("A database connection string is required.")
        self.database_url = database_url
        self.database_name = database_name
        self.pool_max_size = pool_max_size
        self.pool_min_size = pool_min_size
        self.pool_idle_timeout = pool_idle_timeout
        self.connect_timeout = connect_timeout
        self.socket_timeout = socket_timeout
        self.echo = echo
        self._engine: Engine | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, *, database_url: str | None = None) -> "StoreGateway":
        return cls(
            database_url or settings.DATABASE_URL,
            database_name=settings.DATABASE_NAME,
            pool_max_size=settings.DB_POOL_MAX_SIZE,
            pool_min_size=settings.DB_POOL_MIN_SIZE,
            pool_idle_timeout=settings.DB_POOL_IDLE_TIMEOUT,
            connect_timeout=settings.DB_CONNECT_TIMEOUT,
            socket_timeout=settings.DB_SOCKET_TIMEOUT,
            echo=settings.DEBUG,
        )

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        url = make_url(self.database_url)
        logger.info(
            "Opening store connection pool",
            backend=url.get_backend_name(),
            database=url.database,
        )
        if url.get_backend_name() == "sqlite":
            return self._create_sqlite_engine()

        connect_args: dict[str, Any] = {"connect_timeout": self.connect_timeout}
        if url.get_backend_name() == "postgresql":
            connect_args["options"] = (
                f"-c statement_timeout={self.socket_timeout * 1000}"
            )
        return create_engine(
            self.database_url,
            echo=self.echo,
            pool_size=self.pool_min_size,
            max_overflow=max(self.pool_max_size - self.pool_min_size, 0),
            pool_recycle=self.pool_idle_timeout,
            pool_timeout=self.connect_timeout,
            pool_pre_ping=True,
            connect_args=connect_args,
        )

    def _create_sqlite_engine(self) -> Engine:
        engine = create_engine(
            self.database_url,
            echo=self.echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        # pysqlite's own transaction handling breaks SAVEPOINT; let
        # SQLAlchemy emit BEGIN itself.
        @event.listens_for(engine, "connect")
        def _disable_pysqlite_transactions(dbapi_connection: Any, _: Any) -> None:
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _emit_begin(connection: Any) -> None:
            connection.exec_driver_sql("BEGIN")

        return engine

    def get_collection(
        self,
        collection_name: str,
        database_name: str | None = None,
    ) -> type[SQLModel]:
        """
        Return the table model backing a named collection.

        Raises:
            KeyError: For unknown collections, or a database other than the
                one this gateway is configured for.
        """
        if (
            database_name is not None
            and self.database_name is not None
            and database_name != self.database_name
        ):
            raise KeyError(f"Unknown database '{database_name}'")
        # Touching the engine makes the first collection lookup open the pool.
        _ = self.engine
        return COLLECTIONS[collection_name]

    def session(self) -> Session:
        return Session(self.engine)

    def init(self, *, create_tables: bool = False) -> None:
        _ = self.engine
        if create_tables:
            SQLModel.metadata.create_all(self.engine)

    def shutdown(self) -> None:
        with self._lock:
            if self._engine is not None:
                logger.info("Closing store connection pool")
                self._engine.dispose()
                self._engine = None
