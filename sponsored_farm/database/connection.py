# sponsored_farm/database/connection.py

from typing import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, Engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from ..core.logging import FarmLogger, log_with_context, INFO, DEBUG, ERROR
from ..types.config import DatabaseConfig


class DatabaseManager:
    def __init__(self, config: DatabaseConfig):
        if not config:
            raise ValueError("DatabaseConfig is required")

        self.config = config
        self.logger = FarmLogger.get_logger(f'database.{self.__class__.__name__.lower()}')
        self._engine = None
        self._session_factory = None

    @property
    def is_sqlite(self) -> bool:
        return self.config.url.startswith("sqlite")

    def _extract_host_from_url(self, url: str) -> str:
        if '@' in url and '/' in url:
            after_at = url.split('@')[1]
            return after_at.split('/')[0]
        return "local"

    def initialize(self) -> None:
        if self._engine is not None:
            self.logger.warning("Database already initialized")
            return

        try:
            self.logger.info("Initializing database engine")

            if self.is_sqlite:
                # one shared connection keeps in-memory databases alive across sessions
                self._engine = create_engine(
                    self.config.url,
                    poolclass=StaticPool,
                    connect_args={"check_same_thread": False},
                    echo=self.config.echo,
                )
            else:
                self._engine = create_engine(
                    self.config.url,
                    poolclass=QueuePool,
                    pool_size=self.config.pool_size,
                    max_overflow=self.config.max_overflow,
                    pool_timeout=30,
                    pool_recycle=3600,
                    echo=self.config.echo,
                )

            self._session_factory = sessionmaker(
                bind=self._engine,
                expire_on_commit=False,
            )

            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            log_with_context(self.logger, INFO, "Database initialized successfully",
                             db_host=self._extract_host_from_url(self.config.url))

        except Exception as e:
            log_with_context(self.logger, ERROR, "Failed to initialize database",
                             error=str(e),
                             error_type=type(e).__name__)
            raise

    def shutdown(self) -> None:
        if self._engine is None:
            return

        self.logger.info("Shutting down database connections")
        self._engine.dispose()
        self._engine = None
        self._session_factory = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._session_factory

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        session = self.session_factory()
        try:
            log_with_context(self.logger, DEBUG, "Database session created")
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
            log_with_context(self.logger, DEBUG, "Database session closed")

    @contextmanager
    def get_transaction(self) -> Generator[Session, None, None]:
        with self.get_session() as session:
            try:
                yield session
                session.commit()
                log_with_context(self.logger, DEBUG, "Database transaction committed")
            except Exception as e:
                session.rollback()
                log_with_context(self.logger, DEBUG, "Database transaction rolled back",
                                 error=str(e),
                                 error_type=type(e).__name__)
                raise

    def health_check(self) -> bool:
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            log_with_context(self.logger, ERROR, "Database health check failed", error=str(e))
            return False
