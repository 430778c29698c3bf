# household/core/db.py - SQLAlchemy database setup with connection pooling
from sqlalchemy import create_engine, text, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool, QueuePool
from typing import Generator, Optional
import logging
import time
import threading
from contextlib import contextmanager

from household.core.config import settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Database manager with connection pooling and health monitoring"""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.DATABASE_URL
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def initialize(self):
        """Initialize database engine and session maker"""
        if self._initialized:
            return

        with self._lock:
            if self._initialized:
                return

            try:
                self.engine = self._create_engine()
                self.SessionLocal = sessionmaker(
                    autocommit=False,
                    autoflush=False,
                    bind=self.engine
                )

                self._setup_event_listeners()
                self._test_connection()

                self._initialized = True
                logger.info("Database initialized successfully")

            except Exception as e:
                logger.error(f"Failed to initialize database: {e}")
                raise

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine for sqlite or PostgreSQL"""
        engine_args = {
            "url": self.database_url,
            "echo": settings.DATABASE_ECHO or settings.DEV_LOG_SQL,
        }

        if self.is_sqlite:
            # A single shared connection keeps in-memory databases alive across sessions
            engine_args.update({
                "poolclass": StaticPool,
                "connect_args": {
                    "check_same_thread": False,
                    "timeout": 30,
                },
            })
        else:
            engine_args.update({
                "poolclass": QueuePool,
                "pool_size": settings.DATABASE_POOL_SIZE,
                "max_overflow": settings.DATABASE_MAX_OVERFLOW,
                "pool_timeout": settings.DATABASE_POOL_TIMEOUT,
                "pool_recycle": settings.DATABASE_POOL_RECYCLE,
                "pool_pre_ping": True,
                "connect_args": {
                    "connect_timeout": 10,
                    "application_name": f"household_admin_{settings.ENV}",
                    "options": "-c timezone=UTC"
                }
            })

        return create_engine(**engine_args)

    def _setup_event_listeners(self):
        """Set up SQLAlchemy event listeners for pragmas and slow query logging"""

        @event.listens_for(self.engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if self.is_sqlite:
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                # Cascading deletes rely on this
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.execute("PRAGMA synchronous=NORMAL")
                cursor.close()

        @event.listens_for(self.engine, "before_cursor_execute")
        def receive_before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            if settings.is_development:
                context._query_start_time = time.time()

        @event.listens_for(self.engine, "after_cursor_execute")
        def receive_after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
            if settings.is_development and hasattr(context, '_query_start_time'):
                total = time.time() - context._query_start_time
                if total > 0.1:
                    logger.warning(f"Slow query ({total:.3f}s): {statement[:100]}...")

    def _test_connection(self):
        """Test database connection and log status"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1")).fetchone()

                if self.is_sqlite:
                    db_info = conn.execute(text("SELECT sqlite_version()")).fetchone()
                    logger.info(f"Connected to SQLite: {db_info[0]}")
                else:
                    db_info = conn.execute(text("SELECT version()")).fetchone()
                    logger.info(f"Connected to PostgreSQL: {db_info[0][:50]}...")

        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            raise

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get database session with automatic cleanup and error handling.

        Yields:
            Session: SQLAlchemy database session
        """
        if not self._initialized:
            self.initialize()

        session = self.SessionLocal()
        try:
            yield session
        except Exception as e:
            session.rollback()
            logger.error(f"Database session error: {e}")
            raise
        finally:
            session.close()

    @contextmanager
    def transaction(self):
        """
        Context manager for database transactions with automatic rollback.

        Usage:
            with db_manager.transaction() as session:
                seed_lookups(session)
        """
        if not self._initialized:
            self.initialize()

        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Transaction error: {e}")
            raise
        finally:
            session.close()

    def health_check(self) -> dict:
        """
        Perform database health check.

        Returns:
            Dict with health status information
        """
        try:
            if not self._initialized:
                self.initialize()

            start_time = time.time()
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))

            response_time = (time.time() - start_time) * 1000
            result = {
                "status": "healthy",
                "response_time_ms": round(response_time, 2),
                "database_url": self.database_url.split("@")[-1] if "@" in self.database_url else "local",
            }
            if isinstance(self.engine.pool, QueuePool):
                result["pool"] = {
                    "size": self.engine.pool.size(),
                    "checked_out": self.engine.pool.checkedout(),
                    "overflow": self.engine.pool.overflow(),
                    "checked_in": self.engine.pool.checkedin(),
                }
            return result

        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": "unhealthy",
                "error": str(e)
            }

    def close(self):
        """Close database connections and cleanup"""
        if self.engine:
            self.engine.dispose()
            logger.info("Database connections closed")


db_manager = DatabaseManager()


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency to get database session.

    Usage in FastAPI:
        @router.get("/")
        async def list_schools(db: Session = Depends(get_db)):
            ...
    """
    yield from db_manager.get_session()


def get_engine() -> Engine:
    """Get SQLAlchemy engine instance"""
    if not db_manager._initialized:
        db_manager.initialize()
    return db_manager.engine


def get_session_maker() -> sessionmaker:
    """Get session maker for manual session creation"""
    if not db_manager._initialized:
        db_manager.initialize()
    return db_manager.SessionLocal


def health_check() -> dict:
    """Get database health status (convenience function)"""
    return db_manager.health_check()


__all__ = [
    "get_db",
    "get_engine",
    "get_session_maker",
    "health_check",
    "db_manager",
    "DatabaseManager",
]
