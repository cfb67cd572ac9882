"""
Database configuration and session management
"""
import logging
import time
from typing import Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.core.logging_config import LoggingConfig
from app.core.metrics import (db_connection_pool_size,
                              db_query_duration_seconds, db_queries_total)

# Lazy initialization - don't create engine at module level
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None

# Base class for models
Base = declarative_base()

_TABLE_KEYWORDS = {
    'select': 'FROM',
    'insert': 'INTO',
    'delete': 'FROM',
}


def _extract_table(operation: str, statement: str) -> str:
    """Best-effort table name from a SQL statement"""
    words = statement.strip().split()
    if operation == 'update' and len(words) > 1:
        return words[1].lower().strip(';"')
    keyword = _TABLE_KEYWORDS.get(operation)
    if not keyword:
        return "unknown"
    for i, word in enumerate(words):
        if word.upper() == keyword and i + 1 < len(words):
            return words[i + 1].lower().strip(';"(')
    return "unknown"


def _update_pool_metrics(engine: Engine):
    pool = engine.pool
    checked_out = getattr(pool, "checkedout", None)
    size = getattr(pool, "size", None)
    if checked_out is None or size is None:
        return
    db_connection_pool_size.labels(state="active").set(checked_out())
    db_connection_pool_size.labels(state="idle").set(max(size() - checked_out(), 0))


def _setup_db_metrics(engine: Engine):
    """Setup SQLAlchemy event listeners for database metrics"""

    @event.listens_for(engine, "before_cursor_execute")
    def receive_before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault('query_start_time', []).append(time.time())

    @event.listens_for(engine, "after_cursor_execute")
    def receive_after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        if not conn.info.get('query_start_time'):
            return
        duration = time.time() - conn.info['query_start_time'].pop()
        stripped = statement.strip()
        operation = stripped.split()[0].lower() if stripped else "unknown"
        table = _extract_table(operation, stripped)
        db_queries_total.labels(operation=operation, table=table).inc()
        db_query_duration_seconds.labels(operation=operation, table=table).observe(duration)

    @event.listens_for(engine, "checkout")
    def receive_checkout(dbapi_conn, connection_record, connection_proxy):
        _update_pool_metrics(engine)

    @event.listens_for(engine, "checkin")
    def receive_checkin(dbapi_conn, connection_record):
        _update_pool_metrics(engine)


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def _configure_sqlite_connections(engine: Engine):
    """Foreign keys on, and lower() folding non-ASCII letters like PostgreSQL does"""

    @event.listens_for(engine, "connect")
    def receive_connect(dbapi_conn, connection_record):
        dbapi_conn.create_function("lower", 1, _unicode_lower, deterministic=True)
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine with pool settings appropriate for the backend"""
    settings = get_settings()
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection so every session sees the same in-memory database
            kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, echo=echo, **kwargs)
        _configure_sqlite_connections(engine)
    else:
        engine = create_engine(
            database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_pre_ping=True,
            echo=echo,
            connect_args={
                "connect_timeout": 5,
                "options": "-c statement_timeout=5000"
            } if database_url.startswith("postgresql") else {}
        )
    _setup_db_metrics(engine)
    return engine


def get_engine() -> Engine:
    """Get or create database engine (lazy initialization)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        LoggingConfig.configure()

        _engine = build_engine(settings.database_url, echo=settings.log_sqlalchemy)

        sqlalchemy_logger = logging.getLogger("sqlalchemy.engine")
        if not settings.log_sqlalchemy:
            sqlalchemy_logger.setLevel(logging.WARNING)
            sqlalchemy_logger.propagate = False

    return _engine


def get_session_local() -> sessionmaker:
    """Get or create session factory (lazy initialization)"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def __getattr__(name):
    """Lazy module attributes for engine and SessionLocal"""
    if name == 'engine':
        return get_engine()
    elif name == 'SessionLocal':
        return get_session_local()
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting database session
    """
    SessionLocal = get_session_local()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
