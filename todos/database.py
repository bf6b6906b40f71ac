import re
from typing import Any

import structlog
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from todos import config

log = structlog.get_logger()

Base = declarative_base()


# statements touching credentials never log their bound values
SENSITIVE_TABLES = re.compile(r"\busers\b", re.IGNORECASE)
REDACTED = "[redacted]"


def loggable_parameters(statement: str, parameters: Any) -> Any:
    if parameters and SENSITIVE_TABLES.search(statement):
        return REDACTED
    return parameters


def log_queries(engine: AsyncEngine) -> None:
    """Log every statement sent to the store together with its parameters."""

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _log_statement(conn, cursor, statement, parameters, context, executemany):
        log.info(
            "query",
            statement=" ".join(statement.split()),
            parameters=loggable_parameters(statement, parameters),
        )


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def make_engine(url: str, **kwargs) -> AsyncEngine:
    engine = create_async_engine(url, pool_pre_ping=True, **kwargs)
    if engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(engine)
    if config.LOG_QUERIES:
        log_queries(engine)
    return engine


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


engine = make_engine(config.DATABASE_URL)
AsyncSessionLocal = make_sessionmaker(engine)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create todolists, todos and users if they do not exist yet."""
    # register the tables on Base.metadata
    from todos.models import todo, user  # noqa: F401

    bind = bind or engine
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    log.info("schema ready", url=bind.url.render_as_string(hide_password=True))
