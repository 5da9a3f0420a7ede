import logging
import os
from typing import Generator

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from blog.config import Settings, settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def build_engine(cfg: Settings) -> Engine:
    return create_engine(
        cfg.database_url,
        connect_args={"check_same_thread": False} if cfg.is_sqlite else {},
        echo=cfg.sql_echo,
        pool_pre_ping=True,
    )


def build_sessionmaker(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False)


engine = build_engine(settings)
SessionLocal = build_sessionmaker(engine)


def _ensure_sqlite_dir(bind: Engine) -> None:
    database = bind.url.database
    if bind.url.get_backend_name() == "sqlite" and database and database != ":memory:":
        os.makedirs(os.path.dirname(os.path.abspath(database)), exist_ok=True)


def init_db(bind: Engine = None, cfg: Settings = None) -> None:
    """Create the blog tables from ORM metadata.

    Only runs in dev/test environments and only against an empty database;
    anything else is expected to be provisioned out of band.
    """
    from blog import models  # noqa: F401 ensure model metadata registered

    bind = bind if bind is not None else engine
    cfg = cfg if cfg is not None else settings
    if not cfg.allows_create_all:
        logger.info("Skipping create_all for %s environment", cfg.env)
        return
    try:
        _ensure_sqlite_dir(bind)
        with bind.connect() as conn:
            if not inspect(conn).get_table_names():
                Base.metadata.create_all(bind=bind)
                logger.info("Created blog tables on %s", bind.url)
    except Exception as e:
        logger.error(f"Database initialisation failed: {e}", exc_info=True)
        raise


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session and close it afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
