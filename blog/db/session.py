import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from blog.config import settings

Base = declarative_base()


def build_engine(url: str, echo: bool = False) -> Engine:
    connect_args = {}
    kwargs = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
        # A single shared connection, otherwise every connection gets its own empty database
        if ":memory:" in url or url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, echo=echo, connect_args=connect_args, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session):
    """
    Commit everything done inside the block, or roll all of it back.

    Nested use joins the outer unit of work: only the outermost block commits.
    """
    if db.info.get("unit_of_work"):
        yield db
        return

    db.info["unit_of_work"] = True
    try:
        yield db
        db.commit()
    except Exception:
        logging.debug("Rolling back unit of work")
        db.rollback()
        raise
    finally:
        db.info.pop("unit_of_work", None)
