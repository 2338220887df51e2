"""Database engine setup.

SQLite URLs (dev and tests) get ``check_same_thread`` disabled because FastAPI
runs sync handlers on a threadpool. An in-memory SQLite URL is pinned to one
connection so every session sees the same schema.
"""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from partsdesk.core.config import settings


def _build_engine(url: str):
    if url.startswith("sqlite"):
        if ":memory:" in url:
            return create_engine(
                url,
                future=True,
                echo=settings.DATABASE_ECHO,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        db_path = url.split("///", 1)[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            url,
            future=True,
            echo=settings.DATABASE_ECHO,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        url,
        future=True,
        echo=settings.DATABASE_ECHO,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,  # seconds
        pool_pre_ping=True,
    )


engine = _build_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
