"""
Base catalog service with shared functionality.

Every catalog service receives the request's database session and the
authenticated caller through its constructor, and shares the same
pagination arithmetic.
"""
from __future__ import annotations

import logging
import math
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from partsdesk.core.exceptions import ConflictError
from partsdesk.core.security import AuthIdentity

logger = logging.getLogger(__name__)

T = TypeVar("T")

STATUS_ANY = "all"


def page_info(page: int, limit: int, total: int) -> dict[str, int]:
    """Pagination block returned next to every paged list."""
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit) if limit else 0,
    }


def paginate(query: Query, page: int, limit: int) -> tuple[list[Any], dict[str, int]]:
    """Fetch one page of ``query`` plus the unpaged total under the same filter."""
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, page_info(page, limit, total)


def status_filter(status: str | None) -> str | None:
    """``None``, empty and ``all`` mean no status clause at all."""
    if not status or status == STATUS_ANY:
        return None
    return status


def ilike_term(value: str) -> str:
    return f"%{value}%"


class BaseCatalogService:
    """
    Base service class shared by all catalog services.
    """

    def __init__(self, db: Session, identity: AuthIdentity | None = None):
        """
        Args:
            db: SQLAlchemy database session
            identity: Authenticated caller, if any
        """
        self._db = db
        self._identity = identity

    @property
    def db(self) -> Session:
        return self._db

    @property
    def user_id(self) -> str | None:
        return self._identity.userId if self._identity else None

    def _commit_or_conflict(self, message: str) -> None:
        """Commit, reporting a unique-key violation as a 400 conflict."""
        try:
            self._db.commit()
        except IntegrityError as exc:
            self._db.rollback()
            logger.warning("Write rejected by unique constraint: %s", message)
            raise ConflictError(message) from exc
