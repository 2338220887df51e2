"""
Category Service.

Main categories and sub categories share one table; a sub category points at
its parent through ``parent_id``.
"""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import joinedload, selectinload

from partsdesk.core.exceptions import NotFoundError
from partsdesk.models.catalog_models import Category
from partsdesk.models.catalog_schemas import CategoryCreate

from .base import BaseCatalogService, status_filter

logger = logging.getLogger(__name__)


class CategoryService(BaseCatalogService):
    """Service for category operations."""

    def _query(self):
        return self._db.query(Category).options(
            joinedload(Category.parent),
            selectinload(Category.subcategories),
        )

    def list(self, status: str | None = None, category_type: str | None = None) -> Sequence[Category]:
        query = self._query()
        status = status_filter(status)
        if status:
            query = query.filter(Category.status == status)
        if category_type:
            query = query.filter(Category.type == category_type)
        return query.order_by(Category.name.asc()).all()

    def get(self, category_id: str) -> Category:
        category = self._query().filter(Category.id == category_id).first()
        if category is None:
            raise NotFoundError("Category")
        return category

    def create(self, data: CategoryCreate) -> Category:
        if data.parent_id and self._db.get(Category, data.parent_id) is None:
            raise NotFoundError("Parent category", data.parent_id)
        category = Category(
            name=data.name,
            type=data.type,
            parent_id=data.parent_id,
            description=data.description,
            status=data.status,
        )
        self._db.add(category)
        self._db.commit()
        logger.info("Created category: %s (id=%s, type=%s)", category.name, category.id, category.type)
        return self.get(category.id)
