"""
Brand Service.

Parts store the brand *name*, so renames do not cascade and deletes are
refused while any part still carries the name.
"""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import func

from partsdesk.core.exceptions import ConflictError, DependencyConflictError, NotFoundError
from partsdesk.models.catalog_models import Brand, Part
from partsdesk.models.catalog_schemas import BrandCreate, BrandUpdate

from .base import BaseCatalogService, ilike_term, status_filter

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Brand with this name already exists"


class BrandService(BaseCatalogService):
    """Service for brand operations."""

    def list(self, status: str | None = None, search: str | None = None) -> Sequence[Brand]:
        query = self._db.query(Brand)
        status = status_filter(status)
        if status:
            query = query.filter(Brand.status == status)
        if search:
            query = query.filter(Brand.name.ilike(ilike_term(search)))
        return query.order_by(Brand.name.asc()).all()

    def get(self, brand_id: str) -> Brand:
        brand = self._db.get(Brand, brand_id)
        if brand is None:
            raise NotFoundError("Brand")
        return brand

    def _ensure_name_free(self, name: str, exclude_id: str | None = None) -> None:
        query = self._db.query(Brand).filter(func.lower(Brand.name) == name.lower())
        if exclude_id:
            query = query.filter(Brand.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(DUPLICATE_NAME)

    def create(self, data: BrandCreate) -> Brand:
        self._ensure_name_free(data.name)
        brand = Brand(name=data.name, status=data.status)
        self._db.add(brand)
        self._commit_or_conflict(DUPLICATE_NAME)
        self._db.refresh(brand)
        logger.info("Created brand: %s (id=%s)", brand.name, brand.id)
        return brand

    def update(self, brand_id: str, data: BrandUpdate) -> Brand:
        brand = self.get(brand_id)
        if data.name is not None and data.name != brand.name:
            self._ensure_name_free(data.name, exclude_id=brand.id)
            brand.name = data.name
        if data.status is not None:
            brand.status = data.status
        self._commit_or_conflict(DUPLICATE_NAME)
        self._db.refresh(brand)
        logger.info("Updated brand: %s", brand.id)
        return brand

    def count_parts(self, brand: Brand) -> int:
        return self._db.query(func.count(Part.id)).filter(Part.brand == brand.name).scalar() or 0

    def delete(self, brand_id: str) -> None:
        brand = self.get(brand_id)
        in_use = self.count_parts(brand)
        if in_use:
            raise DependencyConflictError("brand", "part", in_use)
        self._db.delete(brand)
        self._db.commit()
        logger.info("Deleted brand: %s", brand_id)
