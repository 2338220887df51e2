"""
Part Service.

Handles part listing with the catalog's filter set, and part creation
together with the models the part fits.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload

from partsdesk.core.exceptions import NotFoundError
from partsdesk.models.catalog_models import Part, PartModel
from partsdesk.models.catalog_schemas import PartCreate

from .base import BaseCatalogService, ilike_term, paginate, status_filter

logger = logging.getLogger(__name__)


@dataclass
class PartFilters:
    status: str | None = None
    search: str | None = None
    master_part_no: str | None = None
    part_no: str | None = None
    brand: str | None = None
    description: str | None = None
    main_category: str | None = None
    sub_category: str | None = None
    application: str | None = None
    origin: str | None = None
    grade: str | None = None


# Free-text filters matched as case-insensitive substrings.
_CONTAINS_FIELDS = (
    ("part_no", Part.part_no),
    ("brand", Part.brand),
    ("description", Part.description),
    ("main_category", Part.main_category),
    ("sub_category", Part.sub_category),
    ("application", Part.application),
    ("origin", Part.origin),
)


class PartService(BaseCatalogService):
    """Service for part operations."""

    def _query(self):
        return self._db.query(Part).options(selectinload(Part.stock), selectinload(Part.models))

    def _apply_filters(self, query, filters: PartFilters):
        status = status_filter(filters.status)
        if status:
            query = query.filter(Part.status == status)
        if filters.master_part_no:
            query = query.filter(func.lower(Part.master_part_no) == filters.master_part_no.lower())
        for attr, column in _CONTAINS_FIELDS:
            value = getattr(filters, attr)
            if value:
                query = query.filter(column.ilike(ilike_term(value)))
        if filters.grade:
            query = query.filter(Part.grade == filters.grade)
        # The generic search only applies when no field-specific text filter is set.
        if filters.search and not (filters.master_part_no or filters.part_no or filters.description):
            term = ilike_term(filters.search)
            query = query.filter(
                or_(
                    Part.part_no.ilike(term),
                    Part.master_part_no.ilike(term),
                    Part.description.ilike(term),
                    Part.brand.ilike(term),
                )
            )
        return query

    def list(self, filters: PartFilters, page: int = 1, limit: int = 50) -> tuple[list[Part], dict[str, Any]]:
        query = self._apply_filters(self._query(), filters).order_by(Part.created_at.desc(), Part.id)
        return paginate(query, page, limit)

    def get(self, part_id: str) -> Part:
        part = self._query().filter(Part.id == part_id).first()
        if part is None:
            raise NotFoundError("Part")
        return part

    def create(self, data: PartCreate) -> Part:
        part = Part(
            master_part_no=data.master_part_no,
            part_no=data.part_no,
            brand=data.brand,
            description=data.description,
            main_category=data.main_category,
            sub_category=data.sub_category,
            application=data.application,
            origin=data.origin,
            grade=data.grade,
            uom=data.uom,
            cost=data.cost,
            price=data.price,
            status=data.status,
            models=[
                PartModel(model_no=model.model_no, qty_used=model.qty_used, tab=model.tab)
                for model in data.models
            ],
        )
        self._db.add(part)
        self._db.commit()
        logger.info("Created part: %s (id=%s, models=%d)", part.part_no, part.id, len(data.models))
        return self.get(part.id)
