"""
Kit Service.

A kit bundles parts under one kit number.
"""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import selectinload

from partsdesk.core.exceptions import ConflictError, NotFoundError
from partsdesk.models.catalog_models import Kit, KitItem, Part
from partsdesk.models.catalog_schemas import KitCreate

from .base import BaseCatalogService, status_filter

logger = logging.getLogger(__name__)

DUPLICATE_KIT_NO = "Kit with this number already exists"


class KitService(BaseCatalogService):
    """Service for kit operations."""

    def _query(self):
        return self._db.query(Kit).options(selectinload(Kit.items).selectinload(KitItem.part))

    def list(self, status: str | None = None) -> Sequence[Kit]:
        query = self._query()
        status = status_filter(status)
        if status:
            query = query.filter(Kit.status == status)
        return query.order_by(Kit.created_at.desc()).all()

    def get(self, kit_id: str) -> Kit:
        kit = self._query().filter(Kit.id == kit_id).first()
        if kit is None:
            raise NotFoundError("Kit")
        return kit

    def create(self, data: KitCreate) -> Kit:
        if self._db.query(Kit).filter(Kit.kit_no == data.kit_no).first() is not None:
            raise ConflictError(DUPLICATE_KIT_NO)
        part_ids = {item.part_id for item in data.items}
        if part_ids:
            found = {pid for (pid,) in self._db.query(Part.id).filter(Part.id.in_(part_ids)).all()}
            missing = sorted(part_ids - found)
            if missing:
                raise NotFoundError("Part", missing[0])
        kit = Kit(
            kit_no=data.kit_no,
            name=data.name,
            description=data.description,
            total_cost=data.total_cost,
            price=data.price,
            status=data.status,
            items=[KitItem(part_id=item.part_id, quantity=item.quantity) for item in data.items],
        )
        self._db.add(kit)
        self._commit_or_conflict(DUPLICATE_KIT_NO)
        logger.info("Created kit: %s (id=%s, items=%d)", kit.kit_no, kit.id, len(data.items))
        return self.get(kit.id)
