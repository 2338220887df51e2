"""
Rack Service.

Rack numbers are unique within a store, not globally.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import contains_eager, joinedload

from partsdesk.core.exceptions import ConflictError, NotFoundError
from partsdesk.models.catalog_models import Rack, Store
from partsdesk.models.catalog_schemas import RackCreate

from .base import BaseCatalogService, ilike_term, paginate, status_filter

logger = logging.getLogger(__name__)

DUPLICATE_RACK_NUMBER = "Rack number already exists in this store"


class RackService(BaseCatalogService):
    """Service for rack operations."""

    def list(
        self,
        search: str | None = None,
        status: str | None = None,
        store_id: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Rack], dict[str, Any]]:
        query = self._db.query(Rack).join(Rack.store).options(contains_eager(Rack.store))
        status = status_filter(status)
        if status:
            query = query.filter(Rack.status == status)
        if store_id:
            query = query.filter(Rack.store_id == store_id)
        if search:
            term = ilike_term(search)
            query = query.filter(
                or_(
                    Rack.rack_number.ilike(term),
                    Rack.description.ilike(term),
                    Store.name.ilike(term),
                )
            )
        return paginate(query.order_by(Rack.created_at.desc(), Rack.id), page, limit)

    def get(self, rack_id: str) -> Rack:
        rack = self._db.query(Rack).options(joinedload(Rack.store)).filter(Rack.id == rack_id).first()
        if rack is None:
            raise NotFoundError("Rack")
        return rack

    def create(self, data: RackCreate) -> Rack:
        if self._db.get(Store, data.store_id) is None:
            raise NotFoundError("Store", data.store_id)
        duplicate = (
            self._db.query(Rack)
            .filter(Rack.store_id == data.store_id, Rack.rack_number == data.rack_number)
            .first()
        )
        if duplicate is not None:
            raise ConflictError(DUPLICATE_RACK_NUMBER)
        rack = Rack(
            rack_number=data.rack_number,
            store_id=data.store_id,
            description=data.description,
            status=data.status,
        )
        self._db.add(rack)
        self._commit_or_conflict(DUPLICATE_RACK_NUMBER)
        logger.info("Created rack: %s in store %s", rack.rack_number, rack.store_id)
        return self.get(rack.id)
