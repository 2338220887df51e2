"""
Supplier Service.

Handles supplier listing (with a per-supplier purchase order count) and
creation. Supplier codes are optional but unique when given.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, or_

from partsdesk.core.exceptions import ConflictError, NotFoundError
from partsdesk.models.catalog_models import PurchaseOrder, Supplier
from partsdesk.models.catalog_schemas import SupplierCreate

from .base import BaseCatalogService, ilike_term, paginate, status_filter

logger = logging.getLogger(__name__)

DUPLICATE_CODE = "Supplier with this code already exists"

SEARCH_FIELDS = {
    "name": Supplier.name,
    "code": Supplier.code,
    "email": Supplier.email,
    "phone": Supplier.phone,
    "address": Supplier.address,
    "contactPerson": Supplier.contact_person,
}


class SupplierService(BaseCatalogService):
    """Service for supplier operations."""

    def _search_clause(self, search: str, search_field: str | None):
        term = ilike_term(search)
        column = SEARCH_FIELDS.get(search_field or "")
        if column is not None:
            return column.ilike(term)
        return or_(*(col.ilike(term) for col in SEARCH_FIELDS.values()))

    def list(
        self,
        search: str | None = None,
        search_field: str | None = None,
        status: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[tuple[Supplier, int]], dict[str, Any]]:
        """Return ``(supplier, purchase_order_count)`` pairs, name ascending."""
        query = self._db.query(Supplier)
        status = status_filter(status)
        if status:
            query = query.filter(Supplier.status == status)
        if search:
            query = query.filter(self._search_clause(search, search_field))
        suppliers, pagination = paginate(query.order_by(Supplier.name.asc(), Supplier.id), page, limit)
        counts = self.purchase_order_counts([s.id for s in suppliers])
        return [(s, counts.get(s.id, 0)) for s in suppliers], pagination

    def purchase_order_counts(self, supplier_ids: list[str]) -> dict[str, int]:
        if not supplier_ids:
            return {}
        rows = (
            self._db.query(PurchaseOrder.supplier_id, func.count(PurchaseOrder.id))
            .filter(PurchaseOrder.supplier_id.in_(supplier_ids))
            .group_by(PurchaseOrder.supplier_id)
            .all()
        )
        return {supplier_id: count for supplier_id, count in rows}

    def get(self, supplier_id: str) -> Supplier:
        supplier = self._db.get(Supplier, supplier_id)
        if supplier is None:
            raise NotFoundError("Supplier")
        return supplier

    def create(self, data: SupplierCreate) -> Supplier:
        if data.code and self._db.query(Supplier).filter(Supplier.code == data.code).first() is not None:
            raise ConflictError(DUPLICATE_CODE)
        supplier = Supplier(
            code=data.code or None,
            name=data.name,
            contact_person=data.contact_person,
            email=data.email,
            phone=data.phone,
            address=data.address,
            city=data.city,
            state=data.state,
            status=data.status,
        )
        self._db.add(supplier)
        self._commit_or_conflict(DUPLICATE_CODE)
        self._db.refresh(supplier)
        logger.info("Created supplier: %s (id=%s)", supplier.name, supplier.id)
        return supplier
