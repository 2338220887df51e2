"""
Purchase Order Service.

Handles purchase order listing and creation. Line totals default to
``quantity * unit_price`` and the order total to the sum of its lines.
"""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import joinedload, selectinload

from partsdesk.core.exceptions import ConflictError, NotFoundError
from partsdesk.db.base_class import utcnow
from partsdesk.models.catalog_models import Part, PurchaseOrder, PurchaseOrderItem, Supplier
from partsdesk.models.catalog_schemas import PurchaseOrderCreate

from .base import BaseCatalogService, status_filter

logger = logging.getLogger(__name__)

DUPLICATE_PO_NO = "Purchase order with this number already exists"


class PurchaseOrderService(BaseCatalogService):
    """Service for purchase order operations."""

    def _query(self):
        return self._db.query(PurchaseOrder).options(
            joinedload(PurchaseOrder.supplier),
            selectinload(PurchaseOrder.items).selectinload(PurchaseOrderItem.part),
        )

    def list(self, po_type: str | None = None, status: str | None = None) -> Sequence[PurchaseOrder]:
        query = self._query()
        if po_type:
            query = query.filter(PurchaseOrder.type == po_type)
        status = status_filter(status)
        if status:
            query = query.filter(PurchaseOrder.status == status)
        return query.order_by(PurchaseOrder.created_at.desc()).all()

    def get(self, po_id: str) -> PurchaseOrder:
        po = self._query().filter(PurchaseOrder.id == po_id).first()
        if po is None:
            raise NotFoundError("Purchase order")
        return po

    def create(self, data: PurchaseOrderCreate) -> PurchaseOrder:
        if self._db.get(Supplier, data.supplier_id) is None:
            raise NotFoundError("Supplier", data.supplier_id)
        if self._db.query(PurchaseOrder).filter(PurchaseOrder.po_no == data.po_no).first() is not None:
            raise ConflictError(DUPLICATE_PO_NO)
        for item in data.items:
            if self._db.get(Part, item.part_id) is None:
                raise NotFoundError("Part", item.part_id)

        items = [
            PurchaseOrderItem(
                part_id=item.part_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price if item.total_price is not None else item.quantity * item.unit_price,
            )
            for item in data.items
        ]
        total_amount = data.total_amount
        if total_amount is None:
            total_amount = sum(float(i.total_price) for i in items)

        po = PurchaseOrder(
            po_no=data.po_no,
            supplier_id=data.supplier_id,
            type=data.type,
            status=data.status,
            order_date=data.order_date or utcnow(),
            expected_date=data.expected_date,
            total_amount=total_amount,
            items=items,
        )
        self._db.add(po)
        self._commit_or_conflict(DUPLICATE_PO_NO)
        logger.info("Created purchase order: %s (id=%s, total=%s)", po.po_no, po.id, total_amount)
        return self.get(po.id)
