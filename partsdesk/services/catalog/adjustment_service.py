"""
Inventory Adjustment Service.

Creating an adjustment is a single all-or-nothing write: the header, its
items and the stock row of every referenced part are flushed in one
transaction and committed once. Any failure rolls the whole request back.

``previous_quantity`` comes from the caller and is not re-read from the
stock table, and no row lock is taken. Two concurrent adjustments of the
same part therefore race, and the last commit wins the stock row.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from partsdesk.core.exceptions import ConflictError, NotFoundError, RequestValidationFailed
from partsdesk.db.base_class import utcnow
from partsdesk.models.catalog_models import (
    InventoryAdjustment,
    InventoryAdjustmentItem,
    Part,
    Stock,
)
from partsdesk.models.catalog_schemas import AdjustmentCreate

from .base import BaseCatalogService, paginate

logger = logging.getLogger(__name__)

DUPLICATE_ADJUSTMENT_NO = "Inventory adjustment with this number already exists"


class AdjustmentService(BaseCatalogService):
    """Service for inventory adjustments."""

    def _query(self):
        return self._db.query(InventoryAdjustment).options(
            selectinload(InventoryAdjustment.items).selectinload(InventoryAdjustmentItem.part)
        )

    def list(self, page: int = 1, limit: int = 10) -> tuple[list[InventoryAdjustment], dict[str, Any]]:
        query = self._query().order_by(InventoryAdjustment.date.desc(), InventoryAdjustment.id)
        return paginate(query, page, limit)

    def get(self, adjustment_id: str) -> InventoryAdjustment:
        adjustment = self._query().filter(InventoryAdjustment.id == adjustment_id).first()
        if adjustment is None:
            raise NotFoundError("Inventory adjustment")
        return adjustment

    def _upsert_stock(self, part_id: str, quantity: int) -> Stock:
        """Overwrite the part's on-hand quantity, creating the row on first use."""
        stock = self._db.query(Stock).filter(Stock.part_id == part_id).first()
        if stock is None:
            stock = Stock(part_id=part_id, quantity=quantity)
            self._db.add(stock)
        else:
            stock.quantity = quantity
            stock.updated_at = utcnow()
        self._db.flush()
        return stock

    def _ensure_parts_exist(self, part_ids: set[str]) -> None:
        if not part_ids:
            return
        found = {pid for (pid,) in self._db.query(Part.id).filter(Part.id.in_(part_ids)).all()}
        missing = sorted(part_ids - found)
        if missing:
            raise NotFoundError("Part", missing[0])

    def _ensure_number_free(self, adjustment_no: str | None) -> None:
        if not adjustment_no:
            return
        taken = (
            self._db.query(InventoryAdjustment.id)
            .filter(InventoryAdjustment.adjustment_no == adjustment_no)
            .first()
        )
        if taken is not None:
            raise ConflictError(DUPLICATE_ADJUSTMENT_NO)

    def create(self, data: AdjustmentCreate) -> InventoryAdjustment:
        if not data.items:
            raise RequestValidationFailed(message="Adjustment must have at least one item")
        self._ensure_number_free(data.adjustment_no)
        self._ensure_parts_exist({item.part_id for item in data.items if item.part_id})

        items = [
            InventoryAdjustmentItem(
                position=position,
                part_id=item.part_id,
                part_no=item.part_no,
                description=item.description,
                previous_quantity=item.previous_quantity,
                adjusted_quantity=item.adjusted_quantity,
                new_quantity=item.previous_quantity + item.adjusted_quantity,
                reason=item.reason,
            )
            for position, item in enumerate(data.items)
        ]
        adjustment = InventoryAdjustment(
            adjustment_no=data.adjustment_no or None,
            total=sum(abs(item.adjusted_quantity) for item in items),
            date=data.date or utcnow(),
            notes=data.notes or None,
            created_by=self.user_id,
            items=items,
        )

        try:
            self._db.add(adjustment)
            self._db.flush()
            for item in items:
                if item.part_id:
                    self._upsert_stock(item.part_id, item.new_quantity)
            self._db.commit()
        except IntegrityError as exc:
            self._db.rollback()
            if not data.adjustment_no:
                raise
            logger.warning("Inventory adjustment rejected by unique constraint: %s", data.adjustment_no)
            raise ConflictError(DUPLICATE_ADJUSTMENT_NO) from exc
        except Exception:
            self._db.rollback()
            logger.warning("Inventory adjustment rolled back (items=%d)", len(items))
            raise

        logger.info(
            "Created inventory adjustment: %s (id=%s, items=%d, total=%d)",
            adjustment.adjustment_no,
            adjustment.id,
            len(items),
            adjustment.total,
        )
        return self.get(adjustment.id)
