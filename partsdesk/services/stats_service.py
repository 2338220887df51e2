"""
Dashboard statistics.

Counts active parts, categories, kits and suppliers now and as of 30 days
ago, and builds a 14-day cumulative sparkline per entity. Days are UTC
calendar days.
"""
from __future__ import annotations

import datetime as dt
import logging
import math
from dataclasses import dataclass
from typing import Callable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from partsdesk.db.base_class import utcnow
from partsdesk.models.catalog_models import ACTIVE, Category, Kit, Part, PurchaseOrder, Supplier

logger = logging.getLogger(__name__)

CHANGE_WINDOW_DAYS = 30
SPARKLINE_DAYS = 14

TRACKED = {
    "parts": Part,
    "categories": Category,
    "kits": Kit,
    "suppliers": Supplier,
}


def percent_change(current: int, previous: int) -> int:
    """Whole-number percent change, halves rounded up."""
    if previous == 0:
        return 100 if current > 0 else 0
    return math.floor((current - previous) / previous * 100 + 0.5)


def monotonic(series: Sequence[int]) -> list[int]:
    """Raise any dip up to the preceding value so the series never decreases."""
    result: list[int] = []
    for value in series:
        result.append(max(value, result[-1]) if result else value)
    return result


def day_boundaries(now: dt.datetime, days: int = SPARKLINE_DAYS) -> list[dt.datetime]:
    """Start of the day after each of the last ``days`` UTC days, oldest first."""
    today = now.astimezone(dt.timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return [today - dt.timedelta(days=offset) + dt.timedelta(days=1) for offset in range(days - 1, -1, -1)]


@dataclass
class StatSnapshot:
    totals: dict[str, int]
    previous: dict[str, int]
    total_purchase_orders: int
    sparklines: dict[str, list[int]]

    def as_response(self) -> dict:
        return {
            "stats": {
                "total_parts": self.totals["parts"],
                "total_categories": self.totals["categories"],
                "total_kits": self.totals["kits"],
                "total_suppliers": self.totals["suppliers"],
                "total_purchase_orders": self.total_purchase_orders,
                "parts_change": percent_change(self.totals["parts"], self.previous["parts"]),
                "categories_change": percent_change(self.totals["categories"], self.previous["categories"]),
                "kits_change": percent_change(self.totals["kits"], self.previous["kits"]),
                "suppliers_change": percent_change(self.totals["suppliers"], self.previous["suppliers"]),
            },
            "sparklines": self.sparklines,
        }


class StatsService:
    def __init__(self, db: Session, clock: Callable[[], dt.datetime] = utcnow):
        self._db = db
        self._clock = clock

    def _active_count(self, model, created_before: dt.datetime | None = None, inclusive: bool = False) -> int:
        query = self._db.query(func.count(model.id)).filter(model.status == ACTIVE)
        if created_before is not None:
            if inclusive:
                query = query.filter(model.created_at <= created_before)
            else:
                query = query.filter(model.created_at < created_before)
        return query.scalar() or 0

    def snapshot(self) -> StatSnapshot:
        now = self._clock()
        cutoff = now - dt.timedelta(days=CHANGE_WINDOW_DAYS)

        totals = {name: self._active_count(model) for name, model in TRACKED.items()}
        previous = {name: self._active_count(model, cutoff, inclusive=True) for name, model in TRACKED.items()}
        total_purchase_orders = self._db.query(func.count(PurchaseOrder.id)).scalar() or 0

        boundaries = day_boundaries(now)
        sparklines = {
            name: monotonic([self._active_count(model, boundary) for boundary in boundaries])
            for name, model in TRACKED.items()
        }
        logger.debug("Computed stats snapshot totals=%s", totals)
        return StatSnapshot(
            totals=totals,
            previous=previous,
            total_purchase_orders=total_purchase_orders,
            sparklines=sparklines,
        )
