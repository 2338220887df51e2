"""Tests for dashboard statistics."""
import datetime as dt

import pytest

from partsdesk.models.catalog_models import Category, Kit, Part, PurchaseOrder, Supplier
from partsdesk.services.stats_service import StatsService, day_boundaries, monotonic, percent_change

NOW = dt.datetime(2024, 6, 15, 13, 30, tzinfo=dt.timezone.utc)


class TestPercentChange:
    @pytest.mark.parametrize(
        "current,previous,expected",
        [
            (0, 0, 0),
            (5, 0, 100),
            (15, 10, 50),
            (10, 10, 0),
            (5, 10, -50),
            (1, 8, -87),
            (3, 8, -62),
            (7, 8, -12),
            (3, 2, 50),
            (1, 3, -67),
        ],
    )
    def test_rounding(self, current, previous, expected):
        assert percent_change(current, previous) == expected

    def test_half_rounds_up(self):
        # 1/8 = 12.5% and -1/8 = -12.5%
        assert percent_change(9, 8) == 13
        assert percent_change(7, 8) == -12


class TestMonotonic:
    def test_dips_are_clamped(self):
        assert monotonic([3, 5, 4, 4, 6, 2]) == [3, 5, 5, 5, 6, 6]

    def test_empty_and_flat(self):
        assert monotonic([]) == []
        assert monotonic([0, 0, 0]) == [0, 0, 0]


def test_day_boundaries_are_next_midnights_oldest_first():
    bounds = day_boundaries(NOW)
    assert len(bounds) == 14
    assert bounds[-1] == dt.datetime(2024, 6, 16, tzinfo=dt.timezone.utc)
    assert bounds[0] == dt.datetime(2024, 6, 3, tzinfo=dt.timezone.utc)
    assert all(b2 - b1 == dt.timedelta(days=1) for b1, b2 in zip(bounds, bounds[1:]))


class TestSnapshot:
    @pytest.fixture
    def seeded(self, db_session):
        def ago(days, hours=0):
            return NOW - dt.timedelta(days=days, hours=hours)

        db_session.add_all(
            [
                # existed 30 days ago
                Part(part_no="OLD-1", created_at=ago(40)),
                Part(part_no="OLD-2", created_at=ago(30)),
                # recent
                Part(part_no="NEW-1", created_at=ago(5)),
                Part(part_no="NEW-2", created_at=ago(0, hours=1)),
                Part(part_no="GONE", status="I", created_at=ago(3)),
                Category(name="Engine", created_at=ago(2)),
                Kit(kit_no="K-1", name="Kit", created_at=ago(60)),
                Supplier(name="Acme", created_at=ago(31)),
                Supplier(name="Beta", created_at=ago(31)),
            ]
        )
        db_session.flush()
        supplier = db_session.query(Supplier).first()
        db_session.add(PurchaseOrder(po_no="PO-1", supplier_id=supplier.id))
        db_session.commit()

    def test_counts_and_changes(self, db_session, seeded):
        stats = StatsService(db_session, clock=lambda: NOW).snapshot().as_response()["stats"]
        assert stats["total_parts"] == 4
        assert stats["parts_change"] == 100  # 2 -> 4
        assert stats["total_categories"] == 1
        assert stats["categories_change"] == 100  # 0 -> 1
        assert stats["total_kits"] == 1
        assert stats["kits_change"] == 0
        assert stats["total_suppliers"] == 2
        assert stats["suppliers_change"] == 0
        assert stats["total_purchase_orders"] == 1

    def test_sparklines_are_cumulative_and_non_decreasing(self, db_session, seeded):
        sparklines = StatsService(db_session, clock=lambda: NOW).snapshot().sparklines
        assert set(sparklines) == {"parts", "categories", "kits", "suppliers"}
        for series in sparklines.values():
            assert len(series) == 14
            assert all(a <= b for a, b in zip(series, series[1:]))
        assert sparklines["parts"][0] == 2
        assert sparklines["parts"][-1] == 4
        assert sparklines["kits"] == [1] * 14
        assert sparklines["categories"][-3:] == [1, 1, 1]
        assert sparklines["categories"][-4] == 0

    def test_empty_database(self, db_session):
        snapshot = StatsService(db_session, clock=lambda: NOW).snapshot()
        assert snapshot.sparklines["parts"] == [0] * 14
        assert snapshot.as_response()["stats"]["parts_change"] == 0


def test_stats_endpoint_shape(client, auth_headers):
    response = client.get("/api/stats", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert set(body["stats"]) == {
        "totalParts",
        "totalCategories",
        "totalKits",
        "totalSuppliers",
        "totalPurchaseOrders",
        "partsChange",
        "categoriesChange",
        "kitsChange",
        "suppliersChange",
    }
    assert all(len(series) == 14 for series in body["sparklines"].values())
