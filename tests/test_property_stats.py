# tests/test_property_stats.py

"""
Tests for the property statistics aggregator.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from core.errors import StoreError
from services.property_stats import PropertyStatsService, occupancy_rate


@pytest.fixture
def harbor(fake_db, seeded_property):
    """10 rooms (6 occupied), paid 500 + 750, one pending 300."""
    statuses = ["occupied"] * 6 + ["vacant"] * 3 + ["maintenance"]
    fake_db.seed(
        "rooms",
        *[
            {"number": f"{101 + i}", "status": s, "property_id": "prop-1", "price": 500}
            for i, s in enumerate(statuses)
        ],
    )
    fake_db.seed(
        "tenants",
        {"name": "Ana", "status": "active", "property_id": "prop-1"},
        {"name": "Ben", "status": "active", "property_id": "prop-1"},
        {"name": "Cy", "status": "inactive", "property_id": "prop-1"},
    )
    fake_db.seed(
        "payments",
        {"amount": 500, "status": "paid", "property_id": "prop-1"},
        {"amount": "750.00", "status": "paid", "property_id": "prop-1"},
        {"amount": 300, "status": "pending", "property_id": "prop-1"},
        {"amount": 999, "status": "paid", "property_id": "prop-other"},
    )
    return fake_db


# -----------------------------------------------------
# occupancy_rate
# -----------------------------------------------------
@pytest.mark.parametrize(
    "total, occupied, expected",
    [
        (10, 6, 60.0),
        (0, 0, 0.0),
        (0, 3, 0.0),
        (4, 4, 100.0),
        (3, 1, 100 / 3),
        (2, 5, 100.0),
        (5, -1, 0.0),
    ],
)
def test_occupancy_rate(total, occupied, expected):
    assert occupancy_rate(total, occupied) == pytest.approx(expected)


def test_occupancy_rate_is_exact_for_sixty_percent():
    assert occupancy_rate(10, 6) == 60


# -----------------------------------------------------
# Aggregation
# -----------------------------------------------------
def test_property_stats(harbor):
    stats = PropertyStatsService(harbor).property_stats("prop-1")

    assert stats.total_rooms == 10
    assert stats.occupied_rooms == 6
    assert stats.occupancy_rate == 60
    assert stats.total_tenants == 2
    assert stats.total_revenue == 1250
    assert stats.pending_payments == 300


def test_empty_property(fake_db, seeded_property):
    stats = PropertyStatsService(fake_db).property_stats("prop-1")

    assert stats.total_rooms == 0
    assert stats.occupancy_rate == 0
    assert stats.total_revenue == 0
    assert stats.pending_payments == 0


def test_overdue_counts_as_pending(harbor):
    harbor.seed("payments", {"amount": 200, "status": "overdue", "property_id": "prop-1"})

    stats = PropertyStatsService(harbor).property_stats("prop-1")
    assert stats.pending_payments == 500


def test_malformed_amount_is_logged_and_skipped(harbor):
    harbor.seed("payments", {"amount": "n/a", "status": "paid", "property_id": "prop-1"})

    with patch("core.utils.logger") as log:
        stats = PropertyStatsService(harbor).property_stats("prop-1")

    assert stats.total_revenue == 1250
    log.warning.assert_called_once()
    assert "'n/a'" in log.warning.call_args[0][0]


def test_store_failure_propagates_for_single_property(harbor):
    harbor.fail("payments", "select", "timeout")
    with pytest.raises(StoreError):
        PropertyStatsService(harbor).property_stats("prop-1")


def test_all_property_stats_is_fail_soft(harbor):
    harbor.seed("properties", {"id": "prop-2", "name": "Bay Lofts"})
    harbor.fail("rooms", "select", "statement timeout", where={"property_id": "prop-2"})

    report = PropertyStatsService(harbor).all_property_stats(["prop-1", "prop-2"])

    assert report.stats["prop-1"].occupancy_rate == 60
    assert "prop-2" not in report.stats
    assert "statement timeout" in report.errors["prop-2"]


def test_all_property_stats_defaults_to_visible_properties(harbor):
    harbor.seed("properties", {"id": "prop-2", "name": "Bay Lofts"})

    report = PropertyStatsService(harbor).all_property_stats()

    assert set(report.stats) == {"prop-1", "prop-2"}
    assert report.stats["prop-2"].total_rooms == 0
    assert report.errors == {}


def test_occupancy_summary(harbor):
    summary = PropertyStatsService(harbor).occupancy_summary("prop-1")

    assert (summary.total, summary.occupied, summary.vacant, summary.maintenance) == (10, 6, 3, 1)
    assert summary.occupancy_rate == 60


def test_financial_summary(harbor):
    harbor.seed("payments", {"amount": 125.5, "status": "overdue", "property_id": "prop-1"})

    summary = PropertyStatsService(harbor).financial_summary("prop-1")

    assert summary.total_revenue == 1250
    assert summary.pending_payments == 300
    assert summary.overdue_payments == 125.5


def test_backoffice_overview(harbor):
    harbor.add_backoffice_user("sa-1", "root@x.com", role="superadmin")

    overview = PropertyStatsService(harbor).backoffice_overview()

    assert overview.total_users == 1
    assert overview.total_properties == 1
    assert overview.total_revenue == 500 + 750 + 999
    assert overview.active_tenants == 2


# -----------------------------------------------------
# Routes
# -----------------------------------------------------
def test_stats_route(client: TestClient, as_user, harbor):
    response = client.get("/stats/properties/prop-1")

    assert response.status_code == 200
    body = response.json()
    assert body["occupancy_rate"] == 60
    assert body["total_revenue"] == 1250
    assert body["pending_payments"] == 300


def test_stats_route_store_failure(client: TestClient, as_user, harbor):
    harbor.fail("rooms", "select", "connection reset")

    response = client.get("/stats/properties/prop-1")

    assert response.status_code == 500
    assert "connection reset" in response.json()["detail"]
