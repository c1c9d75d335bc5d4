# tests/test_repositories.py

"""
Tests for the per-entity Supabase repositories.
"""

import pytest

from core.change_feed import ChangeFilter, change_feed
from core.errors import CreateFailed, DeleteFailed, NotFound, StoreError
from repositories import (
    BackofficeUserRepository,
    MaintenanceRequestRepository,
    PaymentRepository,
    PropertyRepository,
    RoomRepository,
    TenantRepository,
)


@pytest.fixture
def events():
    got = []
    change_feed.subscribe(lambda e: True, got.append)
    return got


def test_rooms_by_property_ordered_by_number(fake_db, seeded_property):
    fake_db.seed(
        "rooms",
        {"number": "103", "property_id": "prop-1"},
        {"number": "101", "property_id": "prop-1"},
        {"number": "102", "property_id": "prop-2"},
    )

    rows = RoomRepository(fake_db).get_by_property("prop-1")
    assert [r["number"] for r in rows] == ["101", "103"]


def test_tenants_by_property_newest_first(fake_db, seeded_property):
    fake_db.seed(
        "tenants",
        {"name": "Old", "property_id": "prop-1"},
        {"name": "New", "property_id": "prop-1"},
    )

    rows = TenantRepository(fake_db).get_by_property("prop-1")
    assert [r["name"] for r in rows] == ["New", "Old"]


def test_create_sanitizes_and_publishes(fake_db, seeded_property, events):
    row = RoomRepository(fake_db).create(
        {"number": " 204 ", "property_id": "prop-1", "type": "single", "notes": "  "}
    )

    assert row["number"] == "204"
    assert row["notes"] is None
    assert [(e.table, e.event_type) for e in events] == [("rooms", "INSERT")]


def test_create_requires_existing_property(fake_db, events):
    with pytest.raises(NotFound) as exc:
        TenantRepository(fake_db).create({"name": "Ana", "property_id": "nowhere"})

    assert exc.value.message == "Property nowhere not found"
    assert fake_db.rows("tenants") == []
    assert events == []


def test_create_surfaces_store_message(fake_db, seeded_property):
    fake_db.fail("payments", "insert", 'new row violates row-level security policy for table "payments"')

    with pytest.raises(CreateFailed) as exc:
        PaymentRepository(fake_db).create({"amount": 10, "property_id": "prop-1"})

    assert "row-level security" in exc.value.message


def test_update_stamps_updated_at(fake_db, seeded_property, events):
    (req,) = fake_db.seed("maintenance_requests", {"title": "Leak", "status": "pending", "property_id": "prop-1"})

    row = MaintenanceRequestRepository(fake_db).update(req["id"], {"status": "in-progress"})

    assert row["status"] == "in-progress"
    assert row["updated_at"]
    assert events[-1].event_type == "UPDATE"


def test_update_missing_row(fake_db):
    with pytest.raises(NotFound) as exc:
        RoomRepository(fake_db).update("missing", {"status": "vacant"})
    assert exc.value.message == "Room not found"


def test_delete_publishes_old_row(fake_db, seeded_property, events):
    (room,) = fake_db.seed("rooms", {"number": "101", "property_id": "prop-1"})

    RoomRepository(fake_db).delete(room["id"])

    assert fake_db.rows("rooms") == []
    assert events[-1].event_type == "DELETE"
    assert events[-1].old_record["number"] == "101"


def test_delete_failure(fake_db):
    fake_db.fail("rooms", "delete", "foreign key violation")

    with pytest.raises(DeleteFailed):
        RoomRepository(fake_db).delete("r1")


def test_read_failure_is_store_error(fake_db):
    fake_db.fail("tenants", "select", "connection refused")

    with pytest.raises(StoreError) as exc:
        TenantRepository(fake_db).get_by_property("prop-1")
    assert exc.value.status_code == 500
    assert "connection refused" in exc.value.message


def test_count_with_filters(fake_db):
    fake_db.seed(
        "tenants",
        {"status": "active", "property_id": "prop-1"},
        {"status": "inactive", "property_id": "prop-1"},
        {"status": "active", "property_id": "prop-2"},
    )
    repo = TenantRepository(fake_db)

    assert repo.count() == 3
    assert repo.count(status="active") == 2
    assert repo.count(property_id="prop-1", status=["active", "inactive"]) == 2


def test_payment_amounts_by_status(fake_db):
    fake_db.seed(
        "payments",
        {"amount": 1, "status": "paid", "property_id": "prop-1", "notes": "x"},
        {"amount": 2, "status": "pending", "property_id": "prop-1"},
        {"amount": 4, "status": "overdue", "property_id": "prop-1"},
    )

    rows = PaymentRepository(fake_db).amounts_by_status("prop-1", ["pending", "overdue"])

    assert sorted(r["amount"] for r in rows) == [2, 4]
    assert set(rows[0]) == {"amount", "status"}


def test_property_create_owned(fake_db):
    row = PropertyRepository(fake_db).create_owned({"name": "Harbor House"}, "owner-1")

    assert row["owner_id"] == "owner-1"
    assert PropertyRepository(fake_db).get(row["id"])["name"] == "Harbor House"


def test_property_get_missing(fake_db):
    with pytest.raises(NotFound) as exc:
        PropertyRepository(fake_db).get("nope")
    assert exc.value.message == "Property not found"


def test_record_login(fake_db):
    fake_db.add_backoffice_user("ad-1", "ops@x.com")
    repo = BackofficeUserRepository(fake_db)

    row = repo.record_login("ad-1")

    assert row["last_login"]
    assert repo.record_login("not-backoffice") is None
