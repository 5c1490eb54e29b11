"""Database Service Tests

Tests for schema creation, in-place column upgrades, databases created by
earlier deployments and initial seeding.
"""

import pytest
from sqlalchemy import create_engine, inspect, text

from church_crm.auth.jwt import create_access_token
from church_crm.auth.passwords import verify_password
from church_crm.services import schema
from church_crm.services.database_service import DatabaseService
from church_crm.services.seed import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    SAMPLE_MEMBERS,
    seed_admin,
    seed_sample_data,
)

# Tables as earlier deployments created them (camelCase, unquoted identifiers)
LEGACY_DDL = [
    """CREATE TABLE members (
        id VARCHAR(255) PRIMARY KEY, fullName VARCHAR(255), phone VARCHAR(50),
        email VARCHAR(255), address VARCHAR(255), passportPhotoUrl TEXT,
        status VARCHAR(50), assignedCommunity VARCHAR(255), joinDate VARCHAR(50))""",
    """CREATE TABLE communities (
        id VARCHAR(255) PRIMARY KEY, name VARCHAR(255), hostName VARCHAR(255),
        location VARCHAR(255), meetingDay VARCHAR(50), maxCapacity INTEGER)""",
    """CREATE TABLE events (
        id VARCHAR(255) PRIMARY KEY, name VARCHAR(255), date VARCHAR(50),
        type VARCHAR(50), responsibleCommunity VARCHAR(255))""",
    """CREATE TABLE attendance (
        id INTEGER PRIMARY KEY AUTOINCREMENT, date VARCHAR(50),
        eventName VARCHAR(255), memberName VARCHAR(255), status VARCHAR(50))""",
    """CREATE TABLE contributions (
        id VARCHAR(255) PRIMARY KEY, date VARCHAR(50), memberName VARCHAR(255),
        amount REAL, type VARCHAR(50))""",
]


def _legacy_database(path) -> str:
    url = f"sqlite:///{path}"
    engine = create_engine(url)
    with engine.begin() as conn:
        for ddl in LEGACY_DDL:
            conn.execute(text(ddl))
        conn.execute(text(
            "INSERT INTO members (id, fullName, status, assignedCommunity) "
            "VALUES ('M1', 'Alice Johnson', 'Active', 'Northside Fellowship')"
        ))
        conn.execute(text(
            "INSERT INTO communities (id, name, hostName, meetingDay, maxCapacity) "
            "VALUES ('C1', 'Northside Fellowship', 'John Doe', 'Tuesday', 20)"
        ))
        conn.execute(text("INSERT INTO events (id, name, date) VALUES ('E1', 'Sabbath Service', '2024-05-04')"))
        conn.execute(text(
            "INSERT INTO attendance (date, eventName, memberName, status) "
            "VALUES ('2024-05-04', 'Sabbath Service', 'Alice Johnson', 'Present')"
        ))
        conn.execute(text(
            "INSERT INTO contributions (id, date, memberName, amount, type) "
            "VALUES ('T1', '2024-05-05', 'Alice Johnson', 100, 'Tithe')"
        ))
    engine.dispose()
    return url


class TestSchemaUpgrade:

    def test_fresh_database_needs_no_columns(self, db):
        assert db.initialize() == []

    def test_old_events_table_gets_only_the_missing_columns(self, tmp_path):
        service = DatabaseService()
        service.connect(_legacy_database(tmp_path / "old.db"))
        try:
            added = service.initialize()

            assert sorted(added) == [
                "events.enddate", "events.endtime", "events.location",
                "events.startdate", "events.starttime",
            ]
            columns = {c["name"].lower() for c in inspect(service.engine).get_columns("events")}
            assert {c.name for c in schema.events.columns} <= columns
            assert service.list_events()[0]["location"] is None
            assert service.initialize() == []
        finally:
            service.close()

    def test_existing_rows_are_read_by_key(self, tmp_path):
        service = DatabaseService()
        service.connect(_legacy_database(tmp_path / "old.db"))
        try:
            service.initialize()

            member = service.list_members()[0]
            assert member["full_name"] == "Alice Johnson"
            assert member["assigned_community"] == "Northside Fellowship"
            assert service.list_communities()[0]["max_capacity"] == 20
            assert service.list_attendance() == [{
                "date": "2024-05-04",
                "event_name": "Sabbath Service",
                "member_name": "Alice Johnson",
                "status": "Present",
            }]
            assert service.list_contributions()[0]["member_name"] == "Alice Johnson"
        finally:
            service.close()

    def test_ping(self, db):
        assert db.ping() is True


class TestLegacyDatabaseOverApi:

    @pytest.mark.asyncio
    async def test_members_listed_from_existing_deployment(self, test_client, db, tmp_path):
        db.connect(_legacy_database(tmp_path / "old.db"))
        db.initialize()
        token = create_access_token({"id": 1, "email": "admin@ssda.org", "role": "admin", "name": "Admin"})

        response = await test_client.get("/api/members", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()[0]["fullName"] == "Alice Johnson"
        assert response.json()[0]["assignedCommunity"] == "Northside Fellowship"

    @pytest.mark.asyncio
    async def test_update_writes_existing_columns(self, test_client, db, tmp_path):
        db.connect(_legacy_database(tmp_path / "old.db"))
        db.initialize()
        token = create_access_token({"id": 1, "email": "admin@ssda.org", "role": "admin", "name": "Admin"})

        response = await test_client.put(
            "/api/members/M1",
            json={"fullName": "Alice Johnson-Smith", "status": "Active"},
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == 200
        with db.engine.connect() as conn:
            stored = conn.execute(text("SELECT fullName FROM members WHERE id = 'M1'")).scalar_one()
        assert stored == "Alice Johnson-Smith"


class TestUsers:

    def test_email_is_stored_lowercase(self, db):
        db.create_user("Treasurer@SSDA.org", "hash", "Treasurer")

        assert db.get_user_by_email("TREASURER@ssda.org")["email"] == "treasurer@ssda.org"

    def test_lookup_matches_mixed_case_rows(self, db):
        with db.engine.begin() as conn:
            conn.execute(text(
                "INSERT INTO users (email, password, role, name) "
                "VALUES ('Clerk@SSDA.org', 'hash', 'user', 'Clerk')"
            ))

        assert db.get_user_by_email("clerk@ssda.org")["email"] == "Clerk@SSDA.org"

    def test_public_lookups_hide_password(self, db):
        user = db.create_user("treasurer@ssda.org", "hash", None)

        assert "password" not in user
        assert "password" not in db.get_user_by_id(user["id"])
        assert db.get_user_credentials(user["id"])["password"] == "hash"
        assert user["role"] == "user"


class TestSeeding:

    def test_admin_seeded_once(self, db):
        assert seed_admin(db) is True
        assert seed_admin(db) is False

        admin = db.get_user_by_email(DEFAULT_ADMIN_EMAIL)
        assert admin["role"] == "admin"
        assert verify_password(DEFAULT_ADMIN_PASSWORD, admin["password"])

    def test_sample_data_skipped_when_members_exist(self, db):
        assert seed_sample_data(db) is True
        assert len(db.list_members()) == len(SAMPLE_MEMBERS)
        assert seed_sample_data(db) is False
