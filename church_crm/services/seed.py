"""Initial data: the default admin account and a small sample congregation."""

import logging

from church_crm.auth.passwords import hash_password
from church_crm.services.database_service import DatabaseService

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@ssda.org"
DEFAULT_ADMIN_PASSWORD = "Password@123"

SAMPLE_COMMUNITIES = [
    {"id": "C1", "name": "Northside Fellowship", "host_name": "John Doe", "location": "123 Maple St", "meeting_day": "Tuesday", "max_capacity": 20},
    {"id": "C2", "name": "West End Grace", "host_name": "Sarah Smith", "location": "456 Oak Rd", "meeting_day": "Wednesday", "max_capacity": 15},
    {"id": "C3", "name": "Downtown Bridge", "host_name": "Mark Wilson", "location": "789 Pine Ave", "meeting_day": "Thursday", "max_capacity": 25},
]

SAMPLE_MEMBERS = [
    {"id": "M1", "full_name": "Alice Johnson", "phone": "555-0101", "email": "alice@example.com", "address": "123 Maple St, Northside", "status": "Active", "assigned_community": "Northside Fellowship", "join_date": "2023-01-15"},
    {"id": "M2", "full_name": "Bob Brown", "phone": "555-0102", "email": "bob@example.com", "address": "456 Oak Rd, West End", "status": "Active", "assigned_community": "Northside Fellowship", "join_date": "2023-02-10"},
    {"id": "M3", "full_name": "Charlie Davis", "phone": "555-0103", "email": "charlie@example.com", "address": "789 Pine Ave, Downtown", "status": "Visitor", "assigned_community": "West End Grace", "join_date": "2024-03-05"},
    {"id": "M4", "full_name": "Diana Prince", "phone": "555-0104", "email": "diana@example.com", "address": "101 Hero Way, Metro", "status": "Active", "assigned_community": "Downtown Bridge", "join_date": "2022-11-20"},
    {"id": "M5", "full_name": "Ethan Hunt", "phone": "555-0105", "email": "ethan@example.com", "address": "202 Spy Ln, Secret", "status": "Inactive", "assigned_community": "Downtown Bridge", "join_date": "2021-06-12"},
]

SAMPLE_EVENTS = [
    {"id": "E1", "name": "Sabbath Service", "date": "2024-05-04", "type": "Worship", "responsible_community": "General"},
    {"id": "E2", "name": "Sabbath Service", "date": "2024-05-11", "type": "Worship", "responsible_community": "General"},
    {"id": "E3", "name": "Sabbath Service", "date": "2024-05-18", "type": "Worship", "responsible_community": "General"},
    {"id": "E4", "name": "Youth Night", "date": "2024-05-15", "type": "Special", "responsible_community": "Downtown Bridge"},
]

SAMPLE_ATTENDANCE = [
    {"date": "2024-05-04", "event_name": "Sabbath Service", "member_name": "Alice Johnson", "status": "Present"},
    {"date": "2024-05-04", "event_name": "Sabbath Service", "member_name": "Bob Brown", "status": "Present"},
    {"date": "2024-05-04", "event_name": "Sabbath Service", "member_name": "Charlie Davis", "status": "Present"},
    {"date": "2024-05-11", "event_name": "Sabbath Service", "member_name": "Alice Johnson", "status": "Present"},
    {"date": "2024-05-11", "event_name": "Sabbath Service", "member_name": "Bob Brown", "status": "Absent"},
    {"date": "2024-05-18", "event_name": "Sabbath Service", "member_name": "Alice Johnson", "status": "Present"},
]

SAMPLE_CONTRIBUTIONS = [
    {"id": "T1", "date": "2024-05-05", "member_name": "Alice Johnson", "amount": 100, "type": "Tithe"},
    {"id": "T2", "date": "2024-05-05", "member_name": "Bob Brown", "amount": 50, "type": "Offering"},
    {"id": "T3", "date": "2024-05-12", "member_name": "Alice Johnson", "amount": 100, "type": "Tithe"},
    {"id": "T4", "date": "2024-04-20", "member_name": "Diana Prince", "amount": 250, "type": "Tithe"},
]


def seed_admin(db: DatabaseService) -> bool:
    """Create the default admin when there are no users yet. Returns True if created."""
    if db.count_users() > 0:
        return False
    db.create_user(DEFAULT_ADMIN_EMAIL, hash_password(DEFAULT_ADMIN_PASSWORD), "Admin User", role="admin")
    logger.info(f"Seeded admin user: {DEFAULT_ADMIN_EMAIL}")
    return True


def seed_sample_data(db: DatabaseService) -> bool:
    """Insert the sample congregation unless members already exist"""
    if db.list_members():
        logger.info("Data already exists, skipping seed.")
        return False

    for member in SAMPLE_MEMBERS:
        db.create_member(member)
    for community in SAMPLE_COMMUNITIES:
        db.create_community(community)
    for event in SAMPLE_EVENTS:
        db.create_event(event)
    for record in SAMPLE_ATTENDANCE:
        db.create_attendance(record)
    for contribution in SAMPLE_CONTRIBUTIONS:
        db.create_contribution(contribution)

    logger.info("Seeding completed successfully.")
    return True
