"""Relational schema for the church data store

Column names are the unquoted, lower-cased identifiers already used by
existing deployments (``fullname``, ``assignedcommunity``, ...); each column
carries a snake_case ``key`` that the rest of the code uses.

Tables are created idempotently. Older databases that predate a column get it
added in place by ``add_missing_columns``.
"""

import logging

from sqlalchemy import (
    Column,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    inspect,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.schema import CreateColumn

logger = logging.getLogger(__name__)

metadata = MetaData()

members = Table(
    "members",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("fullname", String(255), key="full_name"),
    Column("phone", String(50)),
    Column("email", String(255)),
    Column("address", String(255)),
    Column("passportphotourl", Text, key="passport_photo_url"),
    Column("status", String(50)),
    Column("assignedcommunity", String(255), key="assigned_community"),
    Column("joindate", String(50), key="join_date"),
)

communities = Table(
    "communities",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("name", String(255)),
    Column("hostname", String(255), key="host_name"),
    Column("location", String(255)),
    Column("meetingday", String(50), key="meeting_day"),
    Column("maxcapacity", Integer, key="max_capacity"),
)

events = Table(
    "events",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("name", String(255)),
    Column("date", String(50)),
    Column("type", String(50)),
    Column("responsiblecommunity", String(255), key="responsible_community"),
    Column("location", String(255)),
    Column("startdate", String(50), key="start_date"),
    Column("starttime", String(50), key="start_time"),
    Column("enddate", String(50), key="end_date"),
    Column("endtime", String(50), key="end_time"),
)

# Surrogate key only; records are identified by (date, event, member) on the wire
attendance = Table(
    "attendance",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("date", String(50)),
    Column("eventname", String(255), key="event_name"),
    Column("membername", String(255), key="member_name"),
    Column("status", String(50)),
)

contributions = Table(
    "contributions",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("date", String(50)),
    Column("membername", String(255), key="member_name"),
    Column("amount", Float),
    Column("type", String(50)),
)

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), unique=True, nullable=False),
    Column("password", String(255), nullable=False),
    Column("role", String(50), server_default="user"),
    Column("name", String(255)),
)


def create_tables(engine: Engine) -> None:
    """Create every table that does not exist yet"""
    metadata.create_all(engine)
    logger.info("Tables created successfully.")


def add_missing_columns(engine: Engine) -> list:
    """Add columns declared in the schema but absent from existing tables.

    Returns the list of ``table.column`` names that were added.
    """
    inspector = inspect(engine)
    existing_tables = set(inspector.get_table_names())
    added = []

    with engine.begin() as conn:
        for table in metadata.sorted_tables:
            if table.name not in existing_tables:
                continue
            present = {col["name"].lower() for col in inspector.get_columns(table.name)}
            for column in table.columns:
                if column.name in present:
                    continue
                ddl = CreateColumn(column).compile(dialect=engine.dialect)
                conn.execute(text(f"ALTER TABLE {table.name} ADD COLUMN {ddl}"))
                added.append(f"{table.name}.{column.name}")
                logger.info(f"Added column {table.name}.{column.name}")

    return added
