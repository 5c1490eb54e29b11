"""SQL database service

Every public method issues exactly one statement through SQLAlchemy Core and
commits it on its own (``engine.begin()``). There are no multi-statement
transactions.
"""

import logging
from typing import List, Optional

from sqlalchemy import Table, create_engine, delete, func, insert, select, update
from sqlalchemy.engine import Engine

from church_crm.config import settings
from church_crm.services import schema

logger = logging.getLogger(__name__)

# Columns exposed for users; the password hash never leaves this module
# except through get_user_by_email / get_user_credentials.
_USER_COLUMNS = (schema.users.c.id, schema.users.c.email, schema.users.c.name, schema.users.c.role)


def _columns(table: Table, *keys: str) -> tuple:
    """Columns labelled with their snake_case keys (all columns when no keys are given)"""
    columns = [table.c[key] for key in keys] if keys else list(table.c)
    return tuple(column.label(column.key) for column in columns)


_ATTENDANCE_COLUMNS = _columns(schema.attendance, "date", "event_name", "member_name", "status")


class DatabaseService:
    """Relational store for members, communities, events, attendance,
    contributions and system users.

    The engine is created lazily from ``settings.sqlalchemy_url`` unless
    ``connect()`` is called with an explicit URL first.
    """

    def __init__(self):
        self.engine: Optional[Engine] = None

    def _ensure_db(self) -> Engine:
        """Ensure an engine exists"""
        if self.engine is None:
            self.connect(settings.sqlalchemy_url)
        return self.engine

    def connect(self, url: str) -> Engine:
        """(Re)connect to the database at ``url``"""
        self.close()
        self.engine = create_engine(url, pool_pre_ping=True)
        logger.info(f"Database connected: {self.engine.url.render_as_string(hide_password=True)}")
        return self.engine

    def close(self):
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    def initialize(self) -> list:
        """Create missing tables and columns. Returns the columns that were added."""
        engine = self._ensure_db()
        schema.create_tables(engine)
        return schema.add_missing_columns(engine)

    def ping(self) -> bool:
        try:
            with self._ensure_db().connect() as conn:
                conn.execute(select(1))
            return True
        except Exception as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    # =========================================================================
    # Statement helpers
    # =========================================================================

    def _fetch_all(self, stmt) -> List[dict]:
        with self._ensure_db().begin() as conn:
            return [dict(row._mapping) for row in conn.execute(stmt)]

    def _fetch_one(self, stmt) -> Optional[dict]:
        with self._ensure_db().begin() as conn:
            row = conn.execute(stmt).first()
            return dict(row._mapping) if row is not None else None

    def _execute(self, stmt) -> int:
        with self._ensure_db().begin() as conn:
            return conn.execute(stmt).rowcount

    def _insert(self, table: Table, values: dict, columns=None) -> dict:
        returning = columns or _columns(table)
        return self._fetch_one(insert(table).values(**values).returning(*returning))

    def _update(self, table: Table, key, values: dict, columns=None) -> Optional[dict]:
        returning = columns or _columns(table)
        stmt = update(table).where(table.c.id == key).values(**values).returning(*returning)
        return self._fetch_one(stmt)

    def _delete(self, table: Table, key) -> int:
        return self._execute(delete(table).where(table.c.id == key))

    # =========================================================================
    # Member Operations
    # =========================================================================

    def list_members(self) -> List[dict]:
        """All members, newest identifier first (M10 before M9)"""
        members = schema.members
        stmt = select(*_columns(members)).order_by(func.length(members.c.id).desc(), members.c.id.desc())
        return self._fetch_all(stmt)

    def create_member(self, data: dict) -> dict:
        return self._insert(schema.members, data)

    def update_member(self, member_id: str, data: dict) -> Optional[dict]:
        return self._update(schema.members, member_id, data)

    def delete_member(self, member_id: str) -> int:
        return self._delete(schema.members, member_id)

    # =========================================================================
    # Community Operations
    # =========================================================================

    def list_communities(self) -> List[dict]:
        return self._fetch_all(select(*_columns(schema.communities)))

    def create_community(self, data: dict) -> dict:
        return self._insert(schema.communities, data)

    def update_community(self, community_id: str, data: dict) -> Optional[dict]:
        return self._update(schema.communities, community_id, data)

    def delete_community(self, community_id: str) -> int:
        return self._delete(schema.communities, community_id)

    # =========================================================================
    # Event Operations
    # =========================================================================

    def list_events(self) -> List[dict]:
        return self._fetch_all(select(*_columns(schema.events)))

    def create_event(self, data: dict) -> dict:
        return self._insert(schema.events, data)

    def update_event(self, event_id: str, data: dict) -> Optional[dict]:
        return self._update(schema.events, event_id, data)

    def delete_event(self, event_id: str) -> int:
        return self._delete(schema.events, event_id)

    # =========================================================================
    # Attendance Operations (append-only)
    # =========================================================================

    def list_attendance(self) -> List[dict]:
        return self._fetch_all(select(*_ATTENDANCE_COLUMNS))

    def create_attendance(self, data: dict) -> dict:
        return self._insert(schema.attendance, data, columns=_ATTENDANCE_COLUMNS)

    # =========================================================================
    # Contribution Operations (no delete)
    # =========================================================================

    def list_contributions(self) -> List[dict]:
        return self._fetch_all(select(*_columns(schema.contributions)))

    def create_contribution(self, data: dict) -> dict:
        return self._insert(schema.contributions, data)

    def update_contribution(self, contribution_id: str, data: dict) -> Optional[dict]:
        return self._update(schema.contributions, contribution_id, data)

    # =========================================================================
    # User Operations
    # =========================================================================

    def get_user_by_email(self, email: str) -> Optional[dict]:
        """Get user by email (case-insensitive), including the password hash"""
        users = schema.users
        return self._fetch_one(select(users).where(func.lower(users.c.email) == email.lower()))

    def get_user_by_id(self, user_id: int) -> Optional[dict]:
        users = schema.users
        return self._fetch_one(select(*_USER_COLUMNS).where(users.c.id == user_id))

    def get_user_credentials(self, user_id: int) -> Optional[dict]:
        """Get user by ID, including the password hash"""
        users = schema.users
        return self._fetch_one(select(users).where(users.c.id == user_id))

    def list_users(self) -> List[dict]:
        return self._fetch_all(select(*_USER_COLUMNS).order_by(schema.users.c.id.asc()))

    def count_users(self) -> int:
        with self._ensure_db().begin() as conn:
            return conn.execute(select(func.count()).select_from(schema.users)).scalar_one()

    def create_user(self, email: str, password_hash: str, name: Optional[str], role: str = "user") -> dict:
        values = {"email": email.lower(), "password": password_hash, "name": name, "role": role}
        user = self._insert(schema.users, values, columns=_USER_COLUMNS)
        logger.info(f"User created: {user['id']}")
        return user

    def update_user(
        self,
        user_id: int,
        email: str,
        name: Optional[str],
        role: str,
        password_hash: Optional[str] = None,
    ) -> Optional[dict]:
        values = {"email": email.lower(), "name": name, "role": role}
        if password_hash:
            values["password"] = password_hash
        return self._update(schema.users, user_id, values, columns=_USER_COLUMNS)

    def update_user_password(self, user_id: int, password_hash: str) -> int:
        users = schema.users
        return self._execute(update(users).where(users.c.id == user_id).values(password=password_hash))

    def delete_user(self, user_id: int) -> int:
        return self._delete(schema.users, user_id)


# Singleton instance
db_service = DatabaseService()
