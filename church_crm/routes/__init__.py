"""API Routes"""

from church_crm.routes import (
    attendance,
    auth,
    communities,
    contributions,
    events,
    members,
    users,
)

__all__ = ["attendance", "auth", "communities", "contributions", "events", "members", "users"]
