"""Authentication module"""

from church_crm.auth.jwt import (
    CurrentUser,
    create_access_token,
    create_reset_token,
    get_current_user,
    require_admin,
    verify_reset_token,
    verify_token,
)
from church_crm.auth.passwords import hash_password, verify_password

__all__ = [
    "CurrentUser",
    "create_access_token",
    "create_reset_token",
    "get_current_user",
    "require_admin",
    "verify_reset_token",
    "verify_token",
    "hash_password",
    "verify_password",
]
