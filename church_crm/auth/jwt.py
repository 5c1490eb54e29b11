"""JWT token handling"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from church_crm.auth.passwords import password_fingerprint
from church_crm.config import settings

logger = logging.getLogger(__name__)

# Security scheme - missing tokens are reported by get_current_user
security = HTTPBearer(auto_error=False)

# JWT Configuration
ALGORITHM = "HS256"
RESET_TOKEN_TYPE = "password_reset"


@dataclass
class CurrentUser:
    """Identity decoded from a session token"""
    id: int
    email: str
    role: str
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def create_access_token(user: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a session token embedding the user's id, email, role and name"""
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(
            minutes=settings.access_token_expire_minutes
        )

    to_encode = {
        "sub": str(user["id"]),
        "id": user["id"],
        "email": user["email"],
        "role": user.get("role") or "user",
        "name": user.get("name"),
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    """Verify and decode JWT token"""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[ALGORITHM]
        )
        return payload
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> CurrentUser:
    """Get current user from the bearer token.

    Missing token -> 401, bad signature/expired/malformed -> 403.
    """
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_token(credentials.credentials)
    if payload is None or payload.get("type") == RESET_TOKEN_TYPE or payload.get("id") is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )

    return CurrentUser(
        id=payload["id"],
        email=payload.get("email", ""),
        role=payload.get("role", "user"),
        name=payload.get("name"),
    )


async def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Dependency that only lets admins through"""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied: Admin privileges required"
        )
    return current_user


def create_reset_token(user: dict) -> str:
    """Create a short-lived password reset token.

    The token carries a fingerprint of the current password hash, so it stops
    verifying as soon as the password changes.
    """
    data = {
        "sub": str(user["id"]),
        "type": RESET_TOKEN_TYPE,
        "fp": password_fingerprint(user["password"]),
        "exp": datetime.utcnow() + timedelta(minutes=settings.reset_token_expire_minutes),
    }
    return jwt.encode(data, settings.jwt_secret, algorithm=ALGORITHM)


def verify_reset_token(token: str) -> Optional[dict]:
    """Verify a password reset token; returns its payload (without checking the fingerprint)"""
    payload = verify_token(token)
    if not payload or payload.get("type") != RESET_TOKEN_TYPE or not payload.get("sub"):
        return None
    return payload
