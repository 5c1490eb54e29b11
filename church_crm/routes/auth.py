"""Authentication routes"""

import logging
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from church_crm.auth.jwt import (
    CurrentUser,
    create_access_token,
    create_reset_token,
    get_current_user,
    verify_reset_token,
)
from church_crm.auth.passwords import hash_password, password_fingerprint, verify_password
from church_crm.config import settings
from church_crm.services.database_service import db_service
from church_crm.services.email_service import get_email_service

logger = logging.getLogger(__name__)
router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If an account exists, a reset link has been sent."


# Request/Response models
class LoginRequest(BaseModel):
    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    email: str


class ResetPasswordRequest(BaseModel):
    token: str
    newPassword: str


def _public_user(user: dict) -> dict:
    return {key: value for key, value in user.items() if key != "password"}


@router.post("/login")
async def login(credentials: LoginRequest):
    """Exchange email + password for a 12-hour session token"""
    try:
        user = db_service.get_user_by_email(credentials.email)
    except Exception as e:
        logger.error(f"Login lookup failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    # Same answer for unknown email and wrong password
    if not user or not verify_password(credentials.password, user["password"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token(user)
    logger.info(f"Login success for user {user['id']}")
    return {"token": token, "user": _public_user(user)}


@router.get("/me")
async def get_me(current_user: CurrentUser = Depends(get_current_user)):
    """Get the signed-in user's account"""
    try:
        user = db_service.get_user_by_id(current_user.id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("/logout")
async def logout():
    """
    Logout user.
    Tokens are stateless; the client drops its copy.
    """
    return {"message": "Logged out successfully"}


@router.post("/forgot-password")
async def forgot_password(request: ForgotPasswordRequest):
    """Start a password reset. The response never reveals whether the email exists."""
    logger.info(f"Password reset requested for {request.email}")

    try:
        user = db_service.get_user_by_email(request.email)
    except Exception as e:
        logger.error(f"Password reset lookup failed: {e}")
        user = None

    if user:
        token = create_reset_token(user)
        reset_link = f"{settings.frontend_url.rstrip('/')}/#/reset-password?{urlencode({'token': token})}"
        email_service = get_email_service()
        if email_service.is_configured:
            result = email_service.send_password_reset(
                user["email"], reset_link, settings.reset_token_expire_minutes
            )
            if not result.get("sent"):
                logger.error(f"Could not send reset email: {result.get('error')}")
        elif settings.debug:
            logger.info(f"Email not configured; reset link for {user['email']}: {reset_link}")
        else:
            logger.warning("Email not configured; password reset link was not delivered")

    return {"message": FORGOT_PASSWORD_MESSAGE}


@router.post("/reset-password")
async def reset_password(request: ResetPasswordRequest):
    """Complete a password reset with the token from the reset email"""
    invalid = HTTPException(status_code=400, detail="Invalid or expired reset token")

    if not request.newPassword:
        raise HTTPException(status_code=400, detail="New password is required")

    payload = verify_reset_token(request.token)
    if not payload:
        raise invalid

    try:
        user = db_service.get_user_credentials(int(payload["sub"]))
        # A token is tied to the password it was issued against
        if not user or password_fingerprint(user["password"]) != payload.get("fp"):
            raise invalid

        db_service.update_user_password(user["id"], hash_password(request.newPassword))
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(f"Password reset completed for user {user['id']}")
    return {"message": "Password updated successfully"}
