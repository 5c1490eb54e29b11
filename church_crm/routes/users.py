"""User management routes (admin only)"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from church_crm.auth.jwt import CurrentUser, require_admin
from church_crm.auth.passwords import hash_password
from church_crm.models.user import UserCreateRequest, UserResponse, UserUpdateRequest
from church_crm.services.database_service import db_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=List[UserResponse])
async def list_users():
    """List all system users"""
    try:
        return db_service.list_users()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=UserResponse)
async def create_user(data: UserCreateRequest):
    """Create a system user; role defaults to 'user'"""
    if not data.password:
        raise HTTPException(status_code=400, detail="Password is required")

    try:
        user = db_service.create_user(
            email=data.email,
            password_hash=hash_password(data.password),
            name=data.name,
            role=data.role,
        )
    except Exception as e:
        logger.error(f"Failed to create user {data.email}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    return user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: int, data: UserUpdateRequest):
    """Update a user; the password is only changed when a new one is supplied"""
    try:
        user = db_service.update_user(
            user_id,
            email=data.email,
            name=data.name,
            role=data.role,
            password_hash=hash_password(data.password) if data.password else None,
        )
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}")
async def delete_user(user_id: int, current_user: CurrentUser = Depends(require_admin)):
    """Delete a user. Nobody can delete their own account."""
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    try:
        db_service.delete_user(user_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"User {user_id} deleted by {current_user.id}")
    return {"message": "User deleted successfully"}
