"""Member routes"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from church_crm.auth.jwt import get_current_user
from church_crm.models.member import Member, MemberCreate, MemberUpdate
from church_crm.services.database_service import db_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[Member])
async def list_members():
    """List all members, newest identifier first"""
    try:
        return db_service.list_members()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=Member)
async def create_member(data: MemberCreate):
    """Add a member (the caller supplies the id)"""
    try:
        member = db_service.create_member(data.model_dump(mode="json"))
    except Exception as e:
        logger.error(f"Failed to create member {data.id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Member created: {member['id']}")
    return member


@router.put("/{member_id}", response_model=Member)
async def update_member(member_id: str, data: MemberUpdate):
    """Replace a member's fields"""
    try:
        member = db_service.update_member(member_id, data.model_dump(mode="json"))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not member:
        raise HTTPException(status_code=404, detail="Member not found")
    return member


@router.delete("/{member_id}")
async def delete_member(member_id: str):
    """Delete a member. Attendance and giving rows keep the old name."""
    try:
        db_service.delete_member(member_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "Deleted successfully"}
