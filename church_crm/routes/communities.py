"""Community routes"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from church_crm.auth.jwt import get_current_user
from church_crm.models.community import Community, CommunityCreate, CommunityUpdate
from church_crm.services.database_service import db_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[Community])
async def list_communities():
    """List all communities"""
    try:
        return db_service.list_communities()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=Community)
async def create_community(data: CommunityCreate):
    """Add a community"""
    try:
        community = db_service.create_community(data.model_dump(mode="json"))
    except Exception as e:
        logger.error(f"Failed to create community {data.id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Community created: {community['id']} ({community['name']})")
    return community


@router.put("/{community_id}", response_model=Community)
async def update_community(community_id: str, data: CommunityUpdate):
    """Replace a community's fields.

    Members are linked by community name, so a rename leaves them pointing
    at the old name.
    """
    try:
        community = db_service.update_community(community_id, data.model_dump(mode="json"))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not community:
        raise HTTPException(status_code=404, detail="Community not found")
    return community


@router.delete("/{community_id}")
async def delete_community(community_id: str):
    """Delete a community"""
    try:
        db_service.delete_community(community_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "Deleted successfully"}
