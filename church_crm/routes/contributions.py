"""Contribution routes (no delete)"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from church_crm.auth.jwt import get_current_user
from church_crm.models.contribution import Contribution, ContributionCreate, ContributionUpdate
from church_crm.services.database_service import db_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[Contribution])
async def list_contributions():
    try:
        return db_service.list_contributions()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=Contribution)
async def create_contribution(data: ContributionCreate):
    """Record a tithe, offering or other gift"""
    try:
        contribution = db_service.create_contribution(data.model_dump(mode="json"))
    except Exception as e:
        logger.error(f"Failed to record contribution {data.id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Contribution recorded: {contribution['id']}")
    return contribution


@router.put("/{contribution_id}", response_model=Contribution)
async def update_contribution(contribution_id: str, data: ContributionUpdate):
    try:
        contribution = db_service.update_contribution(contribution_id, data.model_dump(mode="json"))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not contribution:
        raise HTTPException(status_code=404, detail="Contribution not found")
    return contribution
