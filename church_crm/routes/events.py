"""Event routes"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from church_crm.auth.jwt import get_current_user
from church_crm.models.event import Event, EventCreate, EventUpdate
from church_crm.services.database_service import db_service

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[Event])
async def list_events():
    try:
        return db_service.list_events()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=Event)
async def create_event(data: EventCreate):
    try:
        event = db_service.create_event(data.model_dump(mode="json"))
    except Exception as e:
        logger.error(f"Failed to create event {data.id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Event created: {event['id']} ({event['name']} on {event['date']})")
    return event


@router.put("/{event_id}", response_model=Event)
async def update_event(event_id: str, data: EventUpdate):
    try:
        event = db_service.update_event(event_id, data.model_dump(mode="json"))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.delete("/{event_id}")
async def delete_event(event_id: str):
    try:
        db_service.delete_event(event_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"message": "Deleted successfully"}
