"""Attendance routes (append-only: no update, no delete)"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from church_crm.auth.jwt import get_current_user
from church_crm.models.attendance import AttendanceRecord
from church_crm.services.database_service import db_service

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=List[AttendanceRecord])
async def list_attendance():
    try:
        return db_service.list_attendance()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", response_model=AttendanceRecord)
async def record_attendance(data: AttendanceRecord):
    """Append an attendance record. Duplicates are accepted."""
    try:
        return db_service.create_attendance(data.model_dump(mode="json"))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
