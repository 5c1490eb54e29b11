"""Attendance models"""

from enum import Enum

from church_crm.models.base import CamelModel


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


class AttendanceRecord(CamelModel):
    date: str
    event_name: str
    member_name: str  # member full name, matched by exact string
    status: AttendanceStatus
