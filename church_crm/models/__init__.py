"""Models package - Pydantic models for API request/response"""

from church_crm.models.attendance import AttendanceRecord, AttendanceStatus
from church_crm.models.community import Community, CommunityCreate, CommunityUpdate
from church_crm.models.contribution import (
    Contribution,
    ContributionCreate,
    ContributionType,
    ContributionUpdate,
)
from church_crm.models.event import Event, EventCreate, EventUpdate
from church_crm.models.member import Member, MemberCreate, MemberStatus, MemberUpdate
from church_crm.models.user import UserCreateRequest, UserResponse, UserUpdateRequest

__all__ = [
    # Member
    "Member",
    "MemberCreate",
    "MemberUpdate",
    "MemberStatus",
    # Community
    "Community",
    "CommunityCreate",
    "CommunityUpdate",
    # Event
    "Event",
    "EventCreate",
    "EventUpdate",
    # Attendance
    "AttendanceRecord",
    "AttendanceStatus",
    # Contribution
    "Contribution",
    "ContributionCreate",
    "ContributionUpdate",
    "ContributionType",
    # User
    "UserCreateRequest",
    "UserUpdateRequest",
    "UserResponse",
]
