"""Member models"""

from enum import Enum
from typing import Optional

from church_crm.models.base import CamelModel


class MemberStatus(str, Enum):
    ACTIVE = "Active"
    VISITOR = "Visitor"
    INACTIVE = "Inactive"


class MemberFields(CamelModel):
    full_name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    passport_photo_url: Optional[str] = None  # URL or data URL
    status: MemberStatus = MemberStatus.ACTIVE
    assigned_community: Optional[str] = None  # community name, not an id
    join_date: Optional[str] = None


class MemberCreate(MemberFields):
    id: str


class MemberUpdate(MemberFields):
    pass


class Member(MemberFields):
    id: str
