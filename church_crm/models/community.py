"""Community (small group) models"""

from typing import Optional

from church_crm.models.base import CamelModel


class CommunityFields(CamelModel):
    name: str
    host_name: Optional[str] = None
    location: Optional[str] = None
    meeting_day: Optional[str] = None
    max_capacity: Optional[int] = None


class CommunityCreate(CommunityFields):
    id: str


class CommunityUpdate(CommunityFields):
    pass


class Community(CommunityFields):
    id: str
