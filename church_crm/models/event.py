"""Event models"""

from typing import Optional

from church_crm.models.base import CamelModel


class EventFields(CamelModel):
    name: str
    date: str
    type: Optional[str] = None
    responsible_community: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    start_time: Optional[str] = None
    end_date: Optional[str] = None
    end_time: Optional[str] = None


class EventCreate(EventFields):
    id: str


class EventUpdate(EventFields):
    pass


class Event(EventFields):
    id: str
