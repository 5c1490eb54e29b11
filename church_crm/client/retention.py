"""Retention scan: active members missing from recent Sabbath services."""

from dataclasses import dataclass, field
from typing import Iterable, List

from church_crm.models import AttendanceRecord, AttendanceStatus, Event, Member, MemberStatus

SABBATH_SERVICE = "Sabbath Service"
SERVICES_CHECKED = 3


@dataclass
class Absentee:
    member: Member
    missed_events: List[str] = field(default_factory=list)  # service dates checked

    @property
    def first_name(self) -> str:
        return self.member.full_name.split(" ")[0]


def recent_service_dates(
    events: Iterable[Event],
    event_name: str = SABBATH_SERVICE,
    limit: int = SERVICES_CHECKED,
) -> List[str]:
    """Distinct dates of the most recent events with this name, newest first.

    Dates are ISO strings, so lexical order is chronological.
    """
    dates = {event.date for event in events if event.name == event_name}
    return sorted(dates, reverse=True)[:limit]


def find_absentees(
    members: Iterable[Member],
    attendance: List[AttendanceRecord],
    events: Iterable[Event],
    event_name: str = SABBATH_SERVICE,
    limit: int = SERVICES_CHECKED,
) -> List[Absentee]:
    """Active members with no "Present" record at any of the last ``limit`` services.

    With no services on record every active member is flagged.
    """
    service_dates = recent_service_dates(events, event_name, limit)
    checked = set(service_dates)

    present = {
        record.member_name
        for record in attendance
        if record.event_name == event_name
        and record.date in checked
        and record.status == AttendanceStatus.PRESENT
    }

    return [
        Absentee(member=member, missed_events=list(service_dates))
        for member in members
        if member.status == MemberStatus.ACTIVE and member.full_name not in present
    ]
