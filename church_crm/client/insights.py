"""Derived fields and aggregations computed over fetched collections.

Members are joined to attendance, giving and communities by exact,
case-sensitive display-name match, the same way the records are stored.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from church_crm.models import (
    AttendanceRecord,
    Community,
    Contribution,
    ContributionType,
    Member,
    MemberStatus,
)

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

ALL = "ALL"
UNASSIGNED = "Unassigned"


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse the leading YYYY-MM-DD of a stored date string"""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


# =============================================================================
# Members
# =============================================================================

@dataclass
class MemberSummary:
    member: Member
    attendance_frequency: int
    total_contribution_ytd: float


def attendance_count(member_name: str, attendance: Iterable[AttendanceRecord]) -> int:
    """Number of attendance rows recorded under exactly this name, any status"""
    return sum(1 for record in attendance if record.member_name == member_name)


def giving_total(
    member_name: str,
    contributions: Iterable[Contribution],
    year: Optional[int] = None,
    until: Optional[date] = None,
) -> float:
    """Sum of a member's contributions, optionally limited to one year and up to a day"""
    total = 0.0
    for contribution in contributions:
        if contribution.member_name != member_name:
            continue
        if year is not None or until is not None:
            when = parse_date(contribution.date)
            if when is None:
                continue
            if year is not None and when.year != year:
                continue
            if until is not None and when > until:
                continue
        total += contribution.amount
    return total


def member_summaries(
    members: Iterable[Member],
    attendance: List[AttendanceRecord],
    contributions: List[Contribution],
    today: Optional[date] = None,
) -> List[MemberSummary]:
    today = today or date.today()
    return [
        MemberSummary(
            member=member,
            attendance_frequency=attendance_count(member.full_name, attendance),
            total_contribution_ytd=giving_total(member.full_name, contributions, year=today.year, until=today),
        )
        for member in members
    ]


def filter_members(
    members: Iterable[Member],
    search: str = "",
    status: str = ALL,
    community: str = ALL,
) -> List[Member]:
    """Directory filter: name/email search, status, community ("Unassigned" = none)"""
    term = search.lower()
    result = []
    for member in members:
        if term and term not in (member.full_name or "").lower() and term not in (member.email or "").lower():
            continue
        if status != ALL and member.status.value != status:
            continue
        if community == UNASSIGNED:
            if member.assigned_community:
                continue
        elif community != ALL and member.assigned_community != community:
            continue
        result.append(member)
    return result


# =============================================================================
# Communities
# =============================================================================

@dataclass
class CommunitySummary:
    community: Community
    member_count: int
    occupancy: float  # percent of max capacity


def community_member_count(community_name: str, members: Iterable[Member]) -> int:
    return sum(1 for member in members if member.assigned_community == community_name)


def occupancy_percent(member_count: int, max_capacity: Optional[int]) -> float:
    if not max_capacity:
        return 0.0
    return member_count / max_capacity * 100


def community_summaries(communities: Iterable[Community], members: List[Member]) -> List[CommunitySummary]:
    summaries = []
    for community in communities:
        count = community_member_count(community.name, members)
        summaries.append(CommunitySummary(community, count, occupancy_percent(count, community.max_capacity)))
    return summaries


# =============================================================================
# Dashboard
# =============================================================================

@dataclass
class DashboardStats:
    active_members: int
    monthly_giving: float
    participation_rate: float  # percent of members assigned to a community


def dashboard_stats(
    members: List[Member],
    contributions: Iterable[Contribution],
    today: Optional[date] = None,
) -> DashboardStats:
    today = today or date.today()
    active = sum(1 for m in members if m.status == MemberStatus.ACTIVE)

    monthly = 0.0
    for contribution in contributions:
        when = parse_date(contribution.date)
        if when and when.year == today.year and when.month == today.month:
            monthly += contribution.amount

    assigned = sum(1 for m in members if m.assigned_community)
    participation = assigned / len(members) * 100 if members else 0.0

    return DashboardStats(active_members=active, monthly_giving=monthly, participation_rate=participation)


def monthly_giving(contributions: Iterable[Contribution], year: int) -> List[Tuple[str, float]]:
    """Giving per calendar month of ``year``, January first"""
    totals = [0.0] * 12
    for contribution in contributions:
        when = parse_date(contribution.date)
        if when and when.year == year:
            totals[when.month - 1] += contribution.amount
    return list(zip(MONTH_NAMES, totals))


# =============================================================================
# Finances
# =============================================================================

@dataclass
class FinanceTotals:
    total: float
    tithes: float
    offerings: float  # everything that is not a tithe


def finance_totals(contributions: Iterable[Contribution]) -> FinanceTotals:
    total = tithes = 0.0
    for contribution in contributions:
        total += contribution.amount
        if contribution.type == ContributionType.TITHE:
            tithes += contribution.amount
    return FinanceTotals(total=total, tithes=tithes, offerings=total - tithes)


def _in_range(
    when: date,
    date_range: str,
    today: date,
    start: Optional[date],
    end: Optional[date],
) -> bool:
    if date_range == ALL:
        return True
    days = abs((today - when).days)
    if date_range == "WEEK":
        return days <= 7
    if date_range == "LAST_WEEK":
        return 7 < days <= 14
    if date_range == "MONTH":
        return when.year == today.year and when.month == today.month
    if date_range == "LAST_MONTH":
        last = today.replace(day=1) - timedelta(days=1)
        return when.year == last.year and when.month == last.month
    if date_range == "CUSTOM":
        if start and when < start:
            return False
        if end and when > end:
            return False
        return True
    raise ValueError(f"Unknown date range: {date_range}")


def filter_contributions(
    contributions: Iterable[Contribution],
    search: str = "",
    type: str = ALL,
    year: Optional[int] = None,
    date_range: str = ALL,
    start: Optional[date] = None,
    end: Optional[date] = None,
    today: Optional[date] = None,
) -> List[Contribution]:
    """Finance ledger filter, newest first"""
    today = today or date.today()
    term = search.lower()
    result = []

    for contribution in contributions:
        if term not in contribution.member_name.lower():
            continue
        if type != ALL and contribution.type.value != type:
            continue
        when = parse_date(contribution.date)
        if (year is not None or date_range != ALL) and when is None:
            continue
        if year is not None and when.year != year:
            continue
        if when is not None and not _in_range(when, date_range, today, start, end):
            continue
        result.append(contribution)

    return sorted(result, key=lambda c: c.date, reverse=True)


def filter_attendance(attendance: Iterable[AttendanceRecord], on: Optional[str] = None) -> List[AttendanceRecord]:
    """Attendance log, optionally for a single date, newest first"""
    rows = [record for record in attendance if not on or record.date == on]
    return sorted(rows, key=lambda r: r.date, reverse=True)
