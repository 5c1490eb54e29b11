"""Insight Tests

Tests for derived member and community fields, dashboard figures and the
finance and directory filters.
"""

from datetime import date

import pytest

from church_crm.client import insights
from tests.factories import (
    create_attendance,
    create_community,
    create_contribution,
    create_member,
)

TODAY = date(2024, 5, 20)


@pytest.fixture
def members():
    return [
        create_member("Alice Johnson", member_id="M1"),
        create_member("Bob Brown", member_id="M2"),
        create_member("Charlie Davis", member_id="M3", status="Visitor", assigned_community="West End Grace"),
        create_member("Ethan Hunt", member_id="M5", status="Inactive", assigned_community=None),
    ]


@pytest.fixture
def contributions():
    return [
        create_contribution("Alice Johnson", 100, "2024-05-05", contribution_id="T1"),
        create_contribution("Bob Brown", 50, "2024-05-05", type="Offering", contribution_id="T2"),
        create_contribution("Alice Johnson", 100, "2024-05-12", contribution_id="T3"),
        create_contribution("Alice Johnson", 75, "2024-04-20", type="Other", contribution_id="T4"),
        create_contribution("Alice Johnson", 500, "2023-12-30", contribution_id="T5"),
        create_contribution("Alice Johnson", 40, "2024-06-02", contribution_id="T6"),
    ]


# =============================================================================
# Members
# =============================================================================

class TestMemberInsights:

    def test_attendance_count_matches_exact_name(self):
        attendance = [
            create_attendance("Alice Johnson", "2024-05-04"),
            create_attendance("Alice Johnson", "2024-05-11", status="Absent"),
            create_attendance("alice johnson", "2024-05-18"),
        ]

        assert insights.attendance_count("Alice Johnson", attendance) == 2

    def test_giving_ytd_excludes_other_years_and_future(self, members, contributions):
        summaries = insights.member_summaries(members, [], contributions, today=TODAY)
        alice = summaries[0]

        assert alice.member.id == "M1"
        assert alice.total_contribution_ytd == 275

    def test_giving_total_all_time(self, contributions):
        assert insights.giving_total("Alice Johnson", contributions) == 815

    def test_filter_members_by_search(self, members):
        assert [m.id for m in insights.filter_members(members, search="BOB")] == ["M2"]
        assert [m.id for m in insights.filter_members(members, search="charlie@")] == ["M3"]

    def test_filter_members_by_status_and_community(self, members):
        visitors = insights.filter_members(members, status="Visitor")
        unassigned = insights.filter_members(members, community=insights.UNASSIGNED)
        northside = insights.filter_members(members, community="Northside Fellowship")

        assert [m.id for m in visitors] == ["M3"]
        assert [m.id for m in unassigned] == ["M5"]
        assert [m.id for m in northside] == ["M1", "M2"]


# =============================================================================
# Communities
# =============================================================================

class TestCommunityInsights:

    def test_member_count_is_case_sensitive(self, members):
        members.append(create_member("Frank Ocean", member_id="M6", assigned_community="northside fellowship"))

        assert insights.community_member_count("Northside Fellowship", members) == 2

    def test_occupancy(self, members):
        summaries = insights.community_summaries(
            [create_community("Northside Fellowship", max_capacity=20), create_community("Empty Nest", max_capacity=0)],
            members,
        )

        assert summaries[0].member_count == 2
        assert summaries[0].occupancy == 10.0
        assert summaries[1].occupancy == 0.0


# =============================================================================
# Dashboard and Finances
# =============================================================================

class TestDashboard:

    def test_dashboard_stats(self, members, contributions):
        stats = insights.dashboard_stats(members, contributions, today=TODAY)

        assert stats.active_members == 2
        assert stats.monthly_giving == 250
        assert stats.participation_rate == 75.0

    def test_dashboard_with_no_members(self):
        stats = insights.dashboard_stats([], [], today=TODAY)

        assert stats.participation_rate == 0.0

    def test_monthly_giving(self, contributions):
        months = dict(insights.monthly_giving(contributions, 2024))

        assert len(months) == 12
        assert months["Apr"] == 75
        assert months["May"] == 250
        assert months["Jun"] == 40
        assert months["Dec"] == 0

    def test_finance_totals(self, contributions):
        totals = insights.finance_totals(contributions)

        assert totals.total == 865
        assert totals.tithes == 740
        assert totals.offerings == 125


class TestContributionFilters:

    def test_newest_first(self, contributions):
        result = insights.filter_contributions(contributions, today=TODAY)

        assert [c.id for c in result] == ["T6", "T3", "T1", "T2", "T4", "T5"]

    def test_search_and_type(self, contributions):
        result = insights.filter_contributions(contributions, search="bob", type="Offering", today=TODAY)

        assert [c.id for c in result] == ["T2"]

    def test_year(self, contributions):
        result = insights.filter_contributions(contributions, year=2023, today=TODAY)

        assert [c.id for c in result] == ["T5"]

    def test_this_month_requires_same_year(self, contributions):
        contributions.append(create_contribution("Bob Brown", 5, "2023-05-10", contribution_id="T7"))

        result = insights.filter_contributions(contributions, date_range="MONTH", today=TODAY)

        assert [c.id for c in result] == ["T3", "T1", "T2"]

    def test_last_month(self, contributions):
        result = insights.filter_contributions(contributions, date_range="LAST_MONTH", today=TODAY)

        assert [c.id for c in result] == ["T4"]

    def test_last_month_in_january(self, contributions):
        result = insights.filter_contributions(contributions, date_range="LAST_MONTH", today=date(2024, 1, 15))

        assert [c.id for c in result] == ["T5"]

    def test_week_windows(self, contributions):
        week = insights.filter_contributions(contributions, date_range="WEEK", today=date(2024, 5, 15))
        last_week = insights.filter_contributions(contributions, date_range="LAST_WEEK", today=date(2024, 5, 15))

        assert [c.id for c in week] == ["T3"]
        assert [c.id for c in last_week] == ["T1", "T2"]

    def test_custom_range(self, contributions):
        result = insights.filter_contributions(
            contributions,
            date_range="CUSTOM",
            start=date(2024, 4, 1),
            end=date(2024, 5, 5),
            today=TODAY,
        )

        assert [c.id for c in result] == ["T1", "T2", "T4"]

    def test_unknown_range(self, contributions):
        with pytest.raises(ValueError):
            insights.filter_contributions(contributions, date_range="FORTNIGHT", today=TODAY)


class TestAttendanceLog:

    def test_filter_by_date(self):
        attendance = [
            create_attendance("Alice Johnson", "2024-05-04"),
            create_attendance("Bob Brown", "2024-05-11"),
            create_attendance("Alice Johnson", "2024-05-11"),
        ]

        assert len(insights.filter_attendance(attendance, on="2024-05-11")) == 2
        assert [r.date for r in insights.filter_attendance(attendance)] == ["2024-05-11", "2024-05-11", "2024-05-04"]
