"""In-memory data store mirroring the server collections.

The store keeps the five entity collections as plain lists and reloads all of
them after every mutation, whether the mutation succeeded or not. Nothing is
patched locally and nothing is rolled back.
"""

import asyncio
import logging
from datetime import date
from typing import Dict, List, Optional

from church_crm.client import insights
from church_crm.client.api_client import ChurchClient
from church_crm.client.retention import Absentee, find_absentees
from church_crm.models import (
    AttendanceRecord,
    Community,
    Contribution,
    Event,
    Member,
    UserResponse,
)
from church_crm.services.outreach_service import DEFAULT_DAYS_ABSENT, generate_outreach_message

logger = logging.getLogger(__name__)


class ChurchDataStore:
    """Client-side state for members, communities, events, attendance and giving."""

    def __init__(self, client: ChurchClient):
        self.client = client
        self.members: List[Member] = []
        self.communities: List[Community] = []
        self.events: List[Event] = []
        self.attendance: List[AttendanceRecord] = []
        self.contributions: List[Contribution] = []
        self.users: List[UserResponse] = []
        self.is_ready = False
        self.drafted_messages: Dict[str, str] = {}

    async def initialize(self):
        """Ping the backend, then load everything"""
        if await self.client.ping():
            logger.info("Connected to Backend API")
        else:
            logger.error("Failed to connect to backend")
        await self.refresh()
        self.is_ready = True

    async def refresh(self):
        """Re-fetch all five collections concurrently"""
        try:
            (
                self.members,
                self.communities,
                self.events,
                self.attendance,
                self.contributions,
            ) = await asyncio.gather(
                self.client.get_members(),
                self.client.get_communities(),
                self.client.get_events(),
                self.client.get_attendance(),
                self.client.get_contributions(),
            )
        except Exception as e:
            logger.error(f"Failed to refresh data: {e}")

    # ==================== Mutations ====================

    async def add_member(self, member: Member):
        await self.client.add_member(member)
        await self.refresh()

    async def update_member(self, member: Member):
        await self.client.update_member(member)
        await self.refresh()

    async def delete_member(self, member_id: str):
        await self.client.delete_member(member_id)
        await self.refresh()

    async def add_community(self, community: Community):
        await self.client.add_community(community)
        await self.refresh()

    async def update_community(self, community: Community):
        await self.client.update_community(community)
        await self.refresh()

    async def delete_community(self, community_id: str):
        await self.client.delete_community(community_id)
        await self.refresh()

    async def add_event(self, event: Event):
        await self.client.add_event(event)
        await self.refresh()

    async def update_event(self, event: Event):
        await self.client.update_event(event)
        await self.refresh()

    async def delete_event(self, event_id: str):
        await self.client.delete_event(event_id)
        await self.refresh()

    async def add_attendance(self, record: AttendanceRecord):
        await self.client.add_attendance(record)
        await self.refresh()

    async def add_contribution(self, contribution: Contribution):
        await self.client.add_contribution(contribution)
        await self.refresh()

    async def update_contribution(self, contribution: Contribution):
        await self.client.update_contribution(contribution)
        await self.refresh()

    # ==================== Users (admin) ====================
    # These raise ChurchAPIError; the user list is reloaded only on success.

    async def refresh_users(self):
        self.users = await self.client.get_users()

    async def add_user(self, email: str, password: str, name: Optional[str] = None, role: str = "user"):
        await self.client.add_user(email, password, name, role)
        await self.refresh_users()

    async def update_user(self, user_id: int, email: str, name: Optional[str] = None,
                          role: str = "user", password: Optional[str] = None):
        await self.client.update_user(user_id, email, name, role, password)
        await self.refresh_users()

    async def delete_user(self, user_id: int):
        await self.client.delete_user(user_id)
        await self.refresh_users()

    # ==================== Derived views ====================

    def member_summaries(self, today: Optional[date] = None) -> List[insights.MemberSummary]:
        return insights.member_summaries(self.members, self.attendance, self.contributions, today)

    def community_summaries(self) -> List[insights.CommunitySummary]:
        return insights.community_summaries(self.communities, self.members)

    def dashboard(self, today: Optional[date] = None) -> insights.DashboardStats:
        return insights.dashboard_stats(self.members, self.contributions, today)

    def scan_for_absentees(self) -> List[Absentee]:
        """Run the retention scan over the collections currently loaded"""
        absentees = find_absentees(self.members, self.attendance, self.events)
        logger.info(f"Retention scan flagged {len(absentees)} of {len(self.members)} members")
        return absentees

    async def draft_outreach(self, absentee: Absentee) -> str:
        """Draft a check-in message for an absentee and remember it by member id"""
        message = await asyncio.to_thread(
            generate_outreach_message, absentee.first_name, DEFAULT_DAYS_ABSENT
        )
        self.drafted_messages[absentee.member.id] = message
        return message
