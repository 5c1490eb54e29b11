"""Contribution (giving) models"""

from enum import Enum

from church_crm.models.base import CamelModel


class ContributionType(str, Enum):
    TITHE = "Tithe"
    OFFERING = "Offering"
    OTHER = "Other"


class ContributionFields(CamelModel):
    date: str
    member_name: str
    amount: float
    type: ContributionType


class ContributionCreate(ContributionFields):
    id: str


class ContributionUpdate(ContributionFields):
    pass


class Contribution(ContributionFields):
    id: str
