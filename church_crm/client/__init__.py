"""Python client for the Church CRM API"""

from church_crm.client.api_client import ChurchAPIError, ChurchClient
from church_crm.client.retention import Absentee, find_absentees
from church_crm.client.store import ChurchDataStore

__all__ = ["ChurchAPIError", "ChurchClient", "ChurchDataStore", "Absentee", "find_absentees"]
