"""Services module"""

from church_crm.services.database_service import db_service
from church_crm.services.email_service import get_email_service
from church_crm.services.outreach_service import generate_outreach_message

__all__ = ["db_service", "get_email_service", "generate_outreach_message"]
