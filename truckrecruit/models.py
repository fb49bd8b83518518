"""Import every model so Base.metadata and relationship() strings resolve.

Imported by the app factory, Alembic env and the test fixtures.
"""

from .analytics.models import AnalyticsEvent
from .applications.models import Application, JobPosting
from .audit.models import AuditLog
from .auth.models import Profile
from .drivers.models import Driver
from .interviews.models import Interview
from .messages.models import Message
from .recruiters.models import Recruiter
from .subscriptions.models import Subscription
from .unlocks.models import ContactUnlock

__all__ = [
    "AnalyticsEvent",
    "Application",
    "AuditLog",
    "ContactUnlock",
    "Driver",
    "Interview",
    "JobPosting",
    "Message",
    "Profile",
    "Recruiter",
    "Subscription",
]
