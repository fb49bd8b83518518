"""Role-scoped menu served to the front end.

Each entry names the ``/api/v1`` endpoint that backs its screen.
"""

from .auth.models import UserRole

NAVIGATION: dict[UserRole, list[dict]] = {
    UserRole.DRIVER: [
        {"name": "Dashboard", "href": "/dashboard", "endpoint": "/dashboard"},
        {"name": "My Profile", "href": "/profile", "endpoint": "/drivers/me"},
        {"name": "Applications", "href": "/applications", "endpoint": "/applications"},
        {"name": "Messages", "href": "/messages", "endpoint": "/messages"},
        {"name": "Interviews", "href": "/interviews", "endpoint": "/interviews"},
    ],
    UserRole.RECRUITER: [
        {"name": "Dashboard", "href": "/dashboard", "endpoint": "/dashboard"},
        {"name": "Candidates", "href": "/candidates", "endpoint": "/drivers"},
        {"name": "Unlocked Contacts", "href": "/contacts", "endpoint": "/unlocks"},
        {"name": "Messages", "href": "/messages", "endpoint": "/messages"},
        {"name": "Interviews", "href": "/interviews", "endpoint": "/interviews"},
        {"name": "Analytics", "href": "/analytics", "endpoint": "/analytics/recruiter"},
        {"name": "Subscription", "href": "/subscription", "endpoint": "/subscription"},
    ],
    UserRole.ADMIN: [
        {"name": "Dashboard", "href": "/dashboard", "endpoint": "/admin/dashboard"},
        {"name": "Users", "href": "/users", "endpoint": "/admin/users"},
        {"name": "Candidates", "href": "/candidates", "endpoint": "/drivers"},
    ],
}


def navigation_for(role: UserRole | str) -> list[dict]:
    return [dict(item) for item in NAVIGATION[UserRole(role)]]
