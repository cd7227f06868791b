"""
Roles and the capabilities each role is granted.
"""
from enum import Enum
from typing import Dict, FrozenSet, Optional, Union

from .exceptions import NotAuthorized, ValidationError


class Role(str, Enum):
    STUDENT = "student"
    FACULTY = "faculty"
    STAFF = "staff"


class Capability(str, Enum):
    POST_ANNOUNCEMENT = "post_announcement"
    MANAGE_CALENDAR = "manage_calendar"
    APPROVE_RESOURCES = "approve_resources"


ROLE_CAPABILITIES: Dict[Role, FrozenSet[Capability]] = {
    Role.STUDENT: frozenset(),
    Role.FACULTY: frozenset({
        Capability.POST_ANNOUNCEMENT,
        Capability.MANAGE_CALENDAR,
        Capability.APPROVE_RESOURCES,
    }),
    Role.STAFF: frozenset({
        Capability.POST_ANNOUNCEMENT,
        Capability.MANAGE_CALENDAR,
        Capability.APPROVE_RESOURCES,
    }),
}

_DENIED_MESSAGES = {
    Capability.POST_ANNOUNCEMENT: "Only faculty and staff can post announcements",
    Capability.MANAGE_CALENDAR: "Only faculty and staff can add calendar events",
    Capability.APPROVE_RESOURCES: "Only faculty and staff can approve resources",
}


def parse_role(value: Union[str, Role, None]) -> Role:
    """Coerce a stored or submitted role string into a Role."""
    if value is None or value == "":
        return Role.STUDENT
    try:
        return Role(value)
    except ValueError:
        raise ValidationError(f"Unknown role '{value}'", field="role")


def has_capability(role: Optional[Union[str, Role]], capability: Capability) -> bool:
    if role is None:
        return False
    try:
        role = Role(role)
    except ValueError:
        return False
    return capability in ROLE_CAPABILITIES[role]


def require_capability(role: Optional[Union[str, Role]], capability: Capability) -> None:
    """Raise NotAuthorized unless ``role`` grants ``capability``."""
    if not has_capability(role, capability):
        raise NotAuthorized(_DENIED_MESSAGES[capability])
