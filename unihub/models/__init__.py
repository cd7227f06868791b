from .department import Department
from .user import User
from .post import Post, PostTag, PostType, Priority
from .interaction import Like, Comment
from .event import Event
from .resource import Resource
from .mentorship import Mentorship, MentorshipStatus
from .calendar import CalendarEntry

__all__ = [
    "Department",
    "User",
    "Post",
    "PostTag",
    "PostType",
    "Priority",
    "Like",
    "Comment",
    "Event",
    "Resource",
    "Mentorship",
    "MentorshipStatus",
    "CalendarEntry",
]
