from .auth import UserCreate, UserLogin, UserResponse, ProfileUpdate, Token
from .posts import (
    PostCreate,
    FeedFilters,
    FeedPost,
    CommentCreate,
    CommentResponse,
    CommentListItem,
    Liker,
)
from .campus import (
    DepartmentResponse,
    EventCreate, EventResponse,
    ResourceCreate, ResourceResponse,
    MentorshipCreate, MentorshipRespond, MentorshipResponse,
    CalendarEntryCreate, CalendarEntryResponse,
)

__all__ = [
    "UserCreate", "UserLogin", "UserResponse", "ProfileUpdate", "Token",
    "PostCreate", "FeedFilters", "FeedPost",
    "CommentCreate", "CommentResponse", "CommentListItem", "Liker",
    "DepartmentResponse",
    "EventCreate", "EventResponse",
    "ResourceCreate", "ResourceResponse",
    "MentorshipCreate", "MentorshipRespond", "MentorshipResponse",
    "CalendarEntryCreate", "CalendarEntryResponse",
]
