from .engine import FeedEngine
from .posts import PostStore, parse_tags
from .interactions import InteractionStore
from .feed import FeedAssembler
from .campus import (
    CalendarStore,
    DepartmentDirectory,
    EventStore,
    MentorshipStore,
    ResourceStore,
)

__all__ = [
    "FeedEngine",
    "PostStore",
    "parse_tags",
    "InteractionStore",
    "FeedAssembler",
    "CalendarStore",
    "DepartmentDirectory",
    "EventStore",
    "MentorshipStore",
    "ResourceStore",
]
