from .auth import router as auth_router
from .posts import router as posts_router
from .events import router as events_router
from .resources import router as resources_router
from .mentorship import router as mentorship_router
from .calendar import router as calendar_router
from .departments import router as departments_router

__all__ = [
    "auth_router",
    "posts_router",
    "events_router",
    "resources_router",
    "mentorship_router",
    "calendar_router",
    "departments_router",
]
