"""
Academic calendar routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..models.user import User
from ..auth import get_required_user
from ..responses import success
from ..schemas.campus import CalendarEntryCreate, CalendarEntryResponse
from ..services.campus import CalendarStore

router = APIRouter(prefix="/api/calendar", tags=["calendar"])


@router.get("", response_model=List[CalendarEntryResponse])
def get_calendar(
    department_id: Optional[int] = None,
    event_type: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Get academic calendar entries ordered by start date."""
    return CalendarStore(db).list(department_id=department_id, event_type=event_type or None)


@router.post("")
def add_calendar_event(
    entry: CalendarEntryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Add a calendar entry (faculty and staff only)."""
    entry_id = CalendarStore(db).create(
        user_id=current_user.id,
        role=current_user.role,
        **entry.model_dump(),
    )
    return success(message="Calendar event added successfully", id=entry_id)
