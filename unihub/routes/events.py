"""
Campus event routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..models.user import User
from ..auth import get_required_user
from ..responses import success
from ..schemas.campus import EventCreate, EventResponse
from ..services.campus import EventStore

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get("", response_model=List[EventResponse])
def list_events(
    department_id: Optional[int] = None,
    event_type: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Get public events, soonest first."""
    return EventStore(db).list(department_id=department_id, event_type=event_type or None)


@router.post("")
def create_event(
    event: EventCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Create an event organized by the current user."""
    event_id = EventStore(db).create(organizer_id=current_user.id, **event.model_dump())
    return success(message="Event created successfully", id=event_id)
