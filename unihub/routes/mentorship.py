"""
Mentorship request routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..models.user import User
from ..auth import get_required_user
from ..responses import success
from ..schemas.campus import MentorshipCreate, MentorshipRespond, MentorshipResponse
from ..services.campus import MentorshipStore

router = APIRouter(prefix="/api/mentorship", tags=["mentorship"])


@router.get("", response_model=List[MentorshipResponse])
def list_mentorship(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Get requests where the current user is mentor or mentee."""
    return MentorshipStore(db).list_for_user(current_user.id)


@router.post("")
def request_mentorship(
    request_data: MentorshipCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    mentorship_id = MentorshipStore(db).request(mentee_id=current_user.id, **request_data.model_dump())
    return success(message="Mentorship request sent successfully", id=mentorship_id)


@router.post("/{mentorship_id}/respond")
def respond_to_mentorship(
    mentorship_id: int,
    response: MentorshipRespond,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Accept or decline a request addressed to the current user."""
    request = MentorshipStore(db).respond(mentorship_id, current_user.id, response.status)
    return success(mentorship=request.model_dump(mode="json"))
