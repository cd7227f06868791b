"""
Authentication routes for registration, login, tokens and the profile.
"""
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import or_
from sqlalchemy.orm import Session
from pydantic import BaseModel

from ..database import get_db
from ..limiter import limiter
from ..models.department import Department
from ..models.user import User
from ..permissions import parse_role
from ..schemas.auth import UserCreate, UserLogin, UserResponse, ProfileUpdate, Token
from ..auth import (
    authenticate_user,
    get_password_hash,
    create_tokens,
    get_required_user,
    refresh_access_token,
)
from ..config import get_settings

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


class RefreshRequest(BaseModel):
    """Request to refresh tokens."""
    refresh_token: str


def _check_department(db: Session, department_id):
    if department_id is None:
        return
    if not db.query(Department).filter(Department.id == department_id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unknown department",
        )


@router.post("/register", response_model=UserResponse)
@limiter.limit(settings.register_rate_limit)
def register(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user account."""
    username = user_data.username.strip()
    if not username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username is required"
        )

    existing = db.query(User).filter(
        or_(User.email == user_data.email, User.username == username)
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username or email already registered"
        )
    _check_department(db, user_data.department_id)

    user = User(
        username=username,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        role=parse_role(user_data.role).value,
        department_id=user_data.department_id,
        student_id=user_data.student_id,
        year_of_study=user_data.year_of_study,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@router.post("/login", response_model=Token)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Login with OAuth2 form (username field carries the email)."""
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token, refresh_token = create_tokens(user.id)
    return Token(access_token=access_token, refresh_token=refresh_token)


@router.post("/login/json", response_model=Token)
@limiter.limit(settings.login_rate_limit)
def login_json(request: Request, credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with JSON body (email/password)."""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    access_token, refresh_token = create_tokens(user.id)
    return Token(access_token=access_token, refresh_token=refresh_token)


@router.post("/refresh", response_model=Token)
@limiter.limit(settings.refresh_rate_limit)
def refresh_tokens(request: Request, refresh_request: RefreshRequest, db: Session = Depends(get_db)):
    """Get new access and refresh tokens using a valid refresh token."""
    tokens = refresh_access_token(refresh_request.refresh_token, db)
    if not tokens:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )

    access_token, refresh_token = tokens
    return Token(access_token=access_token, refresh_token=refresh_token)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_required_user)):
    """Get current authenticated user."""
    return current_user


@router.patch("/me", response_model=UserResponse)
def update_me(
    profile: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Update the mutable profile fields of the current user."""
    update_data = profile.model_dump(exclude_unset=True)
    if "department_id" in update_data:
        _check_department(db, update_data["department_id"])

    for field, value in update_data.items():
        setattr(current_user, field, value)

    db.commit()
    db.refresh(current_user)
    return current_user


@router.post("/logout")
def logout(current_user: User = Depends(get_required_user)):
    """
    Logout the current user.

    JWTs are stateless, so the client simply discards its tokens.
    """
    return {"success": True, "message": "Successfully logged out"}
