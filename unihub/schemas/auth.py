from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime


class UserCreate(BaseModel):
    username: str = Field(max_length=50)
    email: EmailStr
    password: str
    role: Optional[str] = None
    department_id: Optional[int] = None
    student_id: Optional[str] = None
    year_of_study: Optional[int] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class ProfileUpdate(BaseModel):
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    department_id: Optional[int] = None
    student_id: Optional[str] = None
    year_of_study: Optional[int] = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    role: str
    department_id: Optional[int] = None
    student_id: Optional[str] = None
    year_of_study: Optional[int] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
