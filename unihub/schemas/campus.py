from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime


class DepartmentResponse(BaseModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None

    class Config:
        from_attributes = True


class EventCreate(BaseModel):
    title: str
    description: Optional[str] = None
    event_type: Optional[str] = None
    department_id: Optional[int] = None
    event_date: Optional[datetime] = None
    location: Optional[str] = None
    is_public: bool = True


class EventResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    event_type: Optional[str] = None
    department_id: Optional[int] = None
    organizer_id: int
    organizer_name: str
    department_name: Optional[str] = None
    event_date: Optional[datetime] = None
    location: Optional[str] = None
    is_public: bool
    created_at: datetime


class ResourceCreate(BaseModel):
    title: str
    description: Optional[str] = None
    resource_type: Optional[str] = None
    file_url: Optional[str] = None
    course_code: Optional[str] = None
    department_id: Optional[int] = None


class ResourceResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    resource_type: Optional[str] = None
    file_url: Optional[str] = None
    course_code: Optional[str] = None
    department_id: Optional[int] = None
    uploader_id: int
    uploader_name: str
    department_name: Optional[str] = None
    is_approved: bool
    download_count: int
    created_at: datetime


class MentorshipCreate(BaseModel):
    mentor_id: int
    subject_area: Optional[str] = None
    message: Optional[str] = None


class MentorshipRespond(BaseModel):
    status: str


class MentorshipResponse(BaseModel):
    id: int
    mentor_id: int
    mentee_id: int
    mentor_name: str
    mentor_role: str
    mentee_name: str
    mentee_role: str
    subject_area: Optional[str] = None
    status: str
    message: Optional[str] = None
    created_at: datetime


class CalendarEntryCreate(BaseModel):
    title: str
    description: Optional[str] = None
    event_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    department_id: Optional[int] = None
    is_important: bool = False


class CalendarEntryResponse(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    event_type: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    department_id: Optional[int] = None
    department_name: Optional[str] = None
    is_important: bool
    created_by: int
    created_by_name: str
    created_at: datetime
