from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


class PostCreate(BaseModel):
    content: str
    post_type: Optional[str] = None
    department_id: Optional[int] = None
    course_code: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    tags: Optional[str] = None  # comma separated


class FeedFilters(BaseModel):
    """Optional exact-match constraints applied to the feed."""
    department_id: Optional[int] = None
    post_type: Optional[str] = None
    course_code: Optional[str] = None


class FeedPost(BaseModel):
    """A post with its author, department, counts and tags."""
    id: int
    content: str
    post_type: str
    department_id: Optional[int] = None
    course_code: Optional[str] = None
    category: Optional[str] = None
    priority: str
    is_announcement: bool
    created_at: datetime
    user_id: int
    username: str
    role: str
    student_id: Optional[str] = None
    department_name: Optional[str] = None
    department_code: Optional[str] = None
    likes_count: int = 0
    comments_count: int = 0
    tags: List[str] = []


class CommentCreate(BaseModel):
    content: str


class CommentResponse(BaseModel):
    id: int
    user_id: int
    post_id: int
    content: str
    created_at: datetime
    username: str


class CommentListItem(BaseModel):
    username: str
    content: str
    created_at: datetime


class Liker(BaseModel):
    username: str
