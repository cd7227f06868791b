"""
Post and tag models for the community feed.
"""
from enum import Enum

from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base


class PostType(str, Enum):
    GENERAL = "general"
    DISCUSSION = "discussion"
    ANNOUNCEMENT = "announcement"
    RESOURCE = "resource"
    EVENT = "event"
    MENTORSHIP = "mentorship"


class Priority(str, Enum):
    NORMAL = "normal"
    HIGH = "high"


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    # Dependents are removed by the post store, not by the database
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    post_type = Column(String(20), nullable=False, default=PostType.GENERAL.value, index=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)
    course_code = Column(String(50), nullable=True, index=True)
    category = Column(String(100), nullable=True)
    priority = Column(String(20), nullable=False, default=Priority.NORMAL.value)
    is_announcement = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    # Relationships
    author = relationship("User")
    department = relationship("Department")


class PostTag(Base):
    __tablename__ = "post_tags"
    __table_args__ = (UniqueConstraint("post_id", "tag", name="uq_post_tags_post_tag"),)

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    tag = Column(String(100), nullable=False)
