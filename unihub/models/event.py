"""
Campus event model.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    event_type = Column(String(50), nullable=True, index=True)  # seminar, workshop, club, sports, ...
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)
    organizer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_date = Column(DateTime, nullable=True, index=True)
    location = Column(String(200), nullable=True)
    is_public = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    # Relationships
    organizer = relationship("User")
    department = relationship("Department")
