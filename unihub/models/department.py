"""
Department reference data.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from datetime import datetime, timezone
from ..database import Base


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    code = Column(String(20), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))


DEFAULT_DEPARTMENTS = [
    ("Computer Science & Engineering", "CSE", "Department of Computer Science and Engineering"),
    ("Business Administration", "BBA", "Department of Business Administration"),
    ("Electrical & Electronic Engineering", "EEE", "Department of Electrical and Electronic Engineering"),
    ("English & Humanities", "ENH", "Department of English and Humanities"),
    ("Media Studies & Journalism", "MSJ", "Department of Media Studies and Journalism"),
    ("Economics", "ECO", "Department of Economics"),
    ("General", "GEN", "General/Cross-departmental"),
]
