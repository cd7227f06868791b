"""
Department directory routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from ..database import get_db
from ..schemas.campus import DepartmentResponse
from ..services.campus import DepartmentDirectory

router = APIRouter(prefix="/api/departments", tags=["departments"])


@router.get("", response_model=List[DepartmentResponse])
def list_departments(db: Session = Depends(get_db)):
    """List all departments by name (no login required)."""
    return DepartmentDirectory(db).list()
