"""
Shared resource routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..models.user import User
from ..auth import get_required_user
from ..responses import success
from ..schemas.campus import ResourceCreate, ResourceResponse
from ..services.campus import ResourceStore

router = APIRouter(prefix="/api/resources", tags=["resources"])


@router.get("", response_model=List[ResourceResponse])
def list_resources(
    department_id: Optional[int] = None,
    course_code: Optional[str] = None,
    resource_type: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Get approved resources plus the current user's own uploads."""
    return ResourceStore(db).list(
        viewer_id=current_user.id,
        department_id=department_id,
        course_code=course_code or None,
        resource_type=resource_type or None,
    )


@router.post("")
def share_resource(
    resource: ResourceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    store = ResourceStore(db)
    resource_id = store.create(
        uploader_id=current_user.id,
        uploader_role=current_user.role,
        **resource.model_dump(),
    )
    return success(
        message="Resource shared successfully",
        resource=store.get(resource_id).model_dump(mode="json"),
    )


@router.post("/{resource_id}/approve")
def approve_resource(
    resource_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Approve a pending resource (faculty and staff only)."""
    resource = ResourceStore(db).approve(resource_id, current_user.role)
    return success(resource=resource.model_dump(mode="json"))


@router.post("/{resource_id}/download")
def download_resource(
    resource_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_required_user),
):
    """Count a download and hand back the resource link."""
    resource = ResourceStore(db).record_download(resource_id, current_user.id)
    return success(file_url=resource.file_url, download_count=resource.download_count)
