"""
Shared plumbing for stores that operate on an injected session.
"""
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional, Type

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..exceptions import NotFound, StorageError, ValidationError
from ..logging_config import db_logger
from ..models.department import Department
from ..models.post import Post
from ..models.user import User


def clean(value: Optional[str]) -> Optional[str]:
    """Strip a free-text field, turning blanks into None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def enum_value(enum_cls: Type[Enum], value: Optional[str], default: Enum, field: str) -> str:
    """Validate ``value`` against ``enum_cls``; blank means ``default``."""
    value = clean(value)
    if value is None:
        return default.value
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {field} '{value}', expected one of: {allowed}", field=field)


def require_text(value: Optional[str], field: str, max_length: Optional[int] = None) -> str:
    value = clean(value)
    if value is None:
        raise ValidationError(f"{field.replace('_', ' ').capitalize()} cannot be empty", field=field)
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field.replace('_', ' ').capitalize()} exceeds {max_length} characters", field=field)
    return value


class Store:
    """Base class for stores; the session is owned by the caller."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def storage(self, operation: str, **context) -> Iterator[None]:
        """Translate database failures into StorageError."""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            db_logger.error(f"Failed to {operation}", error=e, operation=operation, **context)
            raise StorageError(f"Could not {operation}") from e

    def require_post(self, post_id: int) -> None:
        with self.storage("look up post", post_id=post_id):
            found = self.db.execute(select(Post.id).where(Post.id == post_id)).first()
        if found is None:
            raise NotFound("Post", post_id)

    def require_user(self, user_id: int) -> None:
        with self.storage("look up user", user_id=user_id):
            found = self.db.execute(select(User.id).where(User.id == user_id)).first()
        if found is None:
            raise NotFound("User", user_id)

    def check_department(self, department_id: Optional[int]) -> None:
        if department_id is None:
            return
        with self.storage("look up department", department_id=department_id):
            found = self.db.execute(select(Department.id).where(Department.id == department_id)).first()
        if found is None:
            raise ValidationError(f"Unknown department {department_id}", field="department_id")
