"""
Feed routes: listing, creating and deleting posts, likes and comments.
"""
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional

from ..database import get_db
from ..exceptions import NotAuthorized, NotFound, ValidationError
from ..limiter import limiter
from ..models.user import User
from ..auth import get_required_user
from ..config import get_settings
from ..responses import success
from ..schemas.posts import (
    CommentCreate,
    CommentListItem,
    FeedFilters,
    FeedPost,
    Liker,
    PostCreate,
)
from ..services.engine import FeedEngine

settings = get_settings()

router = APIRouter(prefix="/api/posts", tags=["posts"])


def get_feed_engine(db: Session = Depends(get_db)) -> FeedEngine:
    return FeedEngine(db)


def _likers(usernames: List[str]) -> List[dict]:
    return [{"username": name} for name in usernames]


def _department_filter(value: Optional[str]) -> Optional[int]:
    """A blank department means all departments."""
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError("Department must be a number", field="department")


@router.get("", response_model=List[FeedPost])
def list_posts(
    department: Optional[str] = Query(default=None),
    post_type: Optional[str] = Query(default=None, alias="type"),
    course_code: Optional[str] = Query(default=None, alias="course"),
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    """Get the feed, optionally filtered by department, post type and course."""
    filters = FeedFilters(
        department_id=_department_filter(department),
        post_type=post_type or None,
        course_code=course_code or None,
    )
    return engine.feed.list(filters, limit=limit, offset=offset)


@router.get("/mine", response_model=List[FeedPost])
def list_my_posts(
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    """Get the current user's own posts."""
    return engine.feed.list_for_author(current_user.id)


@router.get("/user/{user_id}", response_model=List[FeedPost])
def list_user_posts(
    user_id: int,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    return engine.feed.list_for_author(user_id)


@router.get("/department/{department_id}", response_model=List[FeedPost])
def list_department_posts(
    department_id: int,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    return engine.feed.list(FeedFilters(department_id=department_id))


@router.get("/course/{course_code}", response_model=List[FeedPost])
def list_course_posts(
    course_code: str,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    return engine.feed.list(FeedFilters(course_code=course_code))


@router.get("/{post_id}", response_model=FeedPost)
def get_post(
    post_id: int,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    """Get a single post with its counts and tags."""
    post = engine.feed.get(post_id)
    if not post:
        raise NotFound("Post", post_id)
    return post


@router.post("")
def create_post(
    post_data: PostCreate,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    """Create a new post for the current user."""
    post_id = engine.posts.create(
        author_id=current_user.id,
        content=post_data.content,
        post_type=post_data.post_type,
        department_id=post_data.department_id,
        course_code=post_data.course_code,
        category=post_data.category,
        priority=post_data.priority,
        tags_csv=post_data.tags,
        author_role=current_user.role,
    )
    return success(post=engine.feed.get(post_id).model_dump(mode="json"))


@router.delete("/{post_id}")
def delete_post(
    post_id: int,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    """Delete a post together with its likes and comments (author only)."""
    if not engine.posts.delete(post_id, current_user.id):
        raise NotAuthorized("Post not found or you are not its author")
    return success()


@router.post("/{post_id}/like")
def like_post(
    post_id: int,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    likes = engine.interactions.like(current_user.id, post_id)
    return success(likes=_likers(likes))


@router.delete("/{post_id}/like")
def unlike_post(
    post_id: int,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    likes = engine.interactions.unlike(current_user.id, post_id)
    return success(likes=_likers(likes))


@router.get("/{post_id}/likes", response_model=List[Liker])
def get_likes(
    post_id: int,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    return _likers(engine.interactions.list_likes(post_id))


@router.post("/{post_id}/comments")
@limiter.limit(settings.comment_rate_limit)
def comment_on_post(
    request: Request,
    post_id: int,
    comment_data: CommentCreate,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    comment = engine.interactions.comment(current_user.id, post_id, comment_data.content)
    return success(comment=comment.model_dump(mode="json"))


@router.get("/{post_id}/comments", response_model=List[CommentListItem])
def get_comments(
    post_id: int,
    engine: FeedEngine = Depends(get_feed_engine),
    current_user: User = Depends(get_required_user),
):
    """Comments on a post, newest first."""
    return engine.interactions.list_comments(post_id)
