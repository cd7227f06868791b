"""
Feed assembler: the denormalized, read-side view of posts.
"""
from collections import defaultdict
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.sql import Select

from ..logging_config import feed_logger, timed
from ..models.department import Department
from ..models.interaction import Comment, Like
from ..models.post import Post, PostTag
from ..models.user import User
from ..schemas.posts import FeedFilters, FeedPost
from .base import Store


class FeedAssembler(Store):
    """
    Builds FeedPost rows: posts joined with their author and department,
    per-post like and comment counts, and tags.

    Filters are ANDed exact matches; results are newest first with the id as
    tie-break.
    """

    @timed(feed_logger)
    def list(
        self,
        filters: Optional[FeedFilters] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[FeedPost]:
        stmt = self._apply_filters(self._base_query(), filters or FeedFilters())
        stmt = self._newest_first(stmt)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return self._assemble(stmt, "list feed")

    @timed(feed_logger)
    def list_for_author(self, user_id: int) -> List[FeedPost]:
        stmt = self._newest_first(self._base_query().where(Post.user_id == user_id))
        return self._assemble(stmt, "list author feed")

    def get(self, post_id: int) -> Optional[FeedPost]:
        posts = self._assemble(self._base_query().where(Post.id == post_id), "get post")
        return posts[0] if posts else None

    def _base_query(self) -> Select:
        likes_count = (
            select(func.count(Like.id))
            .where(Like.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        comments_count = (
            select(func.count(Comment.id))
            .where(Comment.post_id == Post.id)
            .correlate(Post)
            .scalar_subquery()
        )
        return (
            select(
                Post.id,
                Post.content,
                Post.post_type,
                Post.department_id,
                Post.course_code,
                Post.category,
                Post.priority,
                Post.is_announcement,
                Post.created_at,
                Post.user_id,
                User.username,
                User.role,
                User.student_id,
                Department.name.label("department_name"),
                Department.code.label("department_code"),
                likes_count.label("likes_count"),
                comments_count.label("comments_count"),
            )
            .join(User, User.id == Post.user_id)
            .outerjoin(Department, Department.id == Post.department_id)
        )

    @staticmethod
    def _apply_filters(stmt: Select, filters: FeedFilters) -> Select:
        if filters.department_id is not None:
            stmt = stmt.where(Post.department_id == filters.department_id)
        if filters.post_type:
            stmt = stmt.where(Post.post_type == filters.post_type)
        if filters.course_code:
            stmt = stmt.where(Post.course_code == filters.course_code)
        return stmt

    @staticmethod
    def _newest_first(stmt: Select) -> Select:
        return stmt.order_by(Post.created_at.desc(), Post.id.desc())

    def _assemble(self, stmt: Select, operation: str) -> List[FeedPost]:
        with self.storage(operation):
            rows = self.db.execute(stmt).all()
            tags = self._tags_for([row.id for row in rows])
        return [FeedPost(**row._mapping, tags=tags.get(row.id, [])) for row in rows]

    def _tags_for(self, post_ids: List[int]) -> Dict[int, List[str]]:
        tags: Dict[int, List[str]] = defaultdict(list)
        if not post_ids:
            return tags
        rows = self.db.execute(
            select(PostTag.post_id, PostTag.tag)
            .where(PostTag.post_id.in_(post_ids))
            .order_by(PostTag.post_id, PostTag.tag)
        ).all()
        for post_id, tag in rows:
            tags[post_id].append(tag)
        return tags
