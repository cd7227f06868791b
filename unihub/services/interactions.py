"""
Interaction store: likes and comments on posts.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, select

from ..config import get_settings
from ..database import insert_if_absent, transaction
from ..logging_config import feed_logger
from ..models.interaction import Comment, Like
from ..models.user import User
from ..schemas.posts import CommentListItem, CommentResponse
from .base import Store, require_text


class InteractionStore(Store):

    def like(self, user_id: int, post_id: int) -> List[str]:
        """Like a post (idempotent) and return the usernames of all likers."""
        self.require_post(post_id)
        with self.storage("like post", user_id=user_id, post_id=post_id):
            with transaction(self.db):
                insert_if_absent(
                    self.db,
                    Like,
                    {"user_id": user_id, "post_id": post_id, "created_at": datetime.now(timezone.utc)},
                    index_elements=["user_id", "post_id"],
                )
        return self.list_likes(post_id)

    def unlike(self, user_id: int, post_id: int) -> List[str]:
        """Remove a like if present and return the remaining likers."""
        with self.storage("unlike post", user_id=user_id, post_id=post_id):
            with transaction(self.db):
                self.db.execute(
                    delete(Like)
                    .where(Like.user_id == user_id, Like.post_id == post_id)
                    .execution_options(synchronize_session=False)
                )
        return self.list_likes(post_id)

    def comment(self, user_id: int, post_id: int, content: Optional[str]) -> CommentResponse:
        content = require_text(content, "content", get_settings().max_content_length)
        self.require_post(post_id)

        with self.storage("comment on post", user_id=user_id, post_id=post_id):
            with transaction(self.db):
                comment = Comment(user_id=user_id, post_id=post_id, content=content)
                self.db.add(comment)
                self.db.flush()
                comment_id = comment.id

            row = self.db.execute(
                select(
                    Comment.id,
                    Comment.user_id,
                    Comment.post_id,
                    Comment.content,
                    Comment.created_at,
                    User.username,
                )
                .join(User, User.id == Comment.user_id)
                .where(Comment.id == comment_id)
            ).one()

        feed_logger.info("Comment added", comment_id=comment_id, post_id=post_id, user_id=user_id)
        return CommentResponse(**row._mapping)

    def list_likes(self, post_id: int) -> List[str]:
        with self.storage("list likes", post_id=post_id):
            return list(self.db.execute(
                select(User.username)
                .join(Like, Like.user_id == User.id)
                .where(Like.post_id == post_id)
                .order_by(Like.id)
            ).scalars())

    def list_comments(self, post_id: int) -> List[CommentListItem]:
        """Comments on a post, newest first."""
        with self.storage("list comments", post_id=post_id):
            rows = self.db.execute(
                select(User.username, Comment.content, Comment.created_at)
                .join(User, User.id == Comment.user_id)
                .where(Comment.post_id == post_id)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
            ).all()
        return [CommentListItem(**row._mapping) for row in rows]
