"""
Post store: creating and deleting posts and attaching tags.
"""
from typing import List, Optional, Union

from sqlalchemy import delete, select

from ..config import get_settings
from ..database import insert_if_absent, transaction
from ..logging_config import feed_logger
from ..models.interaction import Comment, Like
from ..models.post import Post, PostTag, PostType, Priority
from ..permissions import Capability, Role, require_capability
from .base import Store, clean, enum_value, require_text


def parse_tags(tags_csv: Optional[str]) -> List[str]:
    """Split a comma separated tag list, dropping blanks and repeats."""
    if not tags_csv:
        return []
    tags = []
    for raw in tags_csv.split(","):
        tag = raw.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


class PostStore(Store):

    def create(
        self,
        author_id: int,
        content: Optional[str],
        post_type: Optional[str] = None,
        department_id: Optional[int] = None,
        course_code: Optional[str] = None,
        category: Optional[str] = None,
        priority: Optional[str] = None,
        tags_csv: Optional[str] = None,
        author_role: Optional[Union[str, Role]] = None,
    ) -> int:
        """
        Create a post and its tags in one transaction.

        Announcements require a role with the announcement capability.
        Returns the new post id.
        """
        content = require_text(content, "content", get_settings().max_content_length)
        post_type = enum_value(PostType, post_type, PostType.GENERAL, "post_type")
        priority = enum_value(Priority, priority, Priority.NORMAL, "priority")
        is_announcement = post_type == PostType.ANNOUNCEMENT.value
        if is_announcement:
            require_capability(author_role, Capability.POST_ANNOUNCEMENT)
        self.check_department(department_id)
        tags = parse_tags(tags_csv)

        with self.storage("create post", author_id=author_id):
            with transaction(self.db):
                post = Post(
                    user_id=author_id,
                    content=content,
                    post_type=post_type,
                    department_id=department_id,
                    course_code=clean(course_code),
                    category=clean(category),
                    priority=priority,
                    is_announcement=is_announcement,
                )
                self.db.add(post)
                self.db.flush()
                post_id = post.id
                self._insert_tags(post_id, tags)

        feed_logger.info(
            "Post created",
            post_id=post_id,
            author_id=author_id,
            post_type=post_type,
            tags=len(tags),
        )
        return post_id

    def add_tags(self, post_id: int, tags_csv: Optional[str]) -> int:
        """Attach tags to an existing post; returns how many were new."""
        self.require_post(post_id)
        tags = parse_tags(tags_csv)
        with self.storage("tag post", post_id=post_id):
            with transaction(self.db):
                return self._insert_tags(post_id, tags)

    def list_tags(self, post_id: int) -> List[str]:
        with self.storage("list tags", post_id=post_id):
            return list(self.db.execute(
                select(PostTag.tag).where(PostTag.post_id == post_id).order_by(PostTag.tag)
            ).scalars())

    def delete(self, post_id: int, requesting_user_id: int) -> bool:
        """
        Delete a post owned by ``requesting_user_id`` with its tags, likes
        and comments, all or nothing.

        Returns False when the post does not exist or belongs to someone else.
        """
        owned = select(Post.id).where(Post.id == post_id, Post.user_id == requesting_user_id)

        with self.storage("delete post", post_id=post_id, user_id=requesting_user_id):
            with transaction(self.db):
                for model in (Like, Comment, PostTag):
                    self.db.execute(
                        delete(model)
                        .where(model.post_id.in_(owned))
                        .execution_options(synchronize_session=False)
                    )
                result = self.db.execute(
                    delete(Post)
                    .where(Post.id == post_id, Post.user_id == requesting_user_id)
                    .execution_options(synchronize_session=False)
                )
                deleted = result.rowcount == 1

        if deleted:
            feed_logger.info("Post deleted", post_id=post_id, user_id=requesting_user_id)
        else:
            feed_logger.warning("Post not deleted: missing or not owned", post_id=post_id, user_id=requesting_user_id)
        return deleted

    def _insert_tags(self, post_id: int, tags: List[str]) -> int:
        return insert_if_absent(
            self.db,
            PostTag,
            [{"post_id": post_id, "tag": tag} for tag in tags],
            index_elements=["post_id", "tag"],
        )
