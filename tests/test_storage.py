"""
Tests for storage primitives, roles and error handling.
"""
import pytest
from sqlalchemy.exc import OperationalError

from unihub.database import insert_if_absent, transaction
from unihub.exceptions import NotAuthorized, StorageError, ValidationError
from unihub.models.post import Post, PostTag
from unihub.permissions import Capability, Role, has_capability, parse_role, require_capability
from unihub.services import FeedEngine

from conftest import make_user


class TestInsertIfAbsent:
    """Test the atomic insert-if-absent primitive."""

    def test_skips_existing_rows(self, db):
        user = make_user(db, "tagger")
        post = Post(user_id=user.id, content="x")
        db.add(post)
        db.commit()

        assert insert_if_absent(db, PostTag, {"post_id": post.id, "tag": "a"}, ["post_id", "tag"]) == 1
        assert insert_if_absent(db, PostTag, [
            {"post_id": post.id, "tag": "a"},
            {"post_id": post.id, "tag": "b"},
        ], ["post_id", "tag"]) == 1
        db.commit()
        assert db.query(PostTag).count() == 2

    def test_empty_rows(self, db):
        assert insert_if_absent(db, PostTag, [], ["post_id", "tag"]) == 0


class TestTransaction:
    """Test commit-or-rollback scoping."""

    def test_rolls_back_on_error(self, db):
        user = make_user(db, "writer")
        with pytest.raises(RuntimeError):
            with transaction(db):
                db.add(Post(user_id=user.id, content="never saved"))
                db.flush()
                raise RuntimeError("boom")
        assert db.query(Post).count() == 0

    def test_commits_on_success(self, db):
        user = make_user(db, "writer")
        with transaction(db):
            db.add(Post(user_id=user.id, content="saved"))
        assert db.query(Post).count() == 1


class TestStorageErrors:
    """Test database failures surface as StorageError."""

    def test_feed_failure(self, db, monkeypatch):
        engine = FeedEngine(db)

        def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        monkeypatch.setattr(db, "execute", broken)
        with pytest.raises(StorageError):
            engine.feed.list()


class TestRoles:
    """Test the role capability table."""

    def test_student_has_no_privileges(self):
        for capability in Capability:
            assert not has_capability(Role.STUDENT, capability)

    @pytest.mark.parametrize("role", ["faculty", "staff"])
    def test_faculty_and_staff_privileged(self, role):
        for capability in Capability:
            assert has_capability(role, capability)

    def test_unknown_role_has_nothing(self):
        assert not has_capability("dean", Capability.MANAGE_CALENDAR)
        assert not has_capability(None, Capability.MANAGE_CALENDAR)

    def test_require_capability_raises(self):
        with pytest.raises(NotAuthorized):
            require_capability("student", Capability.POST_ANNOUNCEMENT)
        require_capability(Role.STAFF, Capability.POST_ANNOUNCEMENT)

    def test_parse_role(self):
        assert parse_role(None) is Role.STUDENT
        assert parse_role("faculty") is Role.FACULTY
        with pytest.raises(ValidationError):
            parse_role("dean")
