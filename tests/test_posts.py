"""
Tests for feed endpoints.
"""
from unihub.models.interaction import Like
from unihub.services import FeedEngine

from conftest import make_user, headers_for


class TestPostsEndpoints:
    """Test post, like and comment endpoints."""

    def test_create_post(self, client, auth_headers, departments):
        """Test creating a post with tags."""
        response = client.post(
            "/api/posts",
            headers=auth_headers,
            json={
                "content": "Study group for CSE220 tonight",
                "post_type": "discussion",
                "department_id": departments["CSE"],
                "course_code": "CSE220",
                "tags": "study, cse220, study",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        post = data["post"]
        assert post["content"] == "Study group for CSE220 tonight"
        assert post["post_type"] == "discussion"
        assert post["department_code"] == "CSE"
        assert post["username"] == "test_student"
        assert sorted(post["tags"]) == ["cse220", "study"]
        assert post["likes_count"] == 0

    def test_create_post_unauthenticated(self, client):
        """Test creating a post without auth fails."""
        response = client.post("/api/posts", json={"content": "Test content"})
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_create_post_empty_content(self, client, auth_headers):
        response = client.post("/api/posts", headers=auth_headers, json={"content": "   "})
        assert response.status_code == 422
        data = response.json()
        assert data["error_code"] == "VALIDATION_ERROR"
        assert data["details"] == {"field": "content"}

    def test_student_cannot_post_announcement(self, client, auth_headers):
        response = client.post(
            "/api/posts",
            headers=auth_headers,
            json={"content": "Campus closed", "post_type": "announcement"},
        )
        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

    def test_faculty_can_post_announcement(self, client, faculty_headers):
        response = client.post(
            "/api/posts",
            headers=faculty_headers,
            json={"content": "Campus closed", "post_type": "announcement", "priority": "high"},
        )
        assert response.status_code == 200
        post = response.json()["post"]
        assert post["is_announcement"] is True
        assert post["priority"] == "high"

    def test_get_posts_empty(self, client, auth_headers):
        response = client.get("/api/posts", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_feed_filters(self, client, db, test_user, auth_headers, departments):
        """Test department, type and course query parameters."""
        engine = FeedEngine(db)
        cse = engine.posts.create(test_user.id, "cse", department_id=departments["CSE"], course_code="CSE220")
        engine.posts.create(test_user.id, "bba", department_id=departments["BBA"], post_type="event")

        response = client.get(f"/api/posts?department={departments['CSE']}", headers=auth_headers)
        assert [p["id"] for p in response.json()] == [cse]

        response = client.get("/api/posts?type=event", headers=auth_headers)
        assert [p["content"] for p in response.json()] == ["bba"]

        response = client.get("/api/posts?course=CSE220", headers=auth_headers)
        assert [p["id"] for p in response.json()] == [cse]

        response = client.get("/api/posts?type=&course=", headers=auth_headers)
        assert len(response.json()) == 2

        response = client.get("/api/posts?department=&type=&course=", headers=auth_headers)
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_feed_non_numeric_department(self, client, auth_headers):
        response = client.get("/api/posts?department=cse", headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["details"] == {"field": "department"}

        response = client.get(f"/api/posts/department/{departments['BBA']}", headers=auth_headers)
        assert [p["content"] for p in response.json()] == ["bba"]

        response = client.get("/api/posts/course/CSE220", headers=auth_headers)
        assert [p["id"] for p in response.json()] == [cse]

    def test_my_posts(self, client, db, test_user, other_user, auth_headers):
        engine = FeedEngine(db)
        mine = engine.posts.create(test_user.id, "mine")
        theirs = engine.posts.create(other_user.id, "theirs")

        response = client.get("/api/posts/mine", headers=auth_headers)
        assert [p["id"] for p in response.json()] == [mine]

        response = client.get(f"/api/posts/user/{other_user.id}", headers=auth_headers)
        assert [p["id"] for p in response.json()] == [theirs]

    def test_get_post_not_found(self, client, auth_headers):
        response = client.get("/api/posts/99999", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_like_and_unlike(self, client, db, test_user, other_user, auth_headers, other_headers):
        post_id = FeedEngine(db).posts.create(test_user.id, "like me")

        response = client.post(f"/api/posts/{post_id}/like", headers=other_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["likes"] == [{"username": "other_student"}]

        # Liking twice does not duplicate
        response = client.post(f"/api/posts/{post_id}/like", headers=other_headers)
        assert response.json()["likes"] == [{"username": "other_student"}]
        assert db.query(Like).count() == 1

        response = client.post(f"/api/posts/{post_id}/like", headers=auth_headers)
        assert len(response.json()["likes"]) == 2

        response = client.delete(f"/api/posts/{post_id}/like", headers=other_headers)
        assert response.json()["likes"] == [{"username": "test_student"}]

        response = client.get(f"/api/posts/{post_id}/likes", headers=auth_headers)
        assert response.json() == [{"username": "test_student"}]

        response = client.get(f"/api/posts/{post_id}", headers=auth_headers)
        assert response.json()["likes_count"] == 1

    def test_like_missing_post(self, client, auth_headers):
        response = client.post("/api/posts/4242/like", headers=auth_headers)
        assert response.status_code == 404

    def test_comment(self, client, db, test_user, other_headers):
        post_id = FeedEngine(db).posts.create(test_user.id, "discuss")

        response = client.post(
            f"/api/posts/{post_id}/comments",
            headers=other_headers,
            json={"content": "nice"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        comment = data["comment"]
        assert set(comment) == {"id", "user_id", "post_id", "content", "created_at", "username"}
        assert comment["username"] == "other_student"
        assert comment["post_id"] == post_id

        response = client.get(f"/api/posts/{post_id}/comments", headers=other_headers)
        assert [(c["username"], c["content"]) for c in response.json()] == [("other_student", "nice")]

    def test_comment_empty(self, client, db, test_user, auth_headers):
        post_id = FeedEngine(db).posts.create(test_user.id, "discuss")
        response = client.post(f"/api/posts/{post_id}/comments", headers=auth_headers, json={"content": ""})
        assert response.status_code == 422

    def test_delete_post(self, client, db, test_user, other_user, auth_headers):
        """Test deleting a post removes its likes and comments."""
        engine = FeedEngine(db)
        post_id = engine.posts.create(test_user.id, "To be deleted")
        engine.interactions.like(other_user.id, post_id)
        engine.interactions.comment(other_user.id, post_id, "bye")

        response = client.delete(f"/api/posts/{post_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True

        response = client.get(f"/api/posts/{post_id}", headers=auth_headers)
        assert response.status_code == 404
        assert client.get(f"/api/posts/{post_id}/likes", headers=auth_headers).json() == []
        assert client.get(f"/api/posts/{post_id}/comments", headers=auth_headers).json() == []

    def test_delete_post_not_owner(self, client, db, test_user, other_headers, auth_headers):
        """Test that only the author can delete a post."""
        post_id = FeedEngine(db).posts.create(test_user.id, "Not yours")

        response = client.delete(f"/api/posts/{post_id}", headers=other_headers)
        assert response.status_code == 403
        assert response.json()["success"] is False

        response = client.get(f"/api/posts/{post_id}", headers=auth_headers)
        assert response.status_code == 200

    def test_feed_is_shared_across_users(self, client, db):
        """Test that every user sees the whole feed, newest first."""
        user1 = make_user(db, "user1")
        user2 = make_user(db, "user2")
        engine = FeedEngine(db)
        first = engine.posts.create(user1.id, "User 1 post")
        second = engine.posts.create(user2.id, "User 2 post")

        for user in (user1, user2):
            response = client.get("/api/posts", headers=headers_for(user))
            assert [p["id"] for p in response.json()] == [second, first]
