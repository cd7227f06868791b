"""
Tests for authentication endpoints.
"""
from unihub.auth import create_access_token, create_tokens


class TestAuthEndpoints:
    """Test auth endpoints."""

    def test_register_user(self, client, departments):
        """Test user registration."""
        response = client.post(
            "/api/auth/register",
            json={
                "username": "newuser",
                "email": "newuser@university.edu",
                "password": "securepassword123",
                "department_id": departments["EEE"],
                "student_id": "2023-1-80-010",
                "year_of_study": 1,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "newuser"
        assert data["role"] == "student"
        assert data["department_id"] == departments["EEE"]
        assert "id" in data
        assert "hashed_password" not in data

    def test_register_faculty_role(self, client):
        response = client.post(
            "/api/auth/register",
            json={"username": "prof", "email": "prof@university.edu", "password": "pw12345678", "role": "faculty"},
        )
        assert response.status_code == 200
        assert response.json()["role"] == "faculty"

    def test_register_unknown_role(self, client):
        response = client.post(
            "/api/auth/register",
            json={"username": "x", "email": "x@university.edu", "password": "pw12345678", "role": "dean"},
        )
        assert response.status_code == 422

    def test_register_username_too_long(self, client):
        response = client.post(
            "/api/auth/register",
            json={"username": "u" * 51, "email": "long@university.edu", "password": "pw12345678"},
        )
        assert response.status_code == 422
        assert response.json()["success"] is False

    def test_register_duplicate_email(self, client, test_user):
        """Test registration with existing email fails."""
        response = client.post(
            "/api/auth/register",
            json={
                "username": "someone_else",
                "email": test_user.email,
                "password": "anotherpassword",
            },
        )
        assert response.status_code == 400
        assert "already registered" in response.json()["error"]

    def test_register_duplicate_username(self, client, test_user):
        response = client.post(
            "/api/auth/register",
            json={
                "username": test_user.username,
                "email": "fresh@university.edu",
                "password": "anotherpassword",
            },
        )
        assert response.status_code == 400

    def test_login_success(self, client, test_user):
        """Test successful login."""
        response = client.post(
            "/api/auth/login/json",
            json={"email": test_user.email, "password": "testpassword123"},
        )
        assert response.status_code == 200
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"

    def test_login_form(self, client, test_user):
        response = client.post(
            "/api/auth/login",
            data={"username": test_user.email, "password": "testpassword123"},
        )
        assert response.status_code == 200
        assert "access_token" in response.json()

    def test_login_wrong_password(self, client, test_user):
        """Test login with wrong password fails."""
        response = client.post(
            "/api/auth/login/json",
            json={"email": test_user.email, "password": "wrongpassword"},
        )
        assert response.status_code == 401

    def test_login_inactive_user(self, client, db, test_user):
        test_user.is_active = False
        db.commit()
        response = client.post(
            "/api/auth/login/json",
            json={"email": test_user.email, "password": "testpassword123"},
        )
        assert response.status_code == 401

    def test_get_me(self, client, test_user, auth_headers):
        """Test getting current user."""
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["username"] == test_user.username

    def test_get_me_unauthenticated(self, client):
        response = client.get("/api/auth/me")
        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_refresh_token_rejected_as_access(self, client, test_user):
        _, refresh_token = create_tokens(test_user.id)
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {refresh_token}"})
        assert response.status_code == 401

    def test_refresh(self, client, test_user):
        _, refresh_token = create_tokens(test_user.id)
        response = client.post("/api/auth/refresh", json={"refresh_token": refresh_token})
        assert response.status_code == 200
        assert "access_token" in response.json()

    def test_refresh_with_access_token_fails(self, client, test_user):
        access_token = create_access_token({"sub": str(test_user.id)})
        response = client.post("/api/auth/refresh", json={"refresh_token": access_token})
        assert response.status_code == 401

    def test_update_profile(self, client, auth_headers, departments):
        response = client.patch(
            "/api/auth/me",
            headers=auth_headers,
            json={"bio": "Second year CSE", "department_id": departments["CSE"], "year_of_study": 2},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["bio"] == "Second year CSE"
        assert data["department_id"] == departments["CSE"]
        assert data["year_of_study"] == 2

    def test_update_profile_unknown_department(self, client, auth_headers):
        response = client.patch("/api/auth/me", headers=auth_headers, json={"department_id": 9999})
        assert response.status_code == 400
