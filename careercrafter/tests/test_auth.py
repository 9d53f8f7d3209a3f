"""Tests for /api/auth: register, login, current user and token refresh"""


def test_register_returns_token_and_user(client):
    r = client.post(
        "/api/auth/register",
        json={"first_name": "Ada", "last_name": "Lovelace", "email": "Ada@Example.com", "password": "secret123"},
    )
    assert r.status_code == 201
    data = r.json()
    assert data["access_token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "ada@example.com"
    assert data["message"] == "User registered successfully"


def test_register_duplicate_email_is_rejected(client, test_user):
    r = client.post(
        "/api/auth/register",
        json={"first_name": "Dup", "last_name": "User", "email": test_user.email, "password": "secret123"},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Email already registered"


def test_register_short_password_is_422(client):
    r = client.post(
        "/api/auth/register",
        json={"first_name": "A", "last_name": "B", "email": "ab@example.com", "password": "123"},
    )
    assert r.status_code == 422


def test_login_success(client, test_user):
    r = client.post("/api/auth/login", json={"email": "test@example.com", "password": "testpass123"})
    assert r.status_code == 200
    assert r.json()["user"]["id"] == test_user.id


def test_login_wrong_password(client, test_user):
    r = client.post("/api/auth/login", json={"email": "test@example.com", "password": "nope-nope"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid email or password"


def test_token_from_register_authenticates(client):
    """Registering logs the user in: the returned token works on protected routes."""
    r = client.post(
        "/api/auth/register",
        json={"first_name": "New", "last_name": "Person", "email": "new@example.com", "password": "secret123"},
    )
    token = r.json()["access_token"]
    me = client.get("/api/auth/user", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "new@example.com"


def test_current_user_requires_auth(client):
    r = client.get("/api/auth/user")
    assert r.status_code == 401


def test_current_user_rejects_garbage_token(client):
    r = client.get("/api/auth/user", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_refresh_issues_new_token(client, auth_headers, test_user):
    r = client.post("/api/auth/refresh", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["access_token"]
    assert r.json()["user"]["id"] == test_user.id


def test_refresh_without_token(client):
    r = client.post("/api/auth/refresh")
    assert r.status_code == 401
