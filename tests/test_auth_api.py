from conftest import register_and_login


def test_root_and_health(client):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/").json()["message"] == "NewsPlus API"
    assert client.get("/api/health/z").json() == {"ok": True}


class TestRegister:
    def test_success(self, client):
        r = client.post(
            "/api/auth/register",
            json={"username": "ann", "email": "Ann@Example.com", "password": "secret123"},
        )
        assert r.status_code == 201
        assert r.json() == {"message": "User registered successfully"}

    def test_missing_fields(self, client):
        r = client.post("/api/auth/register", json={"username": "ann", "email": "a@b.com"})
        assert r.status_code == 400
        assert r.json() == {"message": "Missing required fields"}

    def test_short_password(self, client):
        r = client.post("/api/auth/register", json={"username": "ann", "email": "a@b.com", "password": "12345"})
        assert r.status_code == 400
        assert r.json()["message"] == "Password must be at least 6 characters"

    def test_duplicate_email_or_username(self, client):
        body = {"username": "ann", "email": "a@b.com", "password": "secret123"}
        assert client.post("/api/auth/register", json=body).status_code == 201

        r = client.post("/api/auth/register", json={**body, "username": "other"})
        assert r.status_code == 409
        assert r.json()["message"] == "User with this email or username already exists"

        r = client.post("/api/auth/register", json={**body, "email": "other@b.com"})
        assert r.status_code == 409


class TestLogin:
    def test_token_and_me(self, client):
        headers = register_and_login(client, username="ann", email="a@b.com")
        r = client.get("/api/auth/me", headers=headers)
        assert r.status_code == 200
        assert r.json()["username"] == "ann"
        assert r.json()["email"] == "a@b.com"

    def test_email_is_case_insensitive(self, client):
        client.post("/api/auth/register", json={"username": "ann", "email": "A@B.com", "password": "secret123"})
        r = client.post("/api/auth/login", json={"email": "a@b.COM", "password": "secret123"})
        assert r.status_code == 200
        assert r.json()["token_type"] == "bearer"

    def test_wrong_password(self, client):
        client.post("/api/auth/register", json={"username": "ann", "email": "a@b.com", "password": "secret123"})
        r = client.post("/api/auth/login", json={"email": "a@b.com", "password": "wrong-pass"})
        assert r.status_code == 401
        assert r.json() == {"message": "Invalid email or password"}

    def test_logout_revokes_token(self, client):
        headers = register_and_login(client)
        r = client.post("/api/auth/logout", headers=headers)
        assert r.status_code == 200
        assert r.json() == {"message": "Logged out successfully"}
        assert client.get("/api/auth/me", headers=headers).status_code == 401


class TestUnauthorized:
    def test_missing_token(self, client):
        for path in ("/api/bookmarks", "/api/likes", "/api/history", "/api/news", "/api/dashboard"):
            r = client.get(path)
            assert r.status_code == 401, path
            assert r.json() == {"message": "Unauthorized"}

    def test_garbage_token(self, client):
        r = client.get("/api/history", headers={"Authorization": "Bearer not-a-jwt"})
        assert r.status_code == 401

    def test_categories_are_public(self, client):
        r = client.get("/api/news/categories")
        assert r.status_code == 200
        assert {"name": "Technology", "slug": "technology"} in r.json()
