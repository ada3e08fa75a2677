"""
Shared pytest fixtures.

The asyncpg-backed repositories are replaced by `InMemoryStore`, patched over
the repository module functions, so the API can be exercised with FastAPI's
TestClient without a database.
"""

import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from auth import repository as auth_repository
from core import errors
from posts import repository as posts_repository

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256-signing"


class InMemoryStore:
    """Dict-backed stand-in for the users/posts tables."""

    def __init__(self):
        self.users = {}
        self.posts = {}
        self.calls = []

    async def create_user(self, *, email, password_hash, name):
        self.calls.append("create_user")
        email = auth_repository.normalize_email(email)
        if any(u["email"] == email for u in self.users.values()):
            raise errors.DuplicateEmail()
        row = {
            "id": str(uuid.uuid4()),
            "email": email,
            "password_hash": password_hash,
            "name": name,
            "created_at": datetime.now(timezone.utc),
        }
        self.users[row["id"]] = row
        return dict(row)

    async def get_user_by_email(self, email):
        self.calls.append("get_user_by_email")
        email = auth_repository.normalize_email(email)
        for row in self.users.values():
            if row["email"] == email:
                return dict(row)
        return None

    async def get_user_by_id(self, user_id):
        # Not recorded in `calls`: the auth gate runs it on every request.
        row = self.users.get(user_id)
        return dict(row) if row is not None else None

    async def create_post(self, *, title, content, author_id):
        self.calls.append("create_post")
        now = datetime.now(timezone.utc)
        row = {
            "id": str(uuid.uuid4()),
            "title": title,
            "content": content,
            "author_id": author_id,
            "created_at": now,
            "updated_at": now,
        }
        self.posts[row["id"]] = row
        return dict(row)

    async def list_posts(self):
        self.calls.append("list_posts")
        return [dict(row) for row in self.posts.values()]

    async def get_post_by_id(self, post_id):
        self.calls.append("get_post_by_id")
        row = self.posts.get(post_id)
        return dict(row) if row is not None else None

    async def update_post(self, *, post_id, author_id, title, content):
        self.calls.append("update_post")
        row = self.posts.get(post_id)
        if row is None or row["author_id"] != author_id:
            return None
        row.update(title=title, content=content, updated_at=datetime.now(timezone.utc))
        return dict(row)


@pytest.fixture(autouse=True)
def auth_env(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("JWT_ALG", "HS256")
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")
    monkeypatch.delenv("ACCESS_TOKEN_EXPIRE_MIN", raising=False)


@pytest.fixture
def store(monkeypatch):
    fake = InMemoryStore()
    monkeypatch.setattr(auth_repository, "create_user", fake.create_user)
    monkeypatch.setattr(auth_repository, "get_user_by_email", fake.get_user_by_email)
    monkeypatch.setattr(auth_repository, "get_user_by_id", fake.get_user_by_id)
    monkeypatch.setattr(posts_repository, "create_post", fake.create_post)
    monkeypatch.setattr(posts_repository, "list_posts", fake.list_posts)
    monkeypatch.setattr(posts_repository, "get_post_by_id", fake.get_post_by_id)
    monkeypatch.setattr(posts_repository, "update_post", fake.update_post)
    return fake


@pytest.fixture
def client(store):
    from main import create_app

    # No context manager: the lifespan (DB pool) is not started.
    return TestClient(create_app())


@pytest.fixture
def signup(client):
    """Register a user and return (token, auth headers)."""

    def _signup(email="a@x.com", password="secret1", name="Ann"):
        resp = client.post("/signup", json={"email": email, "password": password, "name": name})
        assert resp.status_code == 201, resp.text
        token = resp.json()["token"]
        return token, {"Authorization": f"Bearer {token}"}

    return _signup
