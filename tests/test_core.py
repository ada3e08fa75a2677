"""
Tests for shared plumbing: settings, store error translation and the error
envelope.
"""

import asyncio

import asyncpg
import pytest

from auth import repository as auth_repository
from core import db, errors, settings
from posts import repository as posts_repository


def test_required_settings_fail_fast(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@localhost/blog")
    settings.require_startup_settings()

    monkeypatch.delenv("DATABASE_URL")
    with pytest.raises(settings.SettingsError, match="DATABASE_URL"):
        settings.require_startup_settings()


def test_bad_integer_settings_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_MIN", "soon")
    monkeypatch.setenv("BCRYPT_ROUNDS", "99")
    assert settings.access_token_expire_minutes() == 60
    assert settings.bcrypt_rounds() == 31


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://blog.example.org, https://admin.example.org")
    assert settings.cors_origins() == ["https://blog.example.org", "https://admin.example.org"]


def test_database_url_drops_sslmode(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/blog?sslmode=require&application_name=api")
    assert db.database_url() == "postgresql://u:p@db/blog?application_name=api"


def test_store_failure_becomes_internal_error(monkeypatch):
    async def broken(*_args):
        raise ConnectionError("db host unreachable")

    monkeypatch.setattr(db, "fetch_one", broken)

    with pytest.raises(errors.InternalError) as exc_info:
        asyncio.run(posts_repository.get_post_by_id("p1"))
    assert exc_info.value.message == "Internal Server Error"
    assert isinstance(exc_info.value.__cause__, ConnectionError)


def test_unique_violation_becomes_duplicate_email(monkeypatch):
    async def conflict(*_args):
        raise asyncpg.UniqueViolationError("duplicate key value violates unique constraint")

    monkeypatch.setattr(db, "fetch_one", conflict)

    with pytest.raises(errors.DuplicateEmail):
        asyncio.run(auth_repository.create_user(email="a@x.com", password_hash="h", name="Ann"))


def test_update_post_filters_on_id_and_author(monkeypatch):
    seen = {}

    async def capture(sql, *args):
        seen["sql"] = " ".join(sql.split())
        seen["args"] = args
        return None

    monkeypatch.setattr(db, "fetch_one", capture)

    result = asyncio.run(
        posts_repository.update_post(post_id="p1", author_id="u1", title="Hello", content="")
    )

    assert result is None
    assert "WHERE id = $1 AND author_id = $2" in seen["sql"]
    assert seen["args"] == ("p1", "u1", "Hello", "")


def test_store_errors_render_without_internals(client, signup, monkeypatch):
    _, headers = signup()

    async def broken():
        raise errors.InternalError()

    monkeypatch.setattr(posts_repository, "list_posts", broken)
    resp = client.get("/posts", headers=headers)

    assert resp.status_code == 500
    assert resp.json() == {"success": False, "error": "Internal Server Error"}


def test_unknown_route_uses_envelope(client):
    resp = client.get("/nowhere")
    assert resp.status_code == 404
    assert resp.json() == {"success": False, "error": "Not Found"}


def test_wrong_method_uses_envelope(client):
    resp = client.delete("/posts")
    assert resp.status_code == 405
    assert resp.json()["success"] is False


def test_root_and_health(client):
    assert client.get("/").json() == {"success": True, "message": "Welcome to the API"}
    assert client.get("/health").json() == {"status": "ok"}


def test_get_user_by_id_queries_by_id(monkeypatch):
    seen = {}

    async def capture(sql, *args):
        seen["sql"] = " ".join(sql.split())
        seen["args"] = args
        return None

    monkeypatch.setattr(db, "fetch_one", capture)

    assert asyncio.run(auth_repository.get_user_by_id("u1")) is None
    assert "WHERE id = $1" in seen["sql"]
    assert seen["args"] == ("u1",)
