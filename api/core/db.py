"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI opens it in the lifespan hook
and closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...

Repository functions are wrapped with `store_call` so that any unexpected
driver failure surfaces as `errors.InternalError`.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import errors, settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    # asyncpg rejects libpq's sslmode query parameter.
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))


def database_url() -> str:
    return _sanitize_database_url(settings.database_url())


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=settings.db_pool_min_size(),
        max_size=settings.db_pool_max_size(),
        command_timeout=settings.db_command_timeout_s(),
    )
    logger.info("db_pool_ready max_size=%s", settings.db_pool_max_size())


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool().fetchrow(sql, *args)
    return dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    rows = await pool().fetch(sql, *args)
    return [dict(r) for r in rows]


def store_call(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
    """
    Translate unexpected store failures into `errors.InternalError`.

    `ApiError`s raised inside the wrapped function pass through unchanged.
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except errors.ApiError:
            raise
        except Exception as exc:
            logger.exception("store_call_failed op=%s", func.__qualname__)
            raise errors.InternalError() from exc

    return wrapper
