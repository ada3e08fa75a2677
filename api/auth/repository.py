"""
User persistence helpers.
"""

from __future__ import annotations

import asyncpg

from core import db, errors

USER_COLUMNS = "id, email, password_hash, name, created_at"


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@db.store_call
async def create_user(*, email: str, password_hash: str, name: str) -> dict:
    try:
        row = await db.fetch_one(
            f"""
            INSERT INTO users (email, password_hash, name)
            VALUES ($1, $2, $3)
            RETURNING {USER_COLUMNS}
            """,
            normalize_email(email),
            password_hash,
            name,
        )
    except asyncpg.UniqueViolationError as exc:
        # Lost a signup race on the same email.
        raise errors.DuplicateEmail() from exc
    if row is None:
        raise RuntimeError("Failed to create user.")
    return row


@db.store_call
async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE email = $1
        """,
        normalize_email(email),
    )



@db.store_call
async def get_user_by_id(user_id: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {USER_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )
