"""
Post persistence (raw SQL).
"""

from __future__ import annotations

from core import db

POST_COLUMNS = "id, title, content, author_id, created_at, updated_at"


@db.store_call
async def create_post(*, title: str, content: str, author_id: str) -> dict:
    row = await db.fetch_one(
        f"""
        INSERT INTO posts (title, content, author_id)
        VALUES ($1, $2, $3)
        RETURNING {POST_COLUMNS}
        """,
        title,
        content,
        author_id,
    )
    if row is None:
        raise RuntimeError("Failed to create post.")
    return row


@db.store_call
async def list_posts() -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {POST_COLUMNS}
        FROM posts
        ORDER BY created_at DESC, id
        """
    )


@db.store_call
async def get_post_by_id(post_id: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {POST_COLUMNS}
        FROM posts
        WHERE id = $1
        """,
        post_id,
    )


@db.store_call
async def update_post(*, post_id: str, author_id: str, title: str, content: str) -> dict | None:
    """
    Update a post only if it exists and belongs to `author_id`.

    One statement, so ownership is checked and applied atomically. Returns
    None when nothing matched, without saying which condition failed.
    """
    return await db.fetch_one(
        f"""
        UPDATE posts
        SET title = $3,
            content = $4,
            updated_at = now()
        WHERE id = $1
          AND author_id = $2
        RETURNING {POST_COLUMNS}
        """,
        post_id,
        author_id,
        title,
        content,
    )
