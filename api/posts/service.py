"""
Post business logic.

The author of a post is always the authenticated caller. Updates go through
a single `(id, author_id)` filter, so a caller cannot tell a missing post
from one owned by someone else.
"""

from __future__ import annotations

import logging

from core import errors

from . import repository, schemas

logger = logging.getLogger(__name__)


def _to_post_response(row: dict) -> schemas.PostResponse:
    return schemas.PostResponse(
        id=str(row["id"]),
        title=str(row["title"]),
        content=str(row["content"] or ""),
        author_id=str(row["author_id"]),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


async def list_posts() -> list[schemas.PostResponse]:
    rows = await repository.list_posts()
    return [_to_post_response(row) for row in rows]


async def get_post(post_id: str) -> schemas.PostResponse:
    row = await repository.get_post_by_id(post_id)
    if row is None:
        raise errors.PostNotFound()
    return _to_post_response(row)


async def create_post(payload: schemas.CreatePostRequest, *, user_id: str) -> schemas.PostResponse:
    row = await repository.create_post(
        title=payload.title,
        content=payload.content,
        author_id=user_id,
    )
    logger.info("post_created post_id=%s user_id=%s", row["id"], user_id)
    return _to_post_response(row)


async def update_post(payload: schemas.UpdatePostRequest, *, user_id: str) -> schemas.PostResponse:
    row = await repository.update_post(
        post_id=payload.id,
        author_id=user_id,
        title=payload.title,
        content=payload.content,
    )
    if row is None:
        logger.info("post_update_rejected post_id=%s user_id=%s", payload.id, user_id)
        raise errors.NotFoundOrUnauthorized()
    logger.info("post_updated post_id=%s user_id=%s", row["id"], user_id)
    return _to_post_response(row)
