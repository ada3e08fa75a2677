"""
Post API endpoints. Every route here sits behind the auth gate.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies
from core import validation

from . import schemas, service

router = APIRouter(prefix="/posts")


def _dump(post: schemas.PostResponse) -> dict:
    return post.model_dump(mode="json", by_alias=True)


@router.get("")
async def list_posts(
    _: str = Depends(auth_dependencies.get_current_user_id),
) -> dict:
    posts = await service.list_posts()
    return {"success": True, "posts": [_dump(post) for post in posts]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    user_id: str = Depends(auth_dependencies.get_current_user_id),
    payload: schemas.CreatePostRequest = Depends(validation.payload(schemas.CreatePostRequest)),
) -> dict:
    post = await service.create_post(payload, user_id=user_id)
    return {"success": True, "post": _dump(post)}


@router.put("")
async def update_post(
    user_id: str = Depends(auth_dependencies.get_current_user_id),
    payload: schemas.UpdatePostRequest = Depends(validation.payload(schemas.UpdatePostRequest)),
) -> dict:
    post = await service.update_post(payload, user_id=user_id)
    return {"success": True, "post": _dump(post)}


@router.get("/{post_id}")
async def get_post(
    post_id: str,
    _: str = Depends(auth_dependencies.get_current_user_id),
) -> dict:
    post = await service.get_post(post_id)
    return {"success": True, "post": _dump(post)}
