"""
Post API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CreatePostRequest(BaseModel):
    title: str = Field(..., min_length=3)
    content: str


class UpdatePostRequest(BaseModel):
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=3)
    content: str


class PostResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    content: str
    author_id: str = Field(..., alias="authorId")
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
