"""
Request payload validation.

Handlers never read the raw body. They depend on `payload(Schema)`, which
accepts a JSON object or form data, validates it against a pydantic model
and raises `errors.ValidationFailed` on any problem.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from . import errors

SchemaT = TypeVar("SchemaT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def failed_fields(exc: ValidationError) -> list[str]:
    return sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})


def validate(schema: type[SchemaT], raw: Mapping[str, Any]) -> SchemaT:
    """
    Check `raw` against `schema`. Pure and synchronous.
    """
    if not isinstance(raw, Mapping):
        raise errors.ValidationFailed()
    try:
        return schema.model_validate(dict(raw))
    except ValidationError as exc:
        raise errors.ValidationFailed(failed_fields(exc)) from exc


async def read_payload(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        # Uploaded files are not part of any schema.
        return {key: value for key, value in form.items() if isinstance(value, str)}

    try:
        data = await request.json()
    except ValueError as exc:
        raise errors.ValidationFailed() from exc
    if not isinstance(data, dict):
        raise errors.ValidationFailed()
    return data


def payload(schema: type[SchemaT]) -> Callable[..., Awaitable[SchemaT]]:
    async def dependency(raw: dict[str, Any] = Depends(read_payload)) -> SchemaT:
        return validate(schema, raw)

    return dependency
