"""
Auth gate for protected FastAPI routes.

`get_current_user_id` runs before the handler body. It either returns the
acting user's id, which the handler takes as an explicit argument, or
short-circuits the request with `Unauthorized` / `InternalError`.
"""

from __future__ import annotations

import logging

from fastapi import Header

from core import errors

from . import repository, security

logger = logging.getLogger(__name__)


def _extract_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise errors.Unauthorized()

    # Accept both "Bearer <token>" and a bare token.
    parts = raw.split(None, 1)
    if len(parts) == 2 and parts[0].lower() == "bearer":
        raw = parts[1].strip()
    elif len(parts) != 1:
        raise errors.Unauthorized()
    if not raw:
        raise errors.Unauthorized()
    return raw


async def get_current_user_id(authorization: str | None = Header(default=None)) -> str:
    try:
        token = _extract_token(authorization)
        user_id = security.verify_access_token(token)
        # A validly signed token for an unknown user is still rejected.
        if await repository.get_user_by_id(user_id) is None:
            raise errors.Unauthorized()
        return user_id
    except errors.ApiError:
        raise
    except security.AuthSecurityError as exc:
        raise errors.Unauthorized() from exc
    except Exception as exc:
        logger.exception("auth_gate_failed")
        raise errors.InternalError() from exc
