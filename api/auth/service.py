"""
Auth business logic: signup and login.
"""

from __future__ import annotations

import asyncio
import logging

from core import errors

from . import repository, schemas, security

logger = logging.getLogger(__name__)


def _issue_for(user_row: dict) -> str:
    try:
        return security.issue_access_token(str(user_row["id"]))
    except Exception as exc:
        logger.exception("token_issue_failed")
        raise errors.InternalError() from exc


async def signup(payload: schemas.SignupRequest) -> str:
    existing = await repository.get_user_by_email(payload.email)
    if existing is not None:
        raise errors.DuplicateEmail()

    # bcrypt is CPU-bound; keep it off the event loop.
    password_hash = await asyncio.to_thread(security.hash_password, payload.password)
    user_row = await repository.create_user(
        email=payload.email,
        password_hash=password_hash,
        name=payload.name,
    )
    logger.info("signup_ok user_id=%s", user_row["id"])
    return _issue_for(user_row)


async def login(payload: schemas.LoginRequest) -> str:
    user_row = await repository.get_user_by_email(payload.email)
    # Unknown email and wrong password are indistinguishable to the caller.
    if user_row is None or not await asyncio.to_thread(
        security.verify_password, payload.password, str(user_row.get("password_hash") or "")
    ):
        logger.info("login_rejected")
        raise errors.InvalidCredentials()

    logger.info("login_ok user_id=%s", user_row["id"])
    return _issue_for(user_row)
