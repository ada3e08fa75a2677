"""
Auth security helpers: access-token codec and password hashing.
"""

from __future__ import annotations

import base64
import hashlib
import logging
import time

import bcrypt
import jwt

from core import settings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


class AuthSecurityError(RuntimeError):
    pass


def now_epoch_s() -> int:
    return int(time.time())


def _password_bytes(plain_password: str) -> bytes:
    # bcrypt only reads 72 bytes, so the password is reduced to a fixed-size
    # digest first. base64 keeps NUL bytes out of the bcrypt input.
    raw = (plain_password or "").encode("utf-8")
    if not raw:
        return b""
    return base64.b64encode(hashlib.sha256(raw).digest())


def hash_password(plain_password: str) -> str:
    password = _password_bytes(plain_password)
    if not password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=settings.bcrypt_rounds())).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = _password_bytes(plain_password)
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def issue_access_token(identity: str) -> str:
    subject = str(identity or "").strip()
    if not subject:
        raise AuthSecurityError("Token subject is empty.")

    issued_at = now_epoch_s()
    payload = {
        "sub": subject,
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + settings.access_token_expire_minutes() * 60,
    }
    return jwt.encode(payload, settings.jwt_secret(), algorithm=settings.jwt_algorithm())


def verify_access_token(token: str) -> str:
    """
    Return the identity bound to `token`.

    Malformed, badly signed, expired and wrong-type tokens all raise the same
    `AuthSecurityError`; the specific reason only goes to the debug log.
    """
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(
            raw,
            settings.jwt_secret(),
            algorithms=[settings.jwt_algorithm()],
            options={"require": ["exp", "sub"]},
        )
    except jwt.InvalidTokenError as exc:
        logger.debug("access_token_rejected reason=%s", type(exc).__name__)
        raise AuthSecurityError("Invalid access token.") from exc

    if str(payload.get("type") or "").strip().lower() != ACCESS_TOKEN_TYPE:
        logger.debug("access_token_rejected reason=WrongType")
        raise AuthSecurityError("Invalid access token.")

    subject = str(payload.get("sub") or "").strip()
    if not subject:
        raise AuthSecurityError("Invalid access token.")
    return subject
