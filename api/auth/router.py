"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core import validation

from . import schemas, service

router = APIRouter()


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    payload: schemas.SignupRequest = Depends(validation.payload(schemas.SignupRequest)),
) -> dict:
    token = await service.signup(payload)
    return {"success": True, "token": token}


@router.post("/login")
async def login(
    payload: schemas.LoginRequest = Depends(validation.payload(schemas.LoginRequest)),
) -> dict:
    token = await service.login(payload)
    return {"success": True, "token": token}
