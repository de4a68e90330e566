"""User registration, role and profile endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Response

from access_guard import Identity, require_identity
from brainshare_repo import Profile, User, UserRegistration, get_profile, get_role, register_user
from resource_query import NotFoundError, ResourceQueryEngine

from .config import settings
from .deps import get_engine

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/{email}", response_model=User)
async def save_user(
    email: str,
    response: Response,
    payload: Optional[UserRegistration] = Body(default=None),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    """Register the user on first contact, otherwise return the stored record."""

    user, created = await register_user(engine, email, payload)
    response.status_code = 201 if created else 200
    return user


@router.get("/role/{email}")
async def read_role(
    email: str,
    identity: Identity = Depends(require_identity),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    role = await get_role(engine, email)
    if role is None:
        raise NotFoundError("User not found")
    return {"role": role}


@router.get("/profile/{email}", response_model=Profile, response_model_exclude_none=True)
async def read_profile(
    email: str,
    identity: Identity = Depends(require_identity),
    engine: ResourceQueryEngine = Depends(get_engine),
):
    profile = await get_profile(engine, email, settings.profile_recent_posts)
    if profile is None:
        raise NotFoundError("User not found")
    return profile
