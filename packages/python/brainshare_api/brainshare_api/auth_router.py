"""Issue and clear the session credential cookie."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from access_guard import CredentialVerifier, get_verifier
from access_guard import settings as guard_settings

from .config import settings

router = APIRouter(tags=["auth"])


class CredentialRequest(BaseModel):
    email: str
    name: Optional[str] = None


def _cookie_options() -> dict:
    production = settings.production
    return {
        "httponly": True,
        "secure": production,
        "samesite": "none" if production else "strict",
    }


@router.post("/jwt")
async def issue_credential(
    payload: CredentialRequest,
    response: Response,
    verifier: CredentialVerifier = Depends(get_verifier),
):
    """Sign a credential for the caller and store it in the session cookie."""

    token = verifier.issue(payload.email, payload.name)
    response.set_cookie(guard_settings.cookie_name, token, **_cookie_options())
    return {"success": True, "token": token}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(guard_settings.cookie_name, **_cookie_options())
    return {"success": True}
