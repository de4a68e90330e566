"""Signed session credentials (JWT) and how requests carry them."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from loguru import logger
from starlette.requests import Request

from .config import CARRIERS


class CredentialVerifier:
    """Issue and verify HMAC-signed tokens carrying the holder's email."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=365),
    ) -> None:
        if not secret:
            raise ValueError("credential secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    def issue(self, email: str, name: Optional[str] = None) -> str:
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "email": email,
            "iat": now,
            "exp": now + self._ttl,
        }
        if name:
            payload["name"] = name
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[dict[str, Any]]:
        """Return the decoded payload, or ``None`` if the token is unusable."""

        try:
            return jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired credential")
        except jwt.InvalidTokenError as exc:
            logger.info("Rejected invalid credential: {error}", error=exc)
        return None


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("authorization")
    if not header:
        return None
    scheme, _, value = header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


def credential_candidates(
    request: Request,
    *,
    carrier: str = "any",
    cookie_name: str = "token",
) -> list[str]:
    """Raw tokens the request carries, cookie before bearer header.

    With carrier ``any`` both may be present; callers try them in order so a
    stale cookie does not shadow a valid header.
    """

    if carrier not in CARRIERS:
        raise ValueError(f"unknown credential carrier {carrier!r}")
    candidates: list[str] = []
    if carrier in ("cookie", "any"):
        token = request.cookies.get(cookie_name)
        if token:
            candidates.append(token)
    if carrier in ("header", "any"):
        token = _bearer_token(request)
        if token:
            candidates.append(token)
    return candidates


def extract_credential(
    request: Request,
    *,
    carrier: str = "any",
    cookie_name: str = "token",
) -> Optional[str]:
    """Pull the first raw token from the cookie, the bearer header, or either."""

    candidates = credential_candidates(request, carrier=carrier, cookie_name=cookie_name)
    return candidates[0] if candidates else None
