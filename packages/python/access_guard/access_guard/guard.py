"""Authentication and role authorization as two explicit, composable checks."""

from __future__ import annotations

from enum import Enum
from typing import Awaitable, Callable, Optional

from loguru import logger
from pydantic import BaseModel

from .credentials import CredentialVerifier


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


class Identity(BaseModel):
    """The verified holder of a credential."""

    email: str
    name: Optional[str] = None


RoleLookup = Callable[[str], Awaitable[Optional[str]]]


class AccessGuard:
    """Decide whether a request may proceed.

    ``authenticate`` only inspects the credential. ``authorize`` reads the
    caller's stored role through ``role_lookup`` and must be given an identity
    that ``authenticate`` produced.
    """

    def __init__(self, verifier: CredentialVerifier, role_lookup: RoleLookup) -> None:
        self._verifier = verifier
        self._role_lookup = role_lookup

    def authenticate(self, credential: Optional[str]) -> Optional[Identity]:
        if not credential:
            return None
        payload = self._verifier.verify(credential)
        if payload is None:
            return None
        email = payload.get("email")
        if not isinstance(email, str) or not email:
            logger.info("Credential payload has no email claim")
            return None
        return Identity(email=email, name=payload.get("name"))

    async def authorize(self, identity: Identity, required_role: Role | str) -> bool:
        required = Role(required_role).value
        role = await self._role_lookup(identity.email)
        if role is None:
            logger.info("Denied {email}: no stored user record", email=identity.email)
            return False
        if role != required:
            logger.info(
                "Denied {email}: role {role} does not satisfy {required}",
                email=identity.email,
                role=role,
                required=required,
            )
            return False
        return True
