from __future__ import annotations

from typing import Callable

from fastapi import Depends, HTTPException, Request

from .config import settings
from .credentials import CredentialVerifier, credential_candidates
from .guard import AccessGuard, Identity, Role


def get_guard(request: Request) -> AccessGuard:
    """Return the process-wide guard stored on the application state.

    Applications set ``app.state.access_guard`` at startup; tests may instead
    override this dependency.
    """

    guard = getattr(request.app.state, "access_guard", None)
    if guard is None:
        raise RuntimeError("access guard is not configured on the application")
    return guard


def get_verifier(request: Request) -> CredentialVerifier:
    verifier = getattr(request.app.state, "credential_verifier", None)
    if verifier is None:
        raise RuntimeError("credential verifier is not configured on the application")
    return verifier


async def require_identity(
    request: Request,
    guard: AccessGuard = Depends(get_guard),
) -> Identity:
    """Authenticate the request or raise 401."""

    cached = getattr(request.state, "identity", None)
    if cached is not None:
        return cached

    candidates = credential_candidates(
        request,
        carrier=settings.credential_carrier,
        cookie_name=settings.cookie_name,
    )
    identity = None
    for credential in candidates:
        identity = guard.authenticate(credential)
        if identity is not None:
            break
    if identity is None:
        raise HTTPException(status_code=401, detail="Unauthorized access")
    request.state.identity = identity
    return identity


def require_role(role: Role | str) -> Callable[..., object]:
    """
    Dependency factory: authenticate first, then check the stored role.

    ```python
    @router.get("/admin/stats")
    async def stats(identity: Identity = Depends(require_role(Role.ADMIN))):
        ...
    ```
    """

    required = Role(role)

    async def dependency(
        identity: Identity = Depends(require_identity),
        guard: AccessGuard = Depends(get_guard),
    ) -> Identity:
        if not await guard.authorize(identity, required):
            raise HTTPException(status_code=403, detail="Forbidden access")
        return identity

    return dependency
