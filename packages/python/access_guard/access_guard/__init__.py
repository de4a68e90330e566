from .config import GuardSettings, settings
from .credentials import CredentialVerifier, credential_candidates, extract_credential
from .guard import AccessGuard, Identity, Role, RoleLookup
from .fastapi_integration import get_guard, get_verifier, require_identity, require_role

__all__ = [
    "settings",
    "GuardSettings",
    "CredentialVerifier",
    "credential_candidates",
    "extract_credential",
    "AccessGuard",
    "Identity",
    "Role",
    "RoleLookup",
    "get_guard",
    "get_verifier",
    "require_identity",
    "require_role",
]
