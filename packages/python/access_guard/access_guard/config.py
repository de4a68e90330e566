import os

from loguru import logger
from pydantic import BaseModel, Field

CARRIERS = ("any", "cookie", "header")

# only ever used outside production when ACCESS_TOKEN_SECRET is unset
DEV_TOKEN_SECRET = "brainshare-dev-secret"


class GuardSettings(BaseModel):
    """Runtime configuration for issuing and verifying session credentials."""

    token_secret: str = Field(
        default_factory=lambda: os.getenv("ACCESS_TOKEN_SECRET", "")
    )
    token_algorithm: str = Field(
        default_factory=lambda: os.getenv("ACCESS_TOKEN_ALGORITHM", "HS256")
    )
    token_ttl_days: float = Field(
        default_factory=lambda: float(os.getenv("ACCESS_TOKEN_TTL_DAYS", "365"))
    )
    credential_carrier: str = Field(
        default_factory=lambda: os.getenv("ACCESS_GUARD_CREDENTIAL_CARRIER", "any").lower()
    )
    cookie_name: str = Field(
        default_factory=lambda: os.getenv("ACCESS_GUARD_COOKIE_NAME", "token")
    )

    def resolve_secret(self, production: bool) -> str:
        """Return the signing secret, refusing to fall back in production."""

        if self.token_secret:
            return self.token_secret
        if production:
            raise RuntimeError("ACCESS_TOKEN_SECRET must be set in production")
        logger.warning("ACCESS_TOKEN_SECRET is not set; using the development secret")
        return DEV_TOKEN_SECRET


settings = GuardSettings()
