"""Configuration for the BrainShare API package."""

import os

from pydantic import BaseModel, Field


def _app_env() -> str:
    return (os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development").lower()


class ApiSettings(BaseModel):
    """Settings for payment and session cookie handling."""

    app_env: str = Field(default_factory=_app_env)
    stripe_secret_key: str = Field(
        default_factory=lambda: os.getenv("STRIPE_SECRET_KEY", "")
    )
    payment_currency: str = Field(
        default_factory=lambda: os.getenv("PAYMENT_CURRENCY", "usd")
    )
    profile_recent_posts: int = Field(
        default_factory=lambda: int(os.getenv("PROFILE_RECENT_POSTS", "3"))
    )

    @property
    def production(self) -> bool:
        return self.app_env == "production"


settings = ApiSettings()
