"""Configuration helpers for the MongoDB connection.

Applications can create a new ``MongoSettings`` instance at startup and assign
it to ``brainshare_db.settings.settings`` before the first call to ``get_db``
to override the defaults.
"""

import os

from loguru import logger
from pydantic import BaseModel, Field


class MongoSettings(BaseModel):
    """Basic MongoDB configuration."""

    uri: str = Field(
        default_factory=lambda: os.getenv("MONGO_URI", "mongodb://localhost:27017")
    )
    db_name: str = Field(
        default_factory=lambda: os.getenv("MONGO_DB_NAME", "BrainShareDB")
    )
    server_selection_timeout_ms: int = Field(
        default_factory=lambda: int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))
    )


settings: MongoSettings = MongoSettings()
logger.info(
    "MongoSettings initialized with db_name={db_name} timeout={timeout}ms",
    db_name=settings.db_name,
    timeout=settings.server_selection_timeout_ms,
)
