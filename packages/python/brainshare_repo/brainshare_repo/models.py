"""Pydantic models for BrainShare documents and request payloads.

Stored documents use camelCase keys; the models expose snake_case attributes
and serialize back to camelCase (``_id`` for the identifier).
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from access_guard import Role


class Badge(str, Enum):
    BRONZE = "bronze"
    GOLD = "gold"


class VoteDirection(str, Enum):
    UP = "up"
    DOWN = "down"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredDocument(CamelModel):
    id: str = Field(alias="_id")
    timestamp: Optional[datetime] = None


class User(StoredDocument):
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    role: Role = Role.USER
    post_count: int = 0
    badge: Badge = Badge.BRONZE


class Post(StoredDocument):
    email: str
    author_name: Optional[str] = None
    author_image: Optional[str] = None
    title: Optional[str] = None
    body: str
    tag: Optional[str] = None
    up_vote: int = 0
    down_vote: int = 0
    # only present on popularity-sorted listings
    vote_difference: Optional[int] = None


class Comment(StoredDocument):
    post_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    body: str
    feedback: Optional[str] = None
    reported: bool = False


class Tag(StoredDocument):
    name: str


class Announcement(StoredDocument):
    title: str
    description: str
    email: Optional[str] = None
    author_name: Optional[str] = None
    author_image: Optional[str] = None


class Payment(StoredDocument):
    email: str
    transaction_id: str
    price: float


class Profile(CamelModel):
    user: User
    recent_posts: List[Post] = Field(default_factory=list)


class DashboardCounts(CamelModel):
    users: int
    posts: int
    comments: int
    tags: int


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class UserRegistration(CamelModel):
    """Profile fields a client may supply on first contact."""

    name: Optional[str] = None
    image: Optional[str] = None


class PostCreate(CamelModel):
    title: Optional[str] = None
    body: str = Field(min_length=1)
    tag: Optional[str] = None
    author_name: Optional[str] = None
    author_image: Optional[str] = None


class CommentCreate(CamelModel):
    post_id: str
    body: str = Field(min_length=1)
    email: Optional[str] = None
    name: Optional[str] = None


class CommentReport(CamelModel):
    feedback: str = Field(min_length=1)


class TagCreate(CamelModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class AnnouncementCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    author_name: Optional[str] = None
    author_image: Optional[str] = None


class PaymentCreate(CamelModel):
    transaction_id: str = Field(min_length=1)
    price: float = Field(gt=0)
