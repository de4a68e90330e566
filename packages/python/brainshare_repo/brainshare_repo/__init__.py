"""BrainShare domain repositories built on the resource query engine."""

from .models import (
    Announcement,
    AnnouncementCreate,
    Badge,
    Comment,
    CommentCreate,
    CommentReport,
    DashboardCounts,
    Payment,
    PaymentCreate,
    Post,
    PostCreate,
    Profile,
    Tag,
    TagCreate,
    User,
    UserRegistration,
    VoteDirection,
)
from .users import (
    USER_DEFAULTS,
    get_profile,
    get_role,
    get_user,
    promote_to_admin,
    register_user,
    search_users,
    upgrade_badge,
)
from .posts import create_post, delete_post, get_post, list_posts, list_user_posts, vote
from .comments import (
    create_comment,
    delete_comment,
    list_comments,
    list_reported_comments,
    report_comment,
)
from .catalog import (
    count_announcements,
    create_announcement,
    create_tag,
    list_announcements,
    list_tags,
)
from .payments import record_payment
from .stats import dashboard_counts

__all__ = [
    "Announcement",
    "AnnouncementCreate",
    "Badge",
    "Comment",
    "CommentCreate",
    "CommentReport",
    "DashboardCounts",
    "Payment",
    "PaymentCreate",
    "Post",
    "PostCreate",
    "Profile",
    "Tag",
    "TagCreate",
    "User",
    "UserRegistration",
    "VoteDirection",
    "USER_DEFAULTS",
    "register_user",
    "get_user",
    "get_role",
    "get_profile",
    "search_users",
    "promote_to_admin",
    "upgrade_badge",
    "create_post",
    "get_post",
    "list_posts",
    "list_user_posts",
    "vote",
    "delete_post",
    "create_comment",
    "list_comments",
    "report_comment",
    "list_reported_comments",
    "delete_comment",
    "create_tag",
    "list_tags",
    "create_announcement",
    "list_announcements",
    "count_announcements",
    "record_payment",
    "dashboard_counts",
]
