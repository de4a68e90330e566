"""Expose the BrainShare FastAPI routers."""

from .admin_router import router as admin_router
from .auth_router import router as auth_router
from .catalog_router import router as catalog_router
from .comments_router import router as comments_router
from .payments_router import router as payments_router
from .posts_router import router as posts_router
from .users_router import router as users_router

routers = [
    auth_router,
    users_router,
    posts_router,
    comments_router,
    catalog_router,
    admin_router,
    payments_router,
]

__all__ = [
    "routers",
    "auth_router",
    "users_router",
    "posts_router",
    "comments_router",
    "catalog_router",
    "admin_router",
    "payments_router",
]
