"""API routers for the FastAPI backend."""

from .assets import router as assets_router
from .auth import me_router, router as auth_router
from .clients import router as clients_router
from .dashboard import router as dashboard_router
from .generate import router as generate_router
from .objects import router as objects_router
from .projects import router as projects_router
from .system import router as system_router
from .users import router as users_router
from .variants import router as variants_router

__all__ = [
    "assets_router",
    "auth_router",
    "clients_router",
    "dashboard_router",
    "generate_router",
    "me_router",
    "objects_router",
    "projects_router",
    "system_router",
    "users_router",
    "variants_router",
]
