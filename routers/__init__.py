# routers/__init__.py

from .health import router as health_router
from .rbac import router as rbac_router

__all__ = ["health_router", "rbac_router"]
