# routers/health.py

from fastapi import APIRouter

from core.permissions import Permission, get_grant_table

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/rbac
# Confirms the grant table is loaded
# No auth required
# -----------------------------------------------------
@router.get("/rbac", summary="Grant table health check")
async def health_rbac():
    try:
        table = get_grant_table()
        return {
            "service": "RBAC",
            "status": "ok",
            "roles": len(table.roles()),
            "permissions": len(Permission.list()),
        }

    except Exception as e:
        return {
            "service": "RBAC",
            "status": "error",
            "error": str(e),
        }


# -----------------------------------------------------
# GET /health/app
# Simple API health check for uptime monitors
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    """
    Lightweight health check for uptime monitors.
    """
    return {
        "service": "BuildingOS API",
        "status": "ok",
    }
