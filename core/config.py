from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


DEV_JWT_SECRET = "buildingos-dev-secret"


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "BuildingOS Authorization API"
    ENV: str = "development"

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Session tokens (issued by the auth service)
    # -------------------------------------------------
    JWT_SECRET_KEY: str = Field(DEV_JWT_SECRET)
    JWT_ALGORITHM: str = Field("HS256")

    # -------------------------------------------------
    # RBAC
    # -------------------------------------------------
    # Optional JSON file replacing the built-in role → permission table.
    # Read once at startup; changing it requires a redeploy.
    RBAC_GRANT_TABLE_FILE: Optional[str] = Field(None)

    # Write an audit line for every denied request
    RBAC_AUDIT_DENIALS: bool = Field(True)

    # -------------------------------------------------
    # Logging
    # -------------------------------------------------
    LOG_LEVEL: str = Field("INFO")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = []

for origin in settings.FRONTEND_ORIGINS:
    if not origin.startswith("http"):
        origin = f"https://{origin}"
    cors_origins.append(origin.rstrip("/"))

# remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
