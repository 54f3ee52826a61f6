from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "Room Rental API"
    ENV: str = "development"
    LOG_LEVEL: str = Field("INFO", env="LOG_LEVEL")

    # -------------------------------------------------
    # Frontend Domains (CORS)
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:3000",
    ]

    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (rooms, bookings, readings & auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = Field(None, env="SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, env="SUPABASE_ANON_KEY")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, env="SUPABASE_SERVICE_ROLE_KEY")

    # -------------------------------------------------
    # Billing
    # -------------------------------------------------
    LATE_FEE_PER_DAY: float = Field(100, env="LATE_FEE_PER_DAY", description="Late fee charged per day past the rent due day (default: 100)")

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list after loading settings
# -------------------------------------------------
settings.BACKEND_CORS_ORIGINS = sorted(
    {d.rstrip("/") for d in settings.FRONTEND_DOMAINS}
)
