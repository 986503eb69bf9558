"""Application settings using Pydantic Settings."""

from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    mongodb_url: str = "mongodb://localhost:27017/workout_circle"

    # Application Configuration
    app_name: str = "Workout Circle"
    app_version: str = "1.0.0"
    debug: bool = True
    log_level: str = "INFO"

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS Configuration
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Members' "today" is computed in this zone
    timezone: str = "UTC"

    # Schedule Configuration
    default_preferred_days: List[int] = [1, 3, 5]  # Mon/Wed/Fri, Sunday = 0
    suggested_date_count: int = 3
    spread_weeks: int = 4
    batch_skip_reason: str = "Batch skipped"
    reschedule_reason: str = "Rescheduled from missed workout"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
