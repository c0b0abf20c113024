"""Application configuration settings."""
from pydantic_settings import BaseSettings
from dateutil import tz as dateutil_tz
from datetime import tzinfo
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "sqlite"
    db_password: str = ""
    db_name: str = "shift_planner"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600

    # Scheduling Policy
    business_timezone: str = "Europe/Istanbul"
    business_name: str = "Business"
    min_shift_hours: float = 2.0
    default_max_weekly_hours: int = 45
    overtime_multiplier: float = 1.5

    # Application Settings
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = "/api"

    # CORS Settings
    cors_origins: List[str] = []

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def database_url(self) -> str:
        """Construct database URL from configuration."""
        # Use SQLite if DB_USER is 'sqlite'
        if self.db_user.lower() == 'sqlite':
            return f"sqlite:///./{self.db_name}.db"
        return f"mysql+pymysql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def tz(self) -> tzinfo:
        """Resolve the business timezone.

        Raises:
            ValueError: If the configured name is not a known IANA zone
        """
        zone = dateutil_tz.gettz(self.business_timezone)
        if zone is None:
            raise ValueError(f"Unknown business timezone: {self.business_timezone}")
        return zone


# Global settings instance
settings = Settings()
