# household/core/config.py - Centralized settings management using Pydantic
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings with validation and type safety"""

    # Application Environment
    ENV: str = Field(default="dev", description="Environment: dev, staging, prod")
    DEBUG: bool = Field(default=False, description="Debug mode")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, ge=1, le=65535, description="API port")
    API_TITLE: str = Field(default="Household Admin API", description="API title")
    API_VERSION: str = Field(default="1.0.0", description="API version")

    # Database Configuration
    DATABASE_URL: str = Field(default="sqlite:///./household.db", description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False, description="Echo SQL queries")
    DATABASE_POOL_SIZE: int = Field(default=5, ge=1, le=100, description="Connection pool size")
    DATABASE_MAX_OVERFLOW: int = Field(default=10, ge=0, le=100, description="Max overflow connections")
    DATABASE_POOL_TIMEOUT: int = Field(default=30, ge=1, le=300, description="Pool timeout in seconds")
    DATABASE_POOL_RECYCLE: int = Field(default=3600, ge=300, description="Pool recycle time in seconds")

    # CORS Configuration (comma separated)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="Allow CORS credentials")

    # Household Configuration
    HOUSEHOLD_PERSONS: str = Field(
        default="grant,shannon",
        description="Comma separated names of the two people tracked by the tax module"
    )
    UPCOMING_FEES_DAYS: int = Field(default=30, ge=1, le=365, description="Default window for upcoming fees")
    SEED_LOOKUPS_ON_STARTUP: bool = Field(default=True, description="Insert missing system lookup rows on startup")

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string"
    )

    # Development Settings
    DEV_LOG_SQL: bool = Field(default=False, description="Log SQL queries in development")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"  # Ignore extra environment variables

    @field_validator("ENV")
    @classmethod
    def validate_environment(cls, v):
        allowed_envs = ["dev", "development", "test", "staging", "prod", "production"]
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENV must be one of: {allowed_envs}")
        return v.lower()

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v):
        allowed_prefixes = (
            "postgresql://",
            "postgresql+psycopg2://",
            "postgresql+psycopg://",
            "sqlite://",
        )
        if not v.startswith(allowed_prefixes):
            raise ValueError("DATABASE_URL must be a valid database connection string (postgresql, postgresql+psycopg, postgresql+psycopg2, or sqlite)")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed_levels}")
        return v.upper()

    @field_validator("HOUSEHOLD_PERSONS")
    @classmethod
    def validate_household_persons(cls, v):
        names = [name.strip().lower() for name in v.split(",") if name.strip()]
        if len(names) != 2:
            raise ValueError("HOUSEHOLD_PERSONS must name exactly two people")
        if "joint" in names:
            raise ValueError("'joint' is reserved and cannot be a household person")
        return ",".join(names)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.ENV in ["dev", "development", "test"]

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.ENV in ["prod", "production"]

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def household_persons(self) -> List[str]:
        """The two people tracked by the tax module, in configured order"""
        return self.HOUSEHOLD_PERSONS.split(",")

    @property
    def income_persons(self) -> List[str]:
        """Persons that may own income and deductions (includes joint)"""
        return self.household_persons + ["joint"]


# Create settings instance with validation
try:
    settings = Settings()
except Exception as e:
    print(f"Configuration error: {e}")
    print("Please check your .env file and environment variables")
    raise

__all__ = ["settings", "Settings"]
