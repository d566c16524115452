"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from MN_ prefixed environment variables."""

    # Application
    APP_NAME: str = "markdown-notebook"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Database
    DATABASE_URL: str = "sqlite:///./mn.db"
    DB_ECHO: bool = False
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for the single SQLite connection

    # JWT
    SECRET_KEY: str  # required, the process refuses to start without it
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 4 * 7 * 24 * 60 * 60  # 4 weeks
    TOKEN_LEEWAY_SECONDS: int = 60

    # Password hashing
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_key_not_empty(cls, v):
        """Reject an empty signing secret."""
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    class Config:
        env_file = ".env"
        env_prefix = "MN_"
        case_sensitive = True


settings = Settings()
