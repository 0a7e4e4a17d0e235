"""
Application configuration and environment settings.
"""
from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union

MIN_SESSION_SECRET_LENGTH = 64


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "My Budget Server"
    DEBUG: bool = False
    PRODUCTION: bool = False

    # Server
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3000

    # Storage: users.db plus one user_<id>.db per user
    DATABASE_PATH: str = "data"
    DB_ECHO: bool = False

    # Session
    SESSION_SECRET: str
    SESSION_ALGORITHM: str = "HS256"
    SESSION_COOKIE_NAME: str = "budget_session"
    SESSION_EXPIRY_DAYS: int = 30

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("SESSION_SECRET")
    @classmethod
    def check_session_secret(cls, v: str) -> str:
        """Reject secrets too short to sign session cookies safely."""
        if len(v.encode("utf-8")) < MIN_SESSION_SECRET_LENGTH:
            raise ValueError(
                f"must be at least {MIN_SESSION_SECRET_LENGTH} characters long"
            )
        return v

    @field_validator("SERVER_PORT")
    @classmethod
    def check_port(cls, v: int) -> int:
        """Ports must fit in 16 bits."""
        if not 0 < v < 65536:
            raise ValueError(f"Invalid port number: {v}")
        return v

    @property
    def bind_address(self) -> str:
        return f"{self.SERVER_HOST}:{self.SERVER_PORT}"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment once, for process bootstrap only."""
    return Settings()
