"""
Configuration management for the Auth Service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Auth Service configuration loaded from environment variables"""

    # Application
    APP_NAME: str = "auth-backend"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./app.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # Token Configuration
    JWT_SECRET: str = "dev-secret-change-me"
    JWT_EXPIRES_IN: str = "900s"
    JWT_REFRESH_SECRET: str = "dev-refresh-secret-change-me"
    JWT_REFRESH_EXPIRES_IN: str = "7d"
    JWT_ALGORITHM: str = "HS256"

    # Password hashing work factor
    BCRYPT_ROUNDS: int = 12

    # Requests slower than this are logged as warnings
    SLOW_REQUEST_MS: int = 1000

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() in ("local", "development", "dev")


# Global settings instance
settings = Settings()
