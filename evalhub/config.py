"""
Application Configuration
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Application
    app_name: str = "Beyin Merkezi Evaluation Portal"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    # Authentication
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30  # 30 days
    bcrypt_rounds: int = 12
    allow_admin_registration: bool = True

    # Bootstrap admin account (created on startup when both are set)
    seed_admin_email: Optional[str] = None
    seed_admin_password: Optional[str] = None

    # Database
    database_url: str = "sqlite:///./evalhub.db"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
