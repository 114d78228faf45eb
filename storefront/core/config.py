from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./storefront.db"
    DATABASE_ECHO: bool = False

    # Session (cart binding only, not authentication)
    SESSION_SECRET_KEY: str = "change-me"
    SESSION_MAX_AGE: int = 3600 * 24 * 7

    # Shop Configuration
    SHOP_NAME: str = "My Shop"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
