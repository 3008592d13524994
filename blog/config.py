from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    APP_NAME: str = "Blog"
    DATABASE_URL: str = "sqlite:///./blog.db"
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Paging defaults used by the HTTP layer (can be overridden via .env)
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Load the reference users/posts/comments when the app starts
    SEED_ON_STARTUP: bool = False

    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"  # Load environment variables from the .env file


settings = Settings()
