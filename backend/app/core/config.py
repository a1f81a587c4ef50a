from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Storage mode: 'local' (JSON files) or 'postgres' (relational database)
    DB_MODE: str = "local"
    DATA_DIR: str = "data"
    DATABASE_URL: str = "sqlite:///./catalog.db"

    # Admin authentication
    SECRET_KEY: str = "change-me-in-production"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 100
    MIN_PASSWORD_LENGTH: int = 6

    REDIS_URL: str = "redis://localhost:6379/0"
    CELERY_BROKER_URL: Optional[str] = None
    CELERY_RESULT_BACKEND: Optional[str] = None

    BACKUP_DIR: str = "backups"

    class Config:
        # This tells Pydantic to load the variables from a .env file
        env_file = ".env"

# Create a single settings instance to be used across the application
settings = Settings()
