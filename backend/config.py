# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, List, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./openhouse.db"

    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    # Tokens never expire unless this is set
    ACCESS_TOKEN_EXPIRE_MINUTES: Optional[int] = None

    # Public URL embedded into the check-in QR codes
    PRODUCTION_BASE_URL: str = "http://localhost:4000"
    FRONTEND_URL: Optional[str] = None

    # Comma separated phone numbers that register straight into the admin role
    ADMIN_PHONES: str = ""
    UID_MAX_ATTEMPTS: int = 10

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

    @property
    def admin_phones(self) -> List[str]:
        return [p.strip() for p in self.ADMIN_PHONES.split(",") if p.strip()]

settings = Settings()
