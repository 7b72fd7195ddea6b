import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger


# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def _sanitize(s: Optional[str]) -> str:
    """Remove CRLF, LF, and hidden whitespace from configuration values."""
    if s is None:
        return ""
    return s.replace("\r", "").replace("\n", "").strip()


def _flag(name: str, default: str = "false") -> bool:
    return _sanitize(os.getenv(name, default)).lower() in {"1", "true", "yes", "on"}


class Settings:
    def __init__(self):
        # API Settings
        self.api_host = "0.0.0.0"
        self.api_port = int(_sanitize(os.getenv("PORT", "8000")))
        # Allow enabling debug mode via env for local development
        self.debug = _flag("DEBUG")
        self.log_level = _sanitize(os.getenv("LOG_LEVEL", "INFO")).upper() or "INFO"

        # CORS Settings
        default_cors = (
            "http://localhost:3000,http://127.0.0.1:3000,"
            "http://localhost:5173,http://127.0.0.1:5173,"
            "http://localhost:8000,http://127.0.0.1:8000"
        )
        self.cors_origins = os.getenv("CORS_ORIGINS", default_cors)

        # Sessions minted by the dev seeding script live this long
        self.session_ttl_days = int(_sanitize(os.getenv("SESSION_TTL_DAYS", "30")))

        db_env = _sanitize(os.getenv("DATABASE_URL"))
        self.database_url = db_env or "sqlite:///./wellness.db"

        if db_env:
            logger.info("Using database URL from environment variable")
        else:
            logger.info("Using default database URL")

    @property
    def cors_origins_list(self) -> list:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
