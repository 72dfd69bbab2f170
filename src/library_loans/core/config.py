import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def load_env():
    """Load `.env` from the project root without overriding real environment variables."""
    dotenv_path = PROJECT_ROOT / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path, override=False)


def get_settings():
    load_env()
    return {
        "environment": os.getenv("ENVIRONMENT", "local"),
        "database_url": os.getenv("DATABASE_URL", ""),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "log_file": os.getenv("LOG_FILE") or None,
    }
