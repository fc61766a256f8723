import logging
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000"  # Vite (5173) and React default (3000)


class Settings(BaseModel):
    book_path: Optional[str] = None
    log_level: str = "INFO"
    cors_origins: List[str] = []


def get_settings() -> Settings:
    """Reads settings from the environment (and .env, if present)."""
    origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        book_path=os.getenv("BOOK_PATH") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
