# backend configuration
# loads env vars for the hosted store, identity tokens, local storage and chat pacing

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent / ".env")


class Settings(BaseSettings):
    # hosted backend (mongodb)
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "hope_for_ocd")

    # identity tokens
    JWT_SECRET: str = os.getenv("JWT_SECRET", "hopeocd-dev-secret-change-in-production")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # local persistent storage (json blobs keyed by name)
    LOCAL_STORAGE_DIR: str = os.getenv("LOCAL_STORAGE_DIR", ".hopeocd")
    OFFLINE_QUEUE_KEY: str = "pendingSync"
    NOTIFICATIONS_KEY: str = "notifications"
    MAX_NOTIFICATIONS: int = 20

    # how often the backend is pinged to detect online/offline transitions
    CONNECTIVITY_PROBE_SECONDS: float = 30.0

    # simulated thinking time for the chat responder
    CHAT_THINKING_MIN_SECONDS: float = 1.5
    CHAT_THINKING_MAX_SECONDS: float = 4.5

    # in-memory caches are bounded; least recently used entries are evicted
    MAX_CACHED_IDENTITIES: int = 512
    MAX_CHAT_SESSIONS: int = 1024

    EXPORT_FILE_PREFIX: str = "hope-for-ocd-data"

    # show tracebacks in error responses
    DEBUG: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()


def require_backend_config():
    """fail fast when the backend url or key is missing"""
    if not settings.MONGODB_URI or not settings.JWT_SECRET:
        raise RuntimeError("Missing backend environment variables")
