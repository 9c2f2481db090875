"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


class Config:
    # Runtime
    APP_ENV = os.getenv("APP_ENV", "development")
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "3000"))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_PATH = os.getenv("LOG_PATH", "")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Storage backends: "prisma" (PostgreSQL) or "memory"
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "prisma")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # External call bounds
    STORE_TIMEOUT_SECONDS: float = float(os.getenv("STORE_TIMEOUT_SECONDS", "5"))
    STORE_READ_ATTEMPTS: int = int(os.getenv("STORE_READ_ATTEMPTS", "3"))
    # Multiplier for exponential backoff between read retries (seconds)
    STORE_RETRY_BACKOFF: float = float(os.getenv("STORE_RETRY_BACKOFF", "0.5"))

    # Sessions: "redis" or "memory"
    SESSION_BACKEND = os.getenv("SESSION_BACKEND", "redis")
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")
    SESSION_ISSUER = os.getenv("SESSION_ISSUER", "soconnect")
    SESSION_TTL_MINUTES: int = int(os.getenv("SESSION_TTL_MINUTES", "720"))
    SINGLE_SESSION_PER_USER = _flag("SINGLE_SESSION_PER_USER", "true")
    PASSCODE_HASH_ITERATIONS: int = int(
        os.getenv("PASSCODE_HASH_ITERATIONS", "260000")
    )

    # Attachments
    MAX_UPLOAD_MB = float(os.getenv("MAX_UPLOAD_MB", "10"))
    MAX_UPLOAD_BYTES = int(MAX_UPLOAD_MB * 1024 * 1024)
    MIME_TYPES = os.getenv(
        "MIME_TYPES",
        "image/jpeg,image/png,image/gif,image/webp,application/pdf,text/plain,"
        "application/msword,"
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ).split(",")
    UPLOAD_BASE = os.getenv("UPLOAD_BASE", "uploads")
    UPLOAD_URL_PREFIX = os.getenv("UPLOAD_URL_PREFIX", "/uploads")

    # Rate limiting
    RATE_LIMIT_ENABLED = _flag("RATE_LIMIT_ENABLED", "true")
    LOGIN_RATE_LIMIT = os.getenv("LOGIN_RATE_LIMIT", "10/minute")

    # Administration (empty disables the admin router)
    ADMIN_API_KEY = os.getenv("ADMIN_API_KEY", "")

    # Client / poller
    API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000")
    POLL_INTERVAL_SECONDS: float = float(os.getenv("POLL_INTERVAL_SECONDS", "2"))
    CLIENT_TIMEOUT_SECONDS: float = float(os.getenv("CLIENT_TIMEOUT_SECONDS", "10"))
