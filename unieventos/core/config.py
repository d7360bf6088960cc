import os

# Database configuration
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./unieventos.db")

# Redis configuration
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Auth configuration
SECRET_KEY = os.getenv("SECRET_KEY", "unieventos-development-secret-change-me")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

# Registration guard: when enabled, register/unregister run under a per-event Redis lock
REGISTRATION_LOCKING = os.getenv("REGISTRATION_LOCKING", "false").lower() in ("1", "true", "yes")
LOCK_TIMEOUT = float(os.getenv("LOCK_TIMEOUT", "10"))
LOCK_BLOCKING_TIMEOUT = float(os.getenv("LOCK_BLOCKING_TIMEOUT", "5"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def get_database_url():
    return DATABASE_URL


def get_redis_url():
    return REDIS_URL


def registration_locking_enabled() -> bool:
    return REGISTRATION_LOCKING
