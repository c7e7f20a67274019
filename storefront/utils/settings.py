# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", 24*60*60))
SESSION_BACKEND = os.getenv("SESSION_BACKEND", "memory")  # memory, redis
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
SESSION_SWEEP_SECONDS = int(os.getenv("SESSION_SWEEP_SECONDS", 5*60))

SEED_DATA = _flag("SEED_DATA", "true")

PRODUCTS_PAGE_SIZE = int(os.getenv("PRODUCTS_PAGE_SIZE", 10))
USERS_PAGE_SIZE = int(os.getenv("USERS_PAGE_SIZE", 20))
ORDERS_PAGE_SIZE = int(os.getenv("ORDERS_PAGE_SIZE", 20))
MAX_PAGE_SIZE = int(os.getenv("MAX_PAGE_SIZE", 100))
