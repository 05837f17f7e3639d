import os
import secrets

from dotenv import load_dotenv

load_dotenv()

DB_USER = os.getenv("DB_USER")
DB_PASS = os.getenv("DB_PASS")
DB_HOST = os.getenv("DB_HOST")
DB_PORT = os.getenv("DB_PORT", "5432")
DB_NAME = os.getenv("DB_NAME")

if os.getenv("DATABASE_URL"):
    DATABASE_URL = os.getenv("DATABASE_URL")
elif DB_HOST:
    DATABASE_URL = f"postgresql+asyncpg://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
else:
    DATABASE_URL = "sqlite+aiosqlite:///./db.sqlite"

# Without SECRET every process signs sessions with its own random key
SECRET_FROM_ENV = bool(os.getenv("SECRET"))
SECRET = os.getenv("SECRET") or secrets.token_hex(32)
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "shrinx_session")
SESSION_HTTPS_ONLY = os.getenv("SESSION_HTTPS_ONLY", "false").lower() == "true"

# Legacy list, only used to seed the domain registry on first run
DOMAINS = [d.strip() for d in os.getenv("DOMAINS", "").split(",") if d.strip()]

TURNSTILE_VERIFY_URL = os.getenv(
    "TURNSTILE_VERIFY_URL",
    "https://challenges.cloudflare.com/turnstile/v0/siteverify",
)
TURNSTILE_TIMEOUT = float(os.getenv("TURNSTILE_TIMEOUT", "10"))

DEFAULT_ADMIN_USERNAME = os.getenv("DEFAULT_ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD = os.getenv("DEFAULT_ADMIN_PASSWORD", "changeme")

LOG_LEVEL = os.getenv("LOG_LEVEL", "info")
