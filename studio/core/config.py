"""Runtime settings for the studio, read once from the environment (and ``.env``)."""

import os
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

# Repository root (studio/core/config.py -> two levels up)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

_TRUTHY = {"1", "true", "yes", "on"}


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    return (Path(value).expanduser() if value else default).resolve()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_choice(name: str, default: str, allowed: Tuple[str, ...]) -> str:
    value = (os.getenv(name) or default).strip().lower()
    return value if value in allowed else default


def _env_csv(name: str) -> List[str]:
    items = [item.strip() for item in (os.getenv(name) or "").split(",")]
    return list(dict.fromkeys(item for item in items if item))


# Providers
STORAGE_PROVIDER = _env_choice("STORAGE_PROVIDER", "local", ("local", "supabase"))
TEXT_PROVIDER = _env_choice("TEXT_PROVIDER", "gemini", ("gemini", "anthropic"))

# Local object storage
DATA_ROOT = _env_path("STUDIO_DATA_ROOT", PROJECT_ROOT / "data")
OBJECTS_DIR = DATA_ROOT / "objects"

OBJECT_URL_EXPIRY_SECONDS = _env_int("OBJECT_URL_EXPIRY_SECONDS", 3600)
UPLOAD_URL_EXPIRY_SECONDS = _env_int("UPLOAD_URL_EXPIRY_SECONDS", 900)
MAX_UPLOAD_BYTES = _env_int("MAX_UPLOAD_BYTES", 20 * 1024 * 1024)

# Supabase storage (STORAGE_PROVIDER=supabase)
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
SUPABASE_BUCKET = os.getenv("SUPABASE_BUCKET", "ad-variants")

# Generative AI
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_AI_API_KEY")
GEMINI_TEXT_MODEL = os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash")
GEMINI_IMAGE_MODEL = os.getenv("GEMINI_IMAGE_MODEL", "gemini-2.5-flash-image")
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-sonnet-4-5")
AI_MAX_TOKENS = _env_int("AI_MAX_TOKENS", 4000)
AI_TEMPERATURE = _env_float("AI_TEMPERATURE", 0.9)

# Sessions and sign-up
SESSION_SECRET = os.getenv("SESSION_SECRET", "dev-secret-change-in-production")
SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "studio_session")
SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE")
SESSION_COOKIE_MAX_AGE = _env_int("SESSION_COOKIE_MAX_AGE", 60 * 60 * 24 * 7)
ALLOW_REGISTRATION = _env_flag("ALLOW_REGISTRATION", "true")

# CORS (the Vite dev server and the bundled dashboard)
CORS_ALLOW_ORIGINS = _env_csv("CORS_ALLOW_ORIGINS") or [
    "http://localhost:5000",
    "http://127.0.0.1:5000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
CORS_ALLOW_CREDENTIALS = _env_flag("CORS_ALLOW_CREDENTIALS", "true")


def _database_dsn(raw: Optional[str]) -> Optional[str]:
    """Point Postgres URLs at the psycopg 3 driver and require TLS for Supabase hosts."""

    if not raw:
        return None
    dsn = raw.strip()
    for prefix in ("postgres://", "postgresql://", "postgresql+psycopg2://"):
        if dsn.startswith(prefix):
            dsn = "postgresql+psycopg://" + dsn[len(prefix):]
            break
    if dsn.startswith("postgresql") and "supabase" in dsn and "sslmode" not in dsn:
        dsn += ("&" if "?" in dsn else "?") + "sslmode=require"
    return dsn


# Postgres in production; SQLite is accepted for local runs and tests
DATABASE_DSN = _database_dsn(
    os.getenv("DATABASE_DSN") or os.getenv("APP_DATABASE_DSN") or os.getenv("POSTGRES_DSN")
)


def ensure_storage_dirs() -> None:
    """Create the on-disk object root when objects live on the local filesystem."""

    if STORAGE_PROVIDER == "local":
        OBJECTS_DIR.mkdir(parents=True, exist_ok=True)
