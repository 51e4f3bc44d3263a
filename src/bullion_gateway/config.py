"""Runtime settings read from the environment."""
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

logger = logging.getLogger(__name__)

DEV_JWT_SECRET = "dev-secret-change-me-dev-secret-change-me"


def _env_bool(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Process configuration. Read once at startup; never mutated."""

    database_url: str = "sqlite:///./bullion.db"
    sql_echo: bool = False

    jwt_secret: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiration_seconds: int = 3600
    password_min_length: int = 10
    password_hash_rounds: int = 29000

    finnhub_api_key: str = ""
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    upstream_timeout_seconds: float = 5.0

    quote_cache_ttl_seconds: float = 60.0
    quote_min_interval_seconds: float = 10.0
    quote_cache_max_entries: int = 1024

    cors_origins: tuple[str, ...] = field(default=("http://localhost:4200",))
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000


def load_settings() -> Settings:
    """Build Settings from environment variables (defaults suit local development)."""
    settings = Settings(
        database_url=os.getenv("DATABASE_URL", Settings.database_url),
        sql_echo=_env_bool("SQL_ECHO"),
        jwt_secret=os.getenv("JWT_SECRET", DEV_JWT_SECRET),
        jwt_expiration_seconds=int(os.getenv("JWT_EXPIRATION_SECONDS", "3600")),
        password_min_length=int(os.getenv("PASSWORD_MIN_LENGTH", "10")),
        password_hash_rounds=int(os.getenv("PASSWORD_HASH_ROUNDS", "29000")),
        finnhub_api_key=os.getenv("FINNHUB_API_KEY", ""),
        finnhub_base_url=os.getenv("FINNHUB_BASE_URL", Settings.finnhub_base_url),
        upstream_timeout_seconds=float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "5")),
        quote_cache_ttl_seconds=float(os.getenv("QUOTE_CACHE_TTL_SECONDS", "60")),
        quote_min_interval_seconds=float(os.getenv("QUOTE_MIN_INTERVAL_SECONDS", "10")),
        quote_cache_max_entries=int(os.getenv("QUOTE_CACHE_MAX_ENTRIES", "1024")),
        cors_origins=_env_list("CORS_ORIGINS", "http://localhost:4200"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )
    if settings.jwt_secret == DEV_JWT_SECRET:
        logger.warning("JWT_SECRET not set; using the development signing secret")
    if not settings.finnhub_api_key:
        logger.warning("FINNHUB_API_KEY not set; upstream quote calls will be rejected")
    return settings


@lru_cache()
def get_settings() -> Settings:
    return load_settings()
