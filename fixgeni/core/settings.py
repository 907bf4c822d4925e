import os
from pathlib import Path
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

# Repo root (parent of fixgeni/)
PACKAGE_DIR = Path(__file__).resolve().parents[1]
REPO_ROOT = PACKAGE_DIR.parent

DEFAULT_DATABASE_URL = "sqlite:///./data/app.db"


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def normalize_database_url(url: str) -> str:
    """Hosted Postgres hands out postgres:// URLs; SQLAlchemy only accepts postgresql://."""
    url = (url or "").strip()
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


class Settings(BaseModel):
    database_url: str = DEFAULT_DATABASE_URL
    port: int = 10000
    cors_origins: list[str] = []
    security_secret_key: str | None = None
    seed_on_boot: bool = True
    force_seed: bool = False
    seed_catalog_path: Path | None = None
    store_timeout_sec: float = 10.0
    auto_create_schema: bool = True
    log_level: str = "INFO"
    max_body_bytes: int = 1024 * 1024

    @property
    def has_security(self) -> bool:
        return bool(self.security_secret_key)


def load_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "")
    catalog_path = os.getenv("SEED_CATALOG_PATH", "").strip()
    return Settings(
        database_url=normalize_database_url(os.getenv("DATABASE_URL", "")) or DEFAULT_DATABASE_URL,
        port=int(os.getenv("PORT", "10000")),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        security_secret_key=os.getenv("SECURITY_SECRET_KEY") or None,
        seed_on_boot=_env_bool("SEED_ON_BOOT", True),
        force_seed=_env_bool("FORCE_SEED", False),
        seed_catalog_path=Path(catalog_path) if catalog_path else None,
        store_timeout_sec=float(os.getenv("STORE_TIMEOUT_SEC", "10")),
        auto_create_schema=_env_bool("AUTO_CREATE_SCHEMA", True),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(1024 * 1024))),
    )
