import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def load_env() -> None:
    """Load .env from the working directory if present.
    Variables already set in the environment win.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    db_path: Path = Path("data/factories.db")
    page_size: int = 1000
    dedup_chunk_size: int = 20
    log_level: str = "INFO"
    log_dir: Path = Path("logs")


MIN_PAGE_SIZE = 1000


def _int_env(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def load_settings() -> Settings:
    """Build Settings from FACTORYMATCH_* environment variables."""
    defaults = Settings()
    return Settings(
        db_path=Path(os.getenv("FACTORYMATCH_DB_PATH") or defaults.db_path),
        page_size=_int_env("FACTORYMATCH_PAGE_SIZE", defaults.page_size, minimum=MIN_PAGE_SIZE),
        dedup_chunk_size=_int_env("FACTORYMATCH_DEDUP_CHUNK", defaults.dedup_chunk_size),
        log_level=(os.getenv("FACTORYMATCH_LOG_LEVEL") or defaults.log_level).upper(),
        log_dir=Path(os.getenv("FACTORYMATCH_LOG_DIR") or defaults.log_dir),
    )
