"""Runtime configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"


class Settings(BaseSettings):
    data_dir: Path = DATA_DIR
    db_name: str = "liftpal.db"

    # 0 = Monday ... 6 = Sunday
    first_weekday: int = 6

    log_level: str = "INFO"

    # Identity used by the CLI when --user is not given
    user_id: int | None = None

    # Seed for the workout generator; unseeded when None
    random_seed: int | None = None

    model_config = SettingsConfigDict(env_prefix="LIFTPAL_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_settings().data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / get_settings().db_name
