from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


class Settings(BaseSettings):
    """
    Application settings loaded from the environment (prefix SHOPCART_).

    Optional env vars (.env):
      - SHOPCART_DATA_DIR      (where the JSON files and the SQLite db live)
      - SHOPCART_CART_BACKEND  ("json" or "sql")
      - SHOPCART_DATABASE_URL  (defaults to SQLite inside the data dir)
      - SHOPCART_LOG_LEVEL
    """

    data_dir: Path = _DEFAULT_DATA_DIR
    cart_backend: Literal["json", "sql"] = "json"
    database_url: str | None = None
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="SHOPCART_", env_file=".env", extra="ignore"
    )

    @property
    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'cart.db'}"


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every command.
    """
    return Settings()
