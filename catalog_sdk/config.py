# catalog_sdk/config.py
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings, read from CATALOG_* environment variables or .env."""

    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", extra="ignore")

    api_base_url: str = "http://localhost:3001"
    request_timeout: float = 10.0
    health_check_interval: float = 30.0
    health_check_timeout: float = 5.0
    storage_path: Path = Path.home() / ".catalog" / "storage.json"
    download_dir: Path = Path("downloads")
    log_level: str = "INFO"
