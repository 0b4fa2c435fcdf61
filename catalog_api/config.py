# catalog_api/config.py
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATALOG_API_", env_file=".env", extra="ignore")

    host: str = "127.0.0.1"
    port: int = 3001
    upload_dir: Path = Path("uploads")
    # nudge every price by up to +/-5% on each list call, like a live feed
    simulate_price_drift: bool = False


settings = Settings()
