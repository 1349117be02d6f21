from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    card_catalog_file: str = "data/cards/catalog.json"
    sample_offers_file: str = "data/offers/sample_offers.json"

    state_backend: Literal["file", "memory"] = "file"
    state_dir: str = "data/state"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
