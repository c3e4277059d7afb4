"""Application configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("pages")
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    app_title: str = "FlatWiki"
    greeting: str = "Hello wiki!"
    escape_body: bool = False
    strict_edit_load: bool = False
    log_level: str = "info"

    model_config = SettingsConfigDict(
        env_prefix="FLATWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
