from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MDPRESS_", case_sensitive=False)

    config_file: Path = Path("mdpress.yaml")
    root: Path | None = None
    file_mode: int = 0o644
