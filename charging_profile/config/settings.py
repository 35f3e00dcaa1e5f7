from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


def find_env_file() -> str:
    env_file = ".env" if Path("/.dockerenv").exists() else ".env.local"

    current_path = Path.cwd()

    for path in [current_path] + list(current_path.parents):
        env_path = path / env_file
        if env_path.exists():
            return str(env_path)

    return env_file


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=find_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Charging Profile Generator API"
    app_version: str = "1.0.0"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    cors_origins: List[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False  # serialize records as JSON lines

    # Monitoring
    metrics_enabled: bool = True
