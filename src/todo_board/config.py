"""Todo board configuration via pydantic-settings."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class TodoSettings(BaseSettings):
    api_base_url: str = "http://localhost:3000"
    request_timeout: float = 30.0
    app_title: str = "Todo Board"
    log_level: str = "INFO"
    log_file: str | None = None
    web_host: str = "127.0.0.1"
    web_port: int = 8030

    model_config = {"env_prefix": "TODO_", "env_file": ".env", "extra": "ignore"}

    @property
    def base_dir(self) -> Path:
        return Path(__file__).resolve().parent

    @property
    def templates_dir(self) -> Path:
        return self.base_dir / "templates"


settings = TodoSettings()
