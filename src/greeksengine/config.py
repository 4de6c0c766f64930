from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

from .core import DEFAULT_RISK_FREE_RATE


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GREEKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Pricing defaults ──────────────────────────────────────────────────────
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE   # percent, used by CLI / scripts

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


settings = Settings()


def configure_logging(level: str | None = None) -> None:
    """Install a root handler for command-line entry points.

    No-op when the root logger already has handlers, so embedding
    applications keep their own configuration.
    """
    if logging.getLogger().hasHandlers():
        return
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=settings.log_format,
    )
