"""Runtime settings, read once from the environment.

Defaults run the service locally against a ``data/`` directory in the
current working directory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_DATA_DIR = Path("data")


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    log_format: str = "json"
    cors_origins: tuple[str, ...] = ("*",)

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            data_dir=Path(os.getenv("STOREFRONT_DATA_DIR", str(DEFAULT_DATA_DIR))),
            environment=os.getenv("STOREFRONT_ENV", "development"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("LOG_FORMAT", "json").lower(),
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        )
