from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _csv(name: str, default: str) -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    postgres_dsn: str
    log_level: str
    cors_allow_origins: tuple[str, ...]
    tick_arrays_per_swap: int


def get_settings() -> Settings:
    tick_arrays_per_swap = int(_env("TICK_ARRAYS_PER_SWAP", "3"))
    if not 1 <= tick_arrays_per_swap <= 3:
        raise ValueError("TICK_ARRAYS_PER_SWAP must be between 1 and 3.")
    return Settings(
        postgres_dsn=_env("POSTGRES_DSN", ""),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", "*"),
        tick_arrays_per_swap=tick_arrays_per_swap,
    )
