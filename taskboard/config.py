"""Settings loaded from environment variables (and a local .env file, if any)."""

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv(override=False)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _first_env(*names: str, default: str) -> str:
    for name in names:
        value = os.getenv(name)
        if value is not None and value.strip() != "":
            return value.strip()
    return default


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 4000
    environment: str = "development"
    log_level: str = "INFO"
    seed_tasks: bool = True
    rpc_prefix: str = "/trpc"
    api_url: Optional[str] = None

    @property
    def base_url(self) -> str:
        return self.api_url or f"http://localhost:{self.port}"


def load_settings() -> Settings:
    port = _env_int("PORT", 4000)
    return Settings(
        host=_first_env("HOST", default="127.0.0.1"),
        port=port,
        environment=_first_env("TASKBOARD_ENV", "ENVIRONMENT", default="development"),
        log_level=_first_env("TASKBOARD_LOG_LEVEL", default="INFO").upper(),
        seed_tasks=_env_bool("TASKBOARD_SEED", True),
        api_url=_first_env("TASKBOARD_API_URL", default="") or None,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
