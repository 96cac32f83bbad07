from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    rules: Optional[tuple[str, ...]]
    config_path: Optional[str]
    log_level: str
    max_workers: int


def get_settings() -> Settings:
    """
    Load process-level defaults from environment variables (a `.env` file is honoured).

      LABSTYLE_RULES        comma-separated rule names to enable (default: all)
      LABSTYLE_CONFIG       path to a YAML style config
      LABSTYLE_LOG_LEVEL    logging level name (default: WARNING)
      LABSTYLE_MAX_WORKERS  documents checked in parallel (default: 1)
    """
    raw_rules = os.getenv("LABSTYLE_RULES", "").strip()
    rules = tuple(name.strip() for name in raw_rules.split(",") if name.strip()) if raw_rules else None

    return Settings(
        rules=rules,
        config_path=os.getenv("LABSTYLE_CONFIG", "").strip() or None,
        log_level=os.getenv("LABSTYLE_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
        max_workers=_int_env("LABSTYLE_MAX_WORKERS", 1),
    )


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from None
    if parsed < 1:
        raise ValueError(f"{name} must be at least 1, got {parsed}.")
    return parsed
