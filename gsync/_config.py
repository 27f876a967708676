"""Konfiguracja GoalSync — przez zmienne środowiskowe."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Settings:
    receiver_url: str
    rules: str | None
    cache_dir: Path
    rules_ttl: float
    poll_interval: float
    initial_delay: float


def get_settings() -> Settings:
    return Settings(
        receiver_url  = os.getenv("GOALSYNC_RECEIVER_URL", "http://localhost:19837"),
        rules         = os.getenv("GOALSYNC_RULES") or None,
        cache_dir     = Path(os.getenv("GOALSYNC_CACHE_DIR", str(Path.home() / ".cache" / "goalsync"))),
        rules_ttl     = float(os.getenv("GOALSYNC_RULES_TTL", "3600")),
        poll_interval = float(os.getenv("GOALSYNC_POLL_INTERVAL", "60")),
        initial_delay = float(os.getenv("GOALSYNC_INITIAL_DELAY", "5")),
    )
