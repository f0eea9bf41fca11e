# src/deploy_activate/config/settings.py

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import os

from ..logging.log import parse_level

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_level: int
    log_dir: Path
    nix_env: str
    shell: str
    events_file: bool


def load_settings() -> Settings:
    # DEPLOY_LOG defaults to "info"; everything else can be overridden via env
    return Settings(
        log_level=parse_level(os.getenv("DEPLOY_LOG", "info")),
        log_dir=Path(os.getenv("DEPLOY_ACTIVATE_LOG_DIR") or Path.home() / ".deploy-activate" / "logs"),
        nix_env=os.getenv("DEPLOY_ACTIVATE_NIX_ENV", "nix-env"),
        shell=os.getenv("DEPLOY_ACTIVATE_SHELL", "bash"),
        events_file=os.getenv("DEPLOY_ACTIVATE_EVENTS", "").strip().lower() in _TRUTHY,
    )
