# src/deploy_activate/observers/events.py

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional
from datetime import datetime, timezone
import uuid


# ---------------------------------------------------------------------
# Base context and helper
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BaseEvent:
    ts: str           # ISO timestamp
    run_id: str       # correlates all events in a single activation attempt
    profile: str      # profile path being activated
    closure: str

    def dict(self) -> Dict[str, Any]:
        return asdict(self)


def new_ctx(profile: str, closure: str, run_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "run_id": run_id or str(uuid.uuid4()),
        "profile": profile,
        "closure": closure,
    }


# ---------------------------------------------------------------------
# Profile switch
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ActivationStarted(BaseEvent):
    profile_existed: bool
    auto_rollback: bool

@dataclass(frozen=True)
class ProfileSwitched(BaseEvent):
    pass


# ---------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class BootstrapStarted(BaseEvent):
    command: str

@dataclass(frozen=True)
class BootstrapFinished(BaseEvent):
    ok: bool
    returncode: Optional[int] = None
    error: Optional[str] = None

@dataclass(frozen=True)
class ProfileRemoved(BaseEvent):
    pass


# ---------------------------------------------------------------------
# Activation hook
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ActivationHookStarted(BaseEvent):
    command: str

@dataclass(frozen=True)
class ActivationHookFinished(BaseEvent):
    ok: bool
    returncode: Optional[int] = None
    error: Optional[str] = None


# ---------------------------------------------------------------------
# Rollback
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class RollbackStarted(BaseEvent):
    reason: str

@dataclass(frozen=True)
class GenerationDeleted(BaseEvent):
    generation_id: str
    entry: str
    was_current: bool = False

@dataclass(frozen=True)
class ActivationRerun(BaseEvent):
    returncode: int


# ---------------------------------------------------------------------
# Terminal
# ---------------------------------------------------------------------
@dataclass(frozen=True)
class ActivationSummary(BaseEvent):
    status: str
    reason: Optional[str] = None
