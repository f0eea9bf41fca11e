# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Outcome(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    ROLLED_BACK = "ROLLED_BACK"


class Step(str, Enum):
    SWITCH_PROFILE = "switch-profile"
    BOOTSTRAP = "bootstrap"
    ACTIVATE = "activate"
    ROLLBACK = "rollback"


@dataclass(frozen=True)
class ActivationRequest:
    """
    Input to exactly one activation attempt.
    """

    profile_path: str
    closure: str
    bootstrap_command: Optional[str] = None   # only on first creation of profile_path
    activation_command: Optional[str] = None  # every activation
    auto_rollback: bool = False


@dataclass(frozen=True)
class Generation:
    id: str
    line: str
    current: bool = False


@dataclass
class ActivationOutcome:
    status: Outcome = Outcome.SUCCESS
    reason: Optional[str] = None
    steps: List[Step] = field(default_factory=list)
    deleted_generation: Optional[Generation] = None

    @property
    def ok(self) -> bool:
        return self.status is Outcome.SUCCESS

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def summary(self) -> str:
        trail = " -> ".join(s.value for s in self.steps) or "-"
        if self.reason:
            return f"{self.status.value}: {self.reason} (steps: {trail})"
        return f"{self.status.value} (steps: {trail})"
