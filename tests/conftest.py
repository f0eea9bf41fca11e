import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Set

import pytest

from deploy_activate.activation.errors import BackendError, SpawnError
from deploy_activate.shell.runner import CommandResult

# --------- Test doubles ----------

@dataclass
class Call:
    op: str
    args: tuple


class FakeBackend:
    """In-memory profile backend. `set` creates the profile path like nix-env does."""
    def __init__(
        self,
        listing: str = "  41   2023-12-31\n  42   2024-01-01\n",
        fail_on: Optional[str] = None,
        creates_path: bool = True,
        journal: Optional[List[Call]] = None,
    ):
        self.calls: List[Call] = []
        self.listing = listing
        self.fail_on = fail_on
        self.creates_path = creates_path
        self.journal = journal if journal is not None else []

    def _record(self, op, *args):
        self.calls.append(Call(op, args))
        self.journal.append(Call(op, args))
        if op == self.fail_on:
            raise BackendError(f"{op} exploded")

    async def set(self, profile_path, closure):
        self._record("set", profile_path, closure)
        if self.creates_path:
            Path(profile_path).write_text(closure)

    async def rollback(self, profile_path):
        self._record("rollback", profile_path)

    async def list_generations(self, profile_path):
        self._record("list_generations", profile_path)
        return self.listing

    async def delete_generation(self, profile_path, generation_id):
        self._record("delete_generation", profile_path, generation_id)

    def ops(self):
        return [c.op for c in self.calls]


class FakeShell:
    """Evaluates only `exit N` commands; anything listed in `unspawnable` cannot start.

    Each call records (command, env, output mode) where the mode is
    "discard", "capture" or "inherit".
    """
    def __init__(self, unspawnable: Optional[Set[str]] = None, journal: Optional[List[Call]] = None):
        self.calls: List[Call] = []
        self.unspawnable = unspawnable or set()
        self.journal = journal if journal is not None else []

    async def run(self, command, env=None, capture_output=False, discard_output=False):
        mode = "discard" if discard_output else "capture" if capture_output else "inherit"
        call = Call("run", (command, dict(env) if env else None, mode))
        self.calls.append(call)
        self.journal.append(call)
        if command in self.unspawnable:
            raise SpawnError(f"cannot spawn {command}")
        rc = int(command.split()[-1]) if command.startswith("exit") else 0
        return CommandResult(returncode=rc, stdout="noise" if capture_output else "")


class Capture:
    def __init__(self): self.events = []
    def notify(self, ev): self.events.append(ev)

    def kinds(self):
        return [e.__class__.__name__ for e in self.events]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def shell():
    return FakeShell()


@pytest.fixture
def capture():
    return Capture()


@pytest.fixture
def profile(tmp_path: Path) -> str:
    return str(tmp_path / "profiles" / "system")


@pytest.fixture(autouse=True)
def _profiles_dir(tmp_path: Path):
    (tmp_path / "profiles").mkdir()


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    logger = logging.getLogger("deploy_activate")
    for h in list(logger.handlers):
        h.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
