# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/deploy_activate/shell/runner.py

from __future__ import annotations

import asyncio
import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from ..activation.errors import SpawnError

log = logging.getLogger("deploy_activate")


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    async def run(
        self,
        command: str,
        env: Optional[Mapping[str, str]] = None,
        capture_output: bool = False,
        discard_output: bool = False,
    ) -> CommandResult: ...


class ShellRunner(CommandRunner):
    """
    Runs hook commands through `<shell> -c`.

    `env` is layered over the inherited environment. Output goes to
    /dev/null with `discard_output`, is piped back with `capture_output`,
    and otherwise the command writes straight to our stdout/stderr.
    """

    def __init__(self, shell: str = "bash"):
        self.shell = shell

    async def run(
        self,
        command: str,
        env: Optional[Mapping[str, str]] = None,
        capture_output: bool = False,
        discard_output: bool = False,
    ) -> CommandResult:
        full_env = None
        if env:
            full_env = {**os.environ, **env}

        log.debug("$ %s -c %s", self.shell, command)
        if discard_output:
            pipe = subprocess.DEVNULL
        elif capture_output:
            pipe = subprocess.PIPE
        else:
            pipe = None
        try:
            proc = await asyncio.create_subprocess_exec(
                self.shell,
                "-c",
                command,
                stdout=pipe,
                stderr=pipe,
                env=full_env,
            )
        except OSError as exc:
            raise SpawnError(f"could not spawn {self.shell!r} for {command!r}: {exc}") from exc

        stdout, stderr = await proc.communicate()
        return CommandResult(
            returncode=proc.returncode,
            stdout=(stdout or b"").decode("utf-8", "replace"),
            stderr=(stderr or b"").decode("utf-8", "replace"),
        )
