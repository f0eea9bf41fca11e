# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/deploy_activate/profile/nix_env.py

from __future__ import annotations

import asyncio
import logging
import subprocess
from typing import List

from .interface import ProfileBackend
from ..activation.errors import BackendError

log = logging.getLogger("deploy_activate")


class NixEnvBackend(ProfileBackend):
    """
    A thin wrapper around the `nix-env` CLI.
    - One subprocess per operation, always awaited.
    - Testable by pointing `binary` at a fake executable.
    """

    def __init__(self, binary: str = "nix-env"):
        self.binary = binary

    # ------------------------- internal helpers -------------------------

    def _base(self, profile_path: str) -> List[str]:
        return [self.binary, "-p", profile_path]

    async def _run(self, argv: List[str], capture: bool = False, quiet: bool = True) -> bytes:
        """
        Run nix-env and wait for it.
        If `capture=True`, stdout is returned. Otherwise it is discarded.
        If `quiet=False`, stderr is inherited so the operator sees it.
        """
        log.debug("$ %s", " ".join(argv))
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                stdout=subprocess.PIPE if capture else subprocess.DEVNULL,
                stderr=subprocess.PIPE if quiet else None,
            )
        except OSError as exc:
            raise BackendError(f"could not run {argv[0]}: {exc}") from exc

        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            detail = (stderr or b"").decode("utf-8", "replace").strip()
            raise BackendError(f"{self.binary} failed (rc={proc.returncode}) for {argv!r}\n{detail}".rstrip())
        return stdout or b""

    # ------------------------- ProfileBackend methods -------------------------

    async def set(self, profile_path: str, closure: str) -> None:
        await self._run(self._base(profile_path) + ["--set", closure], quiet=False)

    async def rollback(self, profile_path: str) -> None:
        await self._run(self._base(profile_path) + ["--rollback"])

    async def list_generations(self, profile_path: str) -> str:
        out = await self._run(self._base(profile_path) + ["--list-generations"], capture=True)
        try:
            return out.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BackendError(f"generation listing for {profile_path} is not valid UTF-8") from exc

    async def delete_generation(self, profile_path: str, generation_id: str) -> None:
        await self._run(self._base(profile_path) + ["--delete-generations", generation_id])
