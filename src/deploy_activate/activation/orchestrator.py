# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/deploy_activate/activation/orchestrator.py

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from .errors import BootstrapFailed, FilesystemError, SpawnError
from .generations import last_generation
from .models import ActivationOutcome, ActivationRequest, Generation, Outcome, Step
from ..profile.interface import ProfileBackend
from ..shell.runner import CommandRunner

from ..observers.dispatcher import EventBus
from ..observers.events import (
    new_ctx,
    ActivationStarted,
    ProfileSwitched,
    BootstrapStarted,
    BootstrapFinished,
    ProfileRemoved,
    ActivationHookStarted,
    ActivationHookFinished,
    RollbackStarted,
    GenerationDeleted,
    ActivationRerun,
    ActivationSummary,
)

log = logging.getLogger("deploy_activate")

PROFILE_ENV = "PROFILE"


class ActivationOrchestrator:
    """
    Drives one activation attempt to a terminal outcome.

    Order is fixed: switch profile, bootstrap (first creation only), activate,
    and roll back only when the activation hook fails with auto_rollback set.
    Errors in the switch and rollback steps propagate unchanged; a failed
    bootstrap is cleaned up and raised as BootstrapFailed. Hook failure in the
    activate step is the only failure reported as an outcome.
    """

    def __init__(
        self,
        backend: ProfileBackend,
        shell: CommandRunner,
        bus: Optional[EventBus] = None,
        run_id: Optional[str] = None,
    ):
        self.backend = backend
        self.shell = shell
        self.bus = bus or EventBus()
        self.run_id = run_id

    async def run(self, request: ActivationRequest) -> ActivationOutcome:
        ctx = new_ctx(request.profile_path, request.closure, run_id=self.run_id)
        outcome = ActivationOutcome()

        # must be read before `set` creates the path; a dangling link still counts
        existed = os.path.lexists(request.profile_path)
        self.bus.emit(ActivationStarted(profile_existed=existed, auto_rollback=request.auto_rollback, **ctx))

        log.info("Activating profile")
        await self._switch_profile(request, ctx)
        outcome.steps.append(Step.SWITCH_PROFILE)

        if request.bootstrap_command and not existed:
            await self._bootstrap(request, request.bootstrap_command, ctx)
            outcome.steps.append(Step.BOOTSTRAP)

        if request.activation_command:
            outcome.steps.append(Step.ACTIVATE)
            error = await self._activate(request, request.activation_command, ctx)
            if error is not None:
                if request.auto_rollback:
                    outcome.steps.append(Step.ROLLBACK)
                    outcome.deleted_generation = await self._rollback(
                        request, request.activation_command, error, ctx
                    )
                    outcome.status = Outcome.ROLLED_BACK
                else:
                    outcome.status = Outcome.FAILED
                outcome.reason = error

        self.bus.emit(ActivationSummary(status=outcome.status.value, reason=outcome.reason, **ctx))
        return outcome

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _switch_profile(self, request: ActivationRequest, ctx: Dict) -> None:
        await self.backend.set(request.profile_path, request.closure)
        self.bus.emit(ProfileSwitched(**ctx))

    async def _bootstrap(self, request: ActivationRequest, command: str, ctx: Dict) -> None:
        log.info("Running bootstrap command")
        self.bus.emit(BootstrapStarted(command=command, **ctx))

        returncode: Optional[int] = None
        try:
            result = await self.shell.run(
                command, env={PROFILE_ENV: request.profile_path}, discard_output=True
            )
            returncode = result.returncode
            error = None if result.ok else f"exit status {result.returncode}"
        except SpawnError as exc:
            error = str(exc)

        self.bus.emit(BootstrapFinished(ok=error is None, returncode=returncode, error=error, **ctx))
        if error is None:
            return

        log.error("Bootstrap command failed: %s", error)
        try:
            Path(request.profile_path).unlink()
        except OSError as exc:
            raise FilesystemError(f"could not remove {request.profile_path}: {exc}") from exc
        self.bus.emit(ProfileRemoved(**ctx))
        # TODO: delete the generation `set` just created once the backend can name it
        log.warning(
            "Removed %s; the generation created for %s is left in the profile history",
            request.profile_path,
            request.closure,
        )
        raise BootstrapFailed("Failed to execute bootstrap command", returncode=returncode)

    async def _activate(self, request: ActivationRequest, command: str, ctx: Dict) -> Optional[str]:
        """Run the activation hook; return a failure reason, or None on success."""
        log.info("Running activation command")
        self.bus.emit(ActivationHookStarted(command=command, **ctx))
        try:
            result = await self.shell.run(command, env={PROFILE_ENV: request.profile_path})
        except SpawnError as exc:
            self.bus.emit(ActivationHookFinished(ok=False, error=str(exc), **ctx))
            log.error("Activation command could not be started: %s", exc)
            return str(exc)

        self.bus.emit(ActivationHookFinished(ok=result.ok, returncode=result.returncode, **ctx))
        if result.ok:
            log.info("Activation succeeded")
            return None
        log.error("Activation command failed with exit status %s", result.returncode)
        return f"activation command exited with status {result.returncode}"

    async def _rollback(
        self, request: ActivationRequest, command: str, reason: str, ctx: Dict
    ) -> Generation:
        self.bus.emit(RollbackStarted(reason=reason, **ctx))
        log.warning("Rolling back %s", request.profile_path)

        await self.backend.rollback(request.profile_path)

        listing = await self.backend.list_generations(request.profile_path)
        generation = last_generation(listing)

        log.info("Removing generation entry %s", generation.line)
        log.warning("Removing generation by ID %s", generation.id)
        if generation.current:
            log.warning("Generation %s is still marked (current) after rollback", generation.id)
        await self.backend.delete_generation(request.profile_path, generation.id)
        self.bus.emit(GenerationDeleted(
            generation_id=generation.id, entry=generation.line, was_current=generation.current, **ctx
        ))

        # Re-run against the rolled-back profile. PROFILE is not exported here
        # and the exit status does not change the outcome.
        result = await self.shell.run(command)
        self.bus.emit(ActivationRerun(returncode=result.returncode, **ctx))
        if not result.ok:
            log.warning("Activation re-run after rollback exited with status %s", result.returncode)
        else:
            log.debug("Activation re-run after rollback exited with status 0")
        return generation


async def activate(
    request: ActivationRequest,
    backend: ProfileBackend,
    shell: CommandRunner,
    observers: Optional[List] = None,
    run_id: Optional[str] = None,
) -> ActivationOutcome:
    """
    Run a single activation attempt. Emits observer events if observers are provided.
    """
    orchestrator = ActivationOrchestrator(backend, shell, bus=EventBus(observers or []), run_id=run_id)
    return await orchestrator.run(request)
