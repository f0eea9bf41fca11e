# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/deploy_activate/cli/app.py
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer

from deploy_activate import __version__
from deploy_activate.activation.errors import ActivationError
from deploy_activate.activation.models import Outcome
from deploy_activate.activation.orchestrator import activate as run_activation
from deploy_activate.config.loader import load_config
from deploy_activate.config.models import ActivationConfig
from deploy_activate.config.settings import load_settings
from deploy_activate.logging.log import init_logging
from deploy_activate.observers.console import ConsoleObserver
from deploy_activate.observers.jsonfile import JsonFileObserver
from deploy_activate.observers.logger import LoggerObserver
from deploy_activate.profile.nix_env import NixEnvBackend
from deploy_activate.shell.runner import ShellRunner


# ------------------------------------------------------------------------------
# CLI setup
# ------------------------------------------------------------------------------

app = typer.Typer(help="Activation portion of the deploy tool", add_completion=False)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"deploy-activate {__version__}")
        raise typer.Exit()


def resolve_request_config(
    config_file: Optional[Path],
    *,
    profile_path: Optional[str],
    closure: Optional[str],
    activate_cmd: Optional[str],
    bootstrap_cmd: Optional[str],
    auto_rollback: bool,
) -> ActivationConfig:
    """
    Merge the optional config file with command line values.

    Rules:
    - No --config → command line only
    - Explicit command line values override the file
    - --auto-rollback can only switch rollback on, never off
    """
    base = ActivationConfig()
    if config_file is not None:
        try:
            base = load_config(config_file)
        except (OSError, ValueError) as exc:
            raise typer.BadParameter(f"{config_file}: {exc}", param_hint="--config")

    cfg = base.merged(
        profile_path=profile_path,
        closure=closure,
        activate_cmd=activate_cmd,
        bootstrap_cmd=bootstrap_cmd,
        auto_rollback=True if auto_rollback else None,
    )
    if not cfg.profile_path or not cfg.closure:
        raise typer.BadParameter("PROFILE_PATH and CLOSURE are required (on the command line or in --config)")
    return cfg


# ------------------------------------------------------------------------------
# Command
# ------------------------------------------------------------------------------

@app.command()
def activate(
    profile_path: Optional[str] = typer.Argument(None, help="Profile to point at the closure"),
    closure: Optional[str] = typer.Argument(None, help="Closure to activate"),
    activate_cmd: Optional[str] = typer.Option(None, "--activate-cmd", help="Command for activating the given profile"),
    bootstrap_cmd: Optional[str] = typer.Option(None, "--bootstrap-cmd", help="Command for bootstrapping"),
    auto_rollback: bool = typer.Option(False, "--auto-rollback", help="Auto rollback if failure"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with activation settings"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging and per-event console output"),
    events_file: bool = typer.Option(False, "--events-file", help="Write lifecycle events as JSONL next to the log"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """
    Point PROFILE_PATH at CLOSURE, run the hooks and roll back on failure.
    """
    cfg = resolve_request_config(
        config_file,
        profile_path=profile_path,
        closure=closure,
        activate_cmd=activate_cmd,
        bootstrap_cmd=bootstrap_cmd,
        auto_rollback=auto_rollback,
    )
    request = cfg.to_request()

    settings = load_settings()
    logger, run_id, log_path = init_logging(
        base_dir=settings.log_dir, level=settings.log_level, verbose=verbose
    )

    observers = [LoggerObserver(logger)]
    if verbose:
        observers.append(ConsoleObserver())
    if events_file or settings.events_file:
        observers.append(JsonFileObserver(settings.log_dir / f"{run_id}.jsonl"))

    backend = NixEnvBackend(settings.nix_env)
    shell = ShellRunner(settings.shell)

    try:
        outcome = asyncio.run(
            run_activation(request, backend, shell, observers=observers, run_id=run_id)
        )
    except ActivationError as exc:
        logger.error("Activation aborted: %s", exc)
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=1)

    if outcome.status is Outcome.ROLLED_BACK:
        logger.error("Failed to execute activation command, rolled back (%s)", outcome.reason)
    elif outcome.status is Outcome.FAILED:
        logger.error("Failed to execute activation command (%s)", outcome.reason)
    logger.debug(outcome.summary())
    logger.debug(f"log_file={log_path}")

    raise typer.Exit(code=outcome.exit_code)


if __name__ == "__main__":
    app()
