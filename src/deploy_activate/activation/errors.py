# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/deploy_activate/activation/errors.py


class ActivationError(RuntimeError):
    """Base class for anything that aborts an activation attempt."""


class BackendError(ActivationError):
    """Profile backend switch/rollback/list/delete failed."""


class SpawnError(ActivationError):
    """A command could not be launched at all."""


class HookFailure(ActivationError):
    """A hook command launched but exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class BootstrapFailed(HookFailure):
    """Raised after a failed bootstrap hook has been cleaned up."""


class GenerationParseError(ActivationError):
    """Generation listing was empty or malformed."""


class FilesystemError(ActivationError):
    """Cleanup of the profile path failed."""
