# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Protocol


class ProfileBackend(Protocol):
    """
    Owner of profile generations. Every method raises BackendError on failure.
    """

    async def set(self, profile_path: str, closure: str) -> None: ...

    async def rollback(self, profile_path: str) -> None: ...

    async def list_generations(self, profile_path: str) -> str: ...

    async def delete_generation(self, profile_path: str, generation_id: str) -> None: ...
