# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/deploy_activate/activation/generations.py

from __future__ import annotations

from .errors import GenerationParseError
from .models import Generation


def parse_generation_line(line: str) -> Generation:
    """
    Parse one entry of a generation listing.

    nix-env prints entries like ``   42   2024-01-01 10:00:00   (current)``;
    only the leading whitespace-delimited token is the identifier.
    """
    tokens = line.split()
    if not tokens:
        raise GenerationParseError(f"Expected to get ID from generation entry {line!r}")
    return Generation(
        id=tokens[0],
        line=line.strip(),
        current=tokens[-1] == "(current)",
    )


def last_generation(listing: str) -> Generation:
    """
    Return the most recent entry: the last line of the listing.

    A trailing blank line is not skipped, it is reported as malformed.
    """
    lines = listing.splitlines()
    if not lines:
        raise GenerationParseError("Expected to find a generation in list")
    return parse_generation_line(lines[-1])
