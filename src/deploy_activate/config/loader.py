# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/deploy_activate/config/loader.py

import logging
import os
import re
import yaml
from pathlib import Path
from .models import ActivationConfig

log = logging.getLogger("deploy_activate")


_PLACEHOLDER = re.compile(r"\$\{(\w+)\}")


def _expand_placeholders(raw: str) -> str:
    """Replace ${NAME} with its env value. Bare $NAME and unknown names stay as written."""
    return _PLACEHOLDER.sub(lambda m: os.environ.get(m.group(1), m.group(0)), raw)


def _load_yaml(path: Path) -> dict:
    """Load a YAML file, expanding ${ENV_VAR} references."""
    raw = path.read_text()
    expanded = _expand_placeholders(raw)
    try:
        return yaml.safe_load(expanded) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid YAML: {exc}") from exc


def load_config(path: str | Path) -> ActivationConfig:
    """
    Load and validate an activation YAML file.

    Example::

        profile_path: /nix/var/nix/profiles/system
        closure: /nix/store/...-nixos-system
        activate_cmd: $PROFILE/bin/switch-to-configuration switch
        auto_rollback: true

    Only ``${ENV_VAR}`` placeholders are resolved at load time. Bare
    ``$PROFILE`` is always left for the hook's shell, which gets it from the
    activation itself.
    """
    path = Path(path)
    log.debug("Loading activation config from %s", path)
    data = _load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return ActivationConfig.model_validate(data)
