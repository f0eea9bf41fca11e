# src/deploy_activate/config/models.py

from typing import Optional
from pydantic import BaseModel, ConfigDict

from ..activation.models import ActivationRequest


class ActivationConfig(BaseModel):
    """Optional YAML file holding the same values the command line accepts."""

    model_config = ConfigDict(extra="forbid")

    profile_path: Optional[str] = None
    closure: Optional[str] = None
    activate_cmd: Optional[str] = None      # run on every activation
    bootstrap_cmd: Optional[str] = None     # run on first creation only
    auto_rollback: bool = False

    def merged(self, **overrides) -> "ActivationConfig":
        """Return a copy where every override that is not None wins."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ActivationConfig.model_validate(data)

    def to_request(self) -> ActivationRequest:
        if not self.profile_path or not self.closure:
            raise ValueError("both profile_path and closure are required")
        return ActivationRequest(
            profile_path=self.profile_path,
            closure=self.closure,
            bootstrap_command=self.bootstrap_cmd or None,
            activation_command=self.activate_cmd or None,
            auto_rollback=self.auto_rollback,
        )
