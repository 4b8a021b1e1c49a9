# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Configuration

Settings for a `voidspan run` invocation.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional

# Environment variables consulted when a flag is not given
ENV_PLAYBOOK = "VOIDSPAN_PLAYBOOK"
ENV_ROLES_PATH = "VOIDSPAN_ROLES_PATH"


@dataclass
class RunConfig:
    """
    Configuration for resolving and printing a playbook.

    Attributes:
        playbook: Path to the playbook file
        roles_path: Directory containing roles (<roles_path>/<name>/tasks/main.yml)
        verbosity: -v count; 1 shows task sources, 3 traces includes and roles
        json_output: Print resolved plays as JSON
        render: Show task args rendered with the task's vars
        extra_vars: Variables available when rendering, below task vars
    """

    playbook: Optional[str] = None
    roles_path: Optional[str] = None
    verbosity: int = 0
    json_output: bool = False
    render: bool = False
    extra_vars: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RunConfig":
        """Build a config from VOIDSPAN_* environment variables."""
        if environ is None:
            environ = os.environ
        return cls(
            playbook=environ.get(ENV_PLAYBOOK) or None,
            roles_path=environ.get(ENV_ROLES_PATH) or None,
        )

    def merge(self, **overrides: Any) -> "RunConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def missing(self) -> list:
        """Names of required settings that are unset."""
        missing = []
        if not self.playbook:
            missing.append("playbook")
        if not self.roles_path:
            missing.append("roles-path")
        return missing
