# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Data Model

Resolved Play and Task objects handed to a runner.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Task:
    """A single resolved task."""

    name: str
    module: str
    args: Dict[str, Any]
    vars: Dict[str, Any] = field(default_factory=dict)
    # Raw, unevaluated loop expression (e.g. "{{ packages }}")
    loop: str = ""
    # File the task was textually defined in
    source: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        result: Dict[str, Any] = {
            "name": self.name,
            "module": self.module,
            "args": self.args,
            "vars": self.vars,
            "source": self.source,
        }
        if self.loop:
            result["loop"] = self.loop
        return result

    def __repr__(self) -> str:
        return f"Task(name={self.name!r}, module={self.module!r}, source={self.source!r})"


@dataclass(frozen=True)
class Play:
    """A named, host-scoped group of resolved tasks."""

    name: str
    hosts: str
    tasks: List[Task] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "name": self.name,
            "hosts": self.hosts,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    def __repr__(self) -> str:
        return f"Play(name={self.name!r}, hosts={self.hosts!r}, tasks={len(self.tasks)})"
