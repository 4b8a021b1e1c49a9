# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan: Ansible-style playbook resolver.

Turns a playbook YAML document into a flat, typed list of plays and tasks
ready for a runner.

Features:
    - include_tasks inlined in place, resolved relative to the including file
    - include_role inlined from <roles>/<name>/tasks/main.yml
    - Per-task provenance (the file each task was defined in)
    - Jinja2 rendering of task arguments for an execution layer

This package exposes the main CLI entry point and release metadata.
"""

from __future__ import annotations

from voidspan.release import __version__, __author__, __codename__

__all__ = [
    "__version__",
    "__author__",
    "__codename__",
]
