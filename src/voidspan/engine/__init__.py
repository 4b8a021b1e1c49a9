# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Engine Module

Resolution of playbooks, task files and roles into Play and Task objects.
"""

from voidspan.engine.models import Play, Task
from voidspan.engine.playbook import PlaybookResolver, load_playbook, resolve_playbook
from voidspan.engine.roles import RoleResolver, resolve_role_tasks
from voidspan.engine.tasks import TaskResolver, resolve_tasks
from voidspan.engine.templating import TemplateEngine, render_fields
from voidspan.engine.errors import (
    VoidspanError,
    ResolutionError,
    DecodeError,
    ShapeError,
    TaskFileError,
    IncludeCycleError,
    RoleError,
    TemplateError,
)

__all__ = [
    'Play',
    'Task',
    'PlaybookResolver',
    'load_playbook',
    'resolve_playbook',
    'RoleResolver',
    'resolve_role_tasks',
    'TaskResolver',
    'resolve_tasks',
    'TemplateEngine',
    'render_fields',
    'VoidspanError',
    'ResolutionError',
    'DecodeError',
    'ShapeError',
    'TaskFileError',
    'IncludeCycleError',
    'RoleError',
    'TemplateError',
]
