# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Playbook Resolver

Resolves YAML playbooks into Play objects with a flat task list, inlining
include_tasks files and include_role roles in document order.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from voidspan.display import Display
from voidspan.engine.errors import IncludeCycleError, ResolutionError, RoleError, ShapeError
from voidspan.engine.loader import decode_records, read_file
from voidspan.engine.models import Play, Task
from voidspan.engine.records import is_include_role, record_sequence, string_field
from voidspan.engine.roles import RoleResolver
from voidspan.engine.tasks import TaskResolver


class PlaybookResolver:
    """
    Resolve playbook data into Play objects.

    Resolution is all-or-nothing: any error aborts the whole playbook. The
    one tolerated malformation is a play whose 'tasks' field is not a list,
    which yields a play with no tasks.
    """

    def __init__(
        self,
        playbook_path: Union[str, Path],
        roles_path: Union[str, Path],
        display: Optional[Display] = None,
    ):
        self.playbook_path = str(playbook_path)
        self.roles_path = str(roles_path)
        self.display = display or Display()
        self._tasks = TaskResolver(self.roles_path, self.display)
        self._roles = RoleResolver(self.roles_path, self.display)

    def resolve(self, data: Union[bytes, str]) -> List[Play]:
        """
        Resolve playbook data.

        Args:
            data: Raw playbook YAML

        Returns:
            List of Play objects in document order

        Raises:
            DecodeError: If the playbook is not valid YAML
            ResolutionError: For any error in tasks, includes or roles
        """
        records = decode_records(data, "failed to parse YAML", file_path=self.playbook_path)
        return [self._resolve_play(record) for record in records]

    def _resolve_play(self, record: Dict[str, Any]) -> Play:
        """Resolve a single play record."""
        name = string_field(record, 'name')
        self.display.vv(f"resolving play {name!r}")

        task_records = record_sequence(record.get('tasks'))
        if task_records is None:
            task_records = []

        tasks = self._tasks.resolve(task_records, self.playbook_path)
        return Play(
            name=name,
            hosts=string_field(record, 'hosts'),
            tasks=self._inline_roles(tasks),
        )

    def _inline_roles(self, tasks: List[Task], active: Tuple[str, ...] = ()) -> List[Task]:
        """
        Replace include_role tasks with the tasks of the role they name.

        Role tasks are scanned again, so a role may include further roles.
        """
        resolved: List[Task] = []
        for task in tasks:
            if not is_include_role(task.module):
                resolved.append(task)
                continue

            role_name = string_field(task.args, 'name')
            if not role_name:
                raise ShapeError(
                    f"include_role task is missing 'name': {task.args!r}",
                    file_path=task.source,
                )
            if role_name in active:
                raise IncludeCycleError(list(active) + [role_name], file_path=task.source)

            try:
                role_tasks = self._roles.resolve(role_name)
                role_tasks = self._inline_roles(role_tasks, active + (role_name,))
            except ResolutionError as e:
                raise RoleError(role_name, e) from e

            resolved.extend(role_tasks)

        return resolved


def resolve_playbook(
    data: Union[bytes, str],
    playbook_path: Union[str, Path],
    roles_path: Union[str, Path],
    display: Optional[Display] = None,
) -> List[Play]:
    """Resolve playbook data read from playbook_path."""
    return PlaybookResolver(playbook_path, roles_path, display).resolve(data)


def load_playbook(
    playbook_path: Union[str, Path],
    roles_path: Union[str, Path],
    display: Optional[Display] = None,
) -> List[Play]:
    """Read and resolve a playbook file."""
    data = read_file(str(playbook_path), "failed to read playbook")
    return resolve_playbook(data, playbook_path, roles_path, display)
