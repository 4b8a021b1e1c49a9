# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Role Resolver

Loads a role's tasks from <roles_path>/<role_name>/tasks/main.yml.
"""

import os
from typing import List, Optional

from voidspan.display import Display
from voidspan.engine.loader import decode_records, read_file
from voidspan.engine.models import Task
from voidspan.engine.tasks import TaskResolver


class RoleResolver:
    """
    Resolve a role name into its tasks.

    Only tasks/main.yml is read; role defaults, vars, handlers and metadata
    are not consulted. Includes inside the role resolve relative to the
    role's own tasks directory.
    """

    def __init__(self, roles_path: str, display: Optional[Display] = None):
        self.roles_path = roles_path
        self.display = display or Display()
        self._tasks = TaskResolver(roles_path, self.display)

    def tasks_path(self, role_name: str) -> str:
        """Return the path of a role's task file."""
        return os.path.join(self.roles_path, role_name, "tasks", "main.yml")

    def resolve(self, role_name: str) -> List[Task]:
        """
        Load and resolve a role's tasks.

        Raises:
            TaskFileError: if tasks/main.yml cannot be read
            DecodeError: if tasks/main.yml is not a list of task mappings
            ResolutionError: for errors in the role's tasks or includes
        """
        tasks_path = self.tasks_path(role_name)
        self.display.vvv(f"loading role {role_name} from {tasks_path}")

        data = read_file(tasks_path, "failed to read role tasks")
        records = decode_records(data, "failed to parse tasks YAML", file_path=tasks_path)
        return self._tasks.resolve(records, tasks_path)


def resolve_role_tasks(role_name: str, roles_path: str) -> List[Task]:
    """Convenience function to resolve a role's tasks."""
    return RoleResolver(roles_path).resolve(role_name)
