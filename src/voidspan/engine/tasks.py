# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Task Resolver

Turns raw task records into typed Task objects, inlining include_tasks
directives recursively.
"""

import os
from typing import Any, Dict, List, Optional, Sequence, Tuple

from voidspan.display import Display
from voidspan.engine.errors import IncludeCycleError, ShapeError
from voidspan.engine.loader import decode_records, read_file
from voidspan.engine.models import Task
from voidspan.engine.records import (
    DirectiveKind,
    RawKind,
    directive_for,
    kind_of,
    mapping_field,
    string_field,
)


def _normalize(path: str) -> str:
    return os.path.normcase(os.path.abspath(path))


class TaskResolver:
    """
    Resolve task records into a flat, ordered list of Tasks.

    An include_tasks record is replaced in place by the tasks of the file it
    names, resolved relative to the directory of the file that contains the
    record. Each Task records that file as its source.
    """

    def __init__(self, roles_path: str, display: Optional[Display] = None):
        self.roles_path = roles_path
        self.display = display or Display()

    def resolve(
        self,
        records: Sequence[Dict[str, Any]],
        source_path: str,
        active: Tuple[str, ...] = (),
    ) -> List[Task]:
        """
        Resolve records read from source_path.

        Args:
            records: Raw task records in document order
            source_path: File the records were read from
            active: Normalized paths of the files currently being resolved
                further up the include chain

        Returns:
            List of Task objects

        Raises:
            ResolutionError: on any malformed record or broken include
        """
        active = active + (_normalize(source_path),)
        tasks: List[Task] = []

        for record in records:
            include_path = self._include_path(record, source_path)
            if include_path is not None:
                tasks.extend(self._include(include_path, source_path, active))
            else:
                tasks.append(self._build_task(record, source_path))

        return tasks

    def _include_path(self, record: Dict[str, Any], source_path: str) -> Optional[str]:
        """Return the include_tasks path of a record, or None if it has none."""
        include_keys = [
            key for key in record
            if directive_for(key) is DirectiveKind.INCLUDE_TASKS
        ]
        if not include_keys:
            return None

        if len(include_keys) > 1:
            raise ShapeError(
                f"task has more than one include_tasks directive: {', '.join(include_keys)}",
                file_path=source_path,
            )

        value = record[include_keys[0]]
        if kind_of(value) is not RawKind.STRING:
            raise ShapeError("include_tasks path must be a string", file_path=source_path)

        modules = _module_keys(record)
        if modules:
            raise ShapeError(
                f"include_tasks cannot be combined with module {modules[0]!r}",
                file_path=source_path,
            )

        return os.path.normpath(os.path.join(os.path.dirname(source_path), value))

    def _include(
        self,
        include_path: str,
        source_path: str,
        active: Tuple[str, ...],
    ) -> List[Task]:
        """Read, decode and resolve an included task file."""
        if _normalize(include_path) in active:
            raise IncludeCycleError(list(active) + [_normalize(include_path)], file_path=source_path)

        self.display.vvv(f"including tasks from {include_path}")

        data = read_file(include_path, f"failed to read included task file {include_path}")
        records = decode_records(data, f"failed to parse included task file {include_path}")
        return self.resolve(records, include_path, active)

    def _build_task(self, record: Dict[str, Any], source_path: str) -> Task:
        """Build a Task from a record that is not an include."""
        modules = _module_keys(record)
        if len(modules) > 1:
            raise ShapeError(
                f"task has more than one module: {', '.join(modules)}",
                file_path=source_path,
            )

        module = ""
        args: Dict[str, Any] = {}
        if modules:
            module = modules[0]
            value = record[module]
            if kind_of(value) is RawKind.MAPPING:
                args = dict(value)
            else:
                # Short form, e.g. "shell: echo hi"
                args = {"__value__": value}

        return Task(
            name=string_field(record, 'name'),
            module=module,
            args=args,
            vars=mapping_field(record, 'vars'),
            loop=string_field(record, 'loop'),
            source=source_path,
        )


def _module_keys(record: Dict[str, Any]) -> List[str]:
    """Keys of a record that name a module, in document order."""
    modules = []
    for key in record:
        directive = directive_for(key)
        # include_role is carried as a module and expanded by the play resolver
        if directive is None or directive is DirectiveKind.INCLUDE_ROLE:
            modules.append(key)
    return modules


def resolve_tasks(
    records: Sequence[Dict[str, Any]],
    source_path: str,
    roles_path: str,
) -> List[Task]:
    """Convenience function to resolve task records."""
    return TaskResolver(roles_path).resolve(records, source_path)
