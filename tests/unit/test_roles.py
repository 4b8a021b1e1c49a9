"""
Unit tests for role task loading.
"""

import os
from pathlib import Path

import pytest

from voidspan.engine.errors import DecodeError, TaskFileError
from voidspan.engine.models import Task
from voidspan.engine.roles import RoleResolver, resolve_role_tasks


def _write_role(roles_dir: Path, name: str, content: str) -> Path:
    tasks_dir = roles_dir / name / "tasks"
    tasks_dir.mkdir(parents=True)
    main = tasks_dir / "main.yml"
    main.write_text(content)
    return main


class TestRoleResolver:
    """Tests for resolving a role's tasks/main.yml."""

    def test_valid_role_task(self, tmp_path: Path):
        main = _write_role(tmp_path, "role1", """
---
- name: role1 | hello
  ansible.builtin.debug:
    msg: hi from role1
""")

        tasks = resolve_role_tasks("role1", str(tmp_path))

        assert tasks == [Task(
            name="role1 | hello",
            module="ansible.builtin.debug",
            args={"msg": "hi from role1"},
            vars={},
            loop="",
            source=str(main),
        )]

    def test_tasks_path(self):
        resolver = RoleResolver("roles")
        assert resolver.tasks_path("web") == os.path.join("roles", "web", "tasks", "main.yml")

    def test_missing_role(self, tmp_path: Path):
        with pytest.raises(TaskFileError) as exc_info:
            resolve_role_tasks("nonexistent", str(tmp_path))

        assert "failed to read role tasks" in str(exc_info.value)
        assert "nonexistent" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path: Path):
        _write_role(tmp_path, "broken", "- name: broken\n  debug: {msg: [\n")

        with pytest.raises(DecodeError) as exc_info:
            resolve_role_tasks("broken", str(tmp_path))

        assert "failed to parse tasks YAML" in str(exc_info.value)

    def test_include_inside_role_is_relative_to_role(self, tmp_path: Path):
        main = _write_role(tmp_path, "web", """
- name: web | start
  debug: {msg: start}
- include_tasks: install.yml
""")
        (main.parent / "install.yml").write_text("""
- name: web | install
  package:
    name: nginx
""")

        tasks = resolve_role_tasks("web", str(tmp_path))

        assert [t.name for t in tasks] == ["web | start", "web | install"]
        assert tasks[0].source == str(main)
        assert tasks[1].source == str(main.parent / "install.yml")
