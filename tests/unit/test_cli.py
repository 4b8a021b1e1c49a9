"""Unit tests for the CLI, configuration and console output."""

import io
import json
from pathlib import Path

import pytest

from voidspan import __version__
from voidspan.cli import main
from voidspan.config import RunConfig
from voidspan.display import Display


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A playbook with an inline task, an include and a role."""
    (tmp_path / "roles" / "web" / "tasks").mkdir(parents=True)
    (tmp_path / "roles" / "web" / "tasks" / "main.yml").write_text("""
- name: web | install
  package:
    name: "{{ pkg }}"
  vars:
    pkg: nginx
""")
    (tmp_path / "extra.yml").write_text("""
- name: extra | shell
  shell: echo extra
  loop: "{{ things }}"
""")
    (tmp_path / "site.yml").write_text("""
- name: site
  hosts: all
  tasks:
    - name: hello
      debug:
        msg: "hello {{ who | default('world') }}"
    - include_tasks: extra.yml
    - include_role:
        name: web
""")
    return tmp_path


class TestMainCLI:
    """Tests for main CLI."""

    def test_create_parser(self):
        parser = main.create_parser()
        assert parser.prog == "voidspan"

    def test_version_string(self):
        assert __version__ in main.get_version_string()

    def test_main_no_args_shows_help(self, capsys):
        assert main.main([]) == 0
        assert "voidspan" in capsys.readouterr().out

    def test_run_prints_plays(self, project: Path, capsys):
        result = main.main([
            "run", "-p", str(project / "site.yml"), "-r", str(project / "roles"),
        ])

        assert result == 0
        out = capsys.readouterr().out
        assert "▶ Play: site (hosts: all)" in out
        assert "▸ Task: hello" in out
        assert "Module: debug" in out
        assert "▸ Task: extra | shell" in out
        assert "Loop: {{ things }}" in out
        assert "▸ Task: web | install" in out
        assert "Source:" not in out

    def test_run_verbose_shows_source(self, project: Path, capsys):
        main.main(["run", "-p", str(project / "site.yml"), "-r", str(project / "roles"), "-v"])

        out = capsys.readouterr().out
        assert f"Source: {project / 'extra.yml'}" in out

    def test_run_json(self, project: Path, capsys):
        result = main.main([
            "run", "-p", str(project / "site.yml"), "-r", str(project / "roles"), "--json",
        ])

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert data[0]["hosts"] == "all"
        assert [t["name"] for t in data[0]["tasks"]] == ["hello", "extra | shell", "web | install"]
        assert data[0]["tasks"][1]["args"] == {"__value__": "echo extra"}

    def test_run_render(self, project: Path, capsys):
        main.main([
            "run", "-p", str(project / "site.yml"), "-r", str(project / "roles"),
            "--json", "--render", "-e", "who=voidspan",
        ])

        tasks = json.loads(capsys.readouterr().out)[0]["tasks"]
        assert tasks[0]["args"] == {"msg": "hello voidspan"}
        assert tasks[2]["args"] == {"name": "nginx"}

    def test_run_error_exits_non_zero(self, project: Path, capsys):
        result = main.main(["run", "-p", str(project / "site.yml"), "-r", str(project / "nowhere")])

        assert result == 3
        captured = capsys.readouterr()
        assert "failed to load role 'web'" in captured.err
        assert captured.out == ""

    def test_run_missing_playbook_file(self, tmp_path: Path, capsys):
        result = main.main(["run", "-p", str(tmp_path / "missing.yml"), "-r", str(tmp_path)])

        assert result != 0
        assert "failed to read playbook" in capsys.readouterr().err

    def test_run_requires_settings(self, monkeypatch, capsys):
        monkeypatch.delenv("VOIDSPAN_PLAYBOOK", raising=False)
        monkeypatch.delenv("VOIDSPAN_ROLES_PATH", raising=False)

        assert main.main(["run"]) == 2
        assert "playbook, roles-path" in capsys.readouterr().err

    def test_run_uses_environment(self, project: Path, monkeypatch, capsys):
        monkeypatch.setenv("VOIDSPAN_PLAYBOOK", str(project / "site.yml"))
        monkeypatch.setenv("VOIDSPAN_ROLES_PATH", str(project / "roles"))

        assert main.main(["run"]) == 0
        assert "▶ Play: site" in capsys.readouterr().out


class TestExtraVars:

    def test_key_value(self):
        assert main.parse_extra_vars(["a=1", "b = two"]) == {"a": "1", "b": "two"}

    def test_json(self):
        assert main.parse_extra_vars(['{"a": [1, 2]}']) == {"a": [1, 2]}

    def test_file(self, tmp_path: Path):
        vars_file = tmp_path / "vars.yml"
        vars_file.write_text("region: eu\n")
        assert main.parse_extra_vars([f"@{vars_file}"]) == {"region": "eu"}


class TestRunConfig:

    def test_from_env(self):
        config = RunConfig.from_env({"VOIDSPAN_PLAYBOOK": "site.yml", "VOIDSPAN_ROLES_PATH": ""})
        assert config.playbook == "site.yml"
        assert config.roles_path is None
        assert config.missing() == ["roles-path"]

    def test_merge_skips_none(self):
        config = RunConfig(playbook="a.yml").merge(playbook=None, roles_path="roles")
        assert config.playbook == "a.yml"
        assert config.roles_path == "roles"
        assert config.missing() == []


class TestDisplay:

    def test_verbosity_gating(self, monkeypatch):
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        stream = io.StringIO()
        display = Display(verbosity=1, stream=stream)

        display.v("shown")
        display.vvv("hidden")

        assert stream.getvalue() == "shown\n"

    def test_error_without_color(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "1")
        stream = io.StringIO()
        Display(stream=stream).error("boom")
        assert stream.getvalue() == "ERROR: boom\n"

    def test_force_color(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("FORCE_COLOR", "1")
        stream = io.StringIO()
        Display(stream=stream).warning("careful")
        assert "\033[" in stream.getvalue()
        assert "[WARNING]: careful" in stream.getvalue()
