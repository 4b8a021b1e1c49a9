# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Main CLI entrypoint for voidspan.

Usage:
    voidspan --version
    voidspan run -p playbook.yml -r roles/
"""

import argparse
import platform
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from voidspan import __version__
from voidspan.config import ENV_PLAYBOOK, ENV_ROLES_PATH, RunConfig
from voidspan.display import Display
from voidspan.engine.errors import ExitCode, VoidspanError
from voidspan.engine.playbook import load_playbook
from voidspan.cli.report import print_plays


def get_version_string() -> str:
    """Generate a detailed version string."""
    python_version = platform.python_version()
    os_info = f"{platform.system()} {platform.release()}"
    return (
        f"voidspan {__version__}\n"
        f"  python: {python_version}\n"
        f"  platform: {os_info}"
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for voidspan."""
    parser = argparse.ArgumentParser(
        prog="voidspan",
        description="Resolve Ansible-style playbooks into flat task lists",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  voidspan run -p site.yml -r roles
  voidspan run -p site.yml -r roles --json
  voidspan run -p site.yml -r roles --render -e env=prod
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=get_version_string(),
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    run_parser = subparsers.add_parser(
        "run",
        help="Resolve a playbook and print its tasks",
        description="Resolve an Ansible-style playbook and print each play and its tasks",
    )

    run_parser.add_argument(
        "-p", "--playbook",
        dest="playbook",
        default=None,
        help=f"Path to the playbook file (env: {ENV_PLAYBOOK})",
    )

    run_parser.add_argument(
        "-r", "--roles-path",
        dest="roles_path",
        default=None,
        help=f"Directory containing roles (env: {ENV_ROLES_PATH})",
    )

    run_parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v, -vv, -vvv)",
    )

    run_parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output resolved plays as JSON",
    )

    run_parser.add_argument(
        "--render",
        action="store_true",
        help="Render task args with Jinja2 using the task's vars",
    )

    run_parser.add_argument(
        "-e", "--extra-vars",
        dest="extra_vars",
        action="append",
        default=[],
        help="Extra variables for --render (key=value, YAML/JSON or @file.yml)",
    )

    return parser


def parse_extra_vars(extra_vars_list: List[str]) -> dict:
    """Parse extra variables from command line."""
    result: dict = {}
    for item in extra_vars_list:
        if item.startswith('@'):
            # Load from file
            vars_file = Path(item[1:])
            if vars_file.exists():
                vars_data = yaml.safe_load(vars_file.read_text(encoding='utf-8')) or {}
                if isinstance(vars_data, dict):
                    result.update(vars_data)
        elif '=' in item:
            key, _, value = item.partition('=')
            result[key.strip()] = value.strip()
        else:
            # Try to parse as YAML/JSON
            try:
                vars_data = yaml.safe_load(item)
            except yaml.YAMLError:
                continue
            if isinstance(vars_data, dict):
                result.update(vars_data)

    return result


def run(config: RunConfig, display: Display) -> int:
    """Resolve the configured playbook and print it."""
    try:
        plays = load_playbook(config.playbook, config.roles_path, display)
        print_plays(plays, config)
    except VoidspanError as e:
        display.error(str(e))
        return int(e.exit_code)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return ExitCode.KEYBOARD_INTERRUPT

    return ExitCode.SUCCESS


def main(args: Optional[List[str]] = None) -> int:
    """Main entrypoint for voidspan CLI."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.command != "run":
        parser.print_help()
        return ExitCode.SUCCESS

    config = RunConfig.from_env().merge(
        playbook=parsed.playbook,
        roles_path=parsed.roles_path,
        verbosity=parsed.verbose,
        json_output=parsed.json_output,
        render=parsed.render,
        extra_vars=parse_extra_vars(parsed.extra_vars),
    )

    missing = config.missing()
    if missing:
        print(
            f"ERROR: required setting(s) not provided: {', '.join(missing)}",
            file=sys.stderr,
        )
        return ExitCode.USAGE_ERROR

    display = Display(verbosity=config.verbosity)
    return run(config, display)


if __name__ == "__main__":
    sys.exit(main())
