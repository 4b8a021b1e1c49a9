# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Console reporting of resolved plays.
"""

import json
import sys
from typing import Any, Dict, List, Optional, TextIO

from voidspan.config import RunConfig
from voidspan.engine.models import Play, Task
from voidspan.engine.templating import render_fields


def task_args(task: Task, config: RunConfig) -> Dict[str, Any]:
    """Return a task's args, rendered if the config asks for it."""
    if not config.render:
        return task.args
    scope = {**config.extra_vars, **task.vars}
    return render_fields(task.args, scope)


def print_plays(plays: List[Play], config: RunConfig, stream: Optional[TextIO] = None) -> None:
    """
    Print resolved plays.

    Raises:
        TemplateError: if --render is set and a task's args fail to render
    """
    out = stream or sys.stdout

    if config.json_output:
        data = []
        for play in plays:
            play_data = play.to_dict()
            play_data["tasks"] = [
                {**task.to_dict(), "args": task_args(task, config)} for task in play.tasks
            ]
            data.append(play_data)
        print(json.dumps(data, indent=2, default=str), file=out)
        return

    for play in plays:
        print(f"▶ Play: {play.name} (hosts: {play.hosts})", file=out)
        for task in play.tasks:
            print(f"  ▸ Task: {task.name}", file=out)
            print(f"    Module: {task.module}", file=out)
            print(f"    Args: {task_args(task, config)}", file=out)
            print(f"    Vars: {task.vars}", file=out)
            if task.loop:
                print(f"    Loop: {task.loop}", file=out)
            if config.verbosity >= 1:
                print(f"    Source: {task.source}", file=out)
