# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Error Classes.

All custom exceptions for clear error handling and exit codes.
Resolution errors carry the file they were raised for and the underlying
cause, so that ``str(error)`` reads as a chain from outer context down to
the original failure.
"""

from __future__ import annotations

import enum
from typing import Optional, Sequence


class ExitCode(enum.IntEnum):
    """Exit codes used by the voidspan CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    USAGE_ERROR = 2
    PARSE_ERROR = 3
    KEYBOARD_INTERRUPT = 130


class VoidspanError(Exception):
    """Base exception for all Voidspan errors."""

    exit_code: int = ExitCode.GENERIC_ERROR

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


class ResolutionError(VoidspanError):
    """Error resolving a playbook, task file or role."""

    exit_code: int = ExitCode.PARSE_ERROR

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.file_path = file_path
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        text = self.message
        if self.file_path:
            text += f" (in {self.file_path})"
        if self.cause is not None:
            text += f": {self.cause}"
        return text


class DecodeError(ResolutionError):
    """A playbook or task file is not valid YAML of the expected shape."""


class ShapeError(ResolutionError):
    """A field is missing or has the wrong type."""


class TaskFileError(ResolutionError):
    """A referenced file could not be read."""


class IncludeCycleError(ResolutionError):
    """A task file or role includes itself, directly or indirectly."""

    def __init__(self, chain: Sequence[str], file_path: Optional[str] = None) -> None:
        self.chain = list(chain)
        super().__init__(
            f"include cycle detected: {' -> '.join(self.chain)}",
            file_path=file_path,
        )


class RoleError(ResolutionError):
    """Resolving an included role failed."""

    def __init__(self, role_name: str, cause: BaseException) -> None:
        self.role_name = role_name
        super().__init__(f"failed to load role {role_name!r}", cause=cause)


class TemplateError(VoidspanError):
    """Error rendering a Jinja2 template."""

    exit_code: int = ExitCode.PARSE_ERROR

    def __init__(
        self,
        message: str,
        template: str | None = None,
    ) -> None:
        self.template = template

        details = None
        if template:
            # Truncate long templates
            truncated = template[:100] + "..." if len(template) > 100 else template
            details = f"Template: {truncated}"

        super().__init__(f"Template error: {message}", details)
