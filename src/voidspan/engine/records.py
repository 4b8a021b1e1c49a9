# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Raw Records

Playbook and task records come out of the YAML decoder as plain dicts with
arbitrary values. Fields are pulled out of them through the helpers here,
which classify each value into a small closed set of kinds and fall back to
an empty value when the kind does not match.
"""

import enum
from typing import Any, Dict, List, Optional


class RawKind(enum.Enum):
    """Kind of a decoded YAML value."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    NULL = "null"
    OTHER = "other"  # timestamps, binary and other YAML scalars


class DirectiveKind(enum.Enum):
    """Task keys with a meaning of their own (everything else is a module)."""
    NAME = "name"
    VARS = "vars"
    LOOP = "loop"
    INCLUDE_TASKS = "include_tasks"
    INCLUDE_ROLE = "include_role"


# Literal task keys -> directive kind
DIRECTIVE_KEYS: Dict[str, DirectiveKind] = {
    'name': DirectiveKind.NAME,
    'vars': DirectiveKind.VARS,
    'loop': DirectiveKind.LOOP,
    'include_tasks': DirectiveKind.INCLUDE_TASKS,
    'ansible.builtin.include_tasks': DirectiveKind.INCLUDE_TASKS,
    'include_role': DirectiveKind.INCLUDE_ROLE,
    'ansible.builtin.include_role': DirectiveKind.INCLUDE_ROLE,
}


def kind_of(value: Any) -> RawKind:
    """Classify a decoded YAML value."""
    if value is None:
        return RawKind.NULL
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return RawKind.BOOLEAN
    if isinstance(value, (int, float)):
        return RawKind.NUMBER
    if isinstance(value, str):
        return RawKind.STRING
    if isinstance(value, dict):
        return RawKind.MAPPING
    if isinstance(value, list):
        return RawKind.SEQUENCE
    return RawKind.OTHER


def directive_for(key: str) -> Optional[DirectiveKind]:
    """Return the directive a task key stands for, or None for module keys."""
    return DIRECTIVE_KEYS.get(key)


def is_include_role(module: str) -> bool:
    """Check whether a task module name is an include_role alias."""
    return directive_for(module) is DirectiveKind.INCLUDE_ROLE


def string_field(record: Dict[str, Any], key: str) -> str:
    """Return record[key] if it is a string, otherwise an empty string."""
    value = record.get(key)
    if kind_of(value) is RawKind.STRING:
        return value
    return ""


def mapping_field(record: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Return a copy of record[key] if it is a mapping, otherwise {}."""
    value = record.get(key)
    if kind_of(value) is RawKind.MAPPING:
        return dict(value)
    return {}


def record_sequence(value: Any) -> Optional[List[Dict[str, Any]]]:
    """
    Return the mapping items of a sequence value.

    Items that are not mappings are dropped. Returns None when the value
    itself is not a sequence.
    """
    if kind_of(value) is not RawKind.SEQUENCE:
        return None
    return [item for item in value if kind_of(item) is RawKind.MAPPING]
