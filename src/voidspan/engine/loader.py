# Copyright (c) 2024 Voidspan Contributors
# MIT License

"""
Voidspan Document Loader

Reads playbook and task files and decodes them into lists of raw records.
"""

from typing import Any, Dict, List, Optional, Union

import yaml

from voidspan.engine.errors import DecodeError, TaskFileError
from voidspan.engine.records import RawKind, kind_of


def read_file(path: str, message: str) -> bytes:
    """
    Read a file from disk.

    Args:
        path: File to read
        message: Error message used if the file cannot be read

    Raises:
        TaskFileError: wrapping the underlying OSError
    """
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise TaskFileError(message, cause=e) from e


def decode_records(
    data: Union[bytes, str],
    message: str,
    file_path: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Decode a YAML document whose top level is a sequence of mappings.

    An empty document decodes to an empty list; null items decode to empty
    records. Record keys are coerced to strings.

    Raises:
        DecodeError: if the document is not valid YAML or has another shape
    """
    try:
        document = yaml.safe_load(data)
        return _as_records(document)
    except yaml.YAMLError as e:
        raise DecodeError(message, file_path=file_path, cause=e) from e


def _as_records(document: Any) -> List[Dict[str, Any]]:
    kind = kind_of(document)
    if kind is RawKind.NULL:
        return []
    if kind is not RawKind.SEQUENCE:
        raise yaml.YAMLError(f"expected a sequence of mappings, got {kind.value}")

    records: List[Dict[str, Any]] = []
    for index, item in enumerate(document):
        item_kind = kind_of(item)
        if item_kind is RawKind.NULL:
            records.append({})
        elif item_kind is RawKind.MAPPING:
            records.append({str(k): v for k, v in item.items()})
        else:
            raise yaml.YAMLError(
                f"item {index} must be a mapping, got {item_kind.value}"
            )
    return records
