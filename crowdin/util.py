# Copyright 2022 The crowdin-api-python Authors
# Use of this source code is governed by an MIT
# license that can be found in the LICENSE file.
import logging
import os
from enum import Enum
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Tuple, Union

logger = logging.getLogger("crowdin")

FileSource = Union[str, "os.PathLike[str]", BinaryIO]


def _get_log_text(message, **kwargs):
    return (
        message
        + " "
        + " ".join(f"{key}={value}" for key, value in sorted(kwargs.items()))
    )


def log_debug(message, **kwargs):
    text = _get_log_text(message, **kwargs)
    logger.debug(text)


def log_info(message, **kwargs):
    text = _get_log_text(message, **kwargs)
    logger.info(text)


def log_warning(message, **kwargs):
    text = _get_log_text(message, **kwargs)
    logger.warning(text)


def encode_value(value: Any) -> str:
    """Returns the form/query representation of a scalar parameter value.

    Enums are sent by value and booleans as "1" or "0", which is what the
    Crowdin API accepts for flags."""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def flatten_params(
    params: Optional[Mapping[str, Any]], prefix: Optional[str] = None
) -> List[Tuple[str, str]]:
    """Flattens a parameter mapping into (name, value) pairs using bracket
    notation for nested values.

    Entries with value None are dropped. Lists of scalars become repeated
    ``name[]`` fields, mappings become ``name[key]`` and lists of mappings
    become ``name[index][key]``.

    :param params: Mapping of parameter names to values, or None.
    :param prefix: (Optional) Name the keys of params are nested under.
    :return: List of (name, value) string pairs, in input order.
    """
    if not params:
        return []
    items: List[Tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        name = key if prefix is None else f"{prefix}[{key}]"
        items.extend(_flatten_value(name, value))
    return items


def _flatten_value(name: str, value: Any) -> List[Tuple[str, str]]:
    if isinstance(value, Mapping):
        return flatten_params(value, name)
    if isinstance(value, (list, tuple)):
        if any(isinstance(item, Mapping) for item in value):
            items: List[Tuple[str, str]] = []
            for index, item in enumerate(value):
                items.extend(_flatten_value(f"{name}[{index}]", item))
            return items
        return [(f"{name}[]", encode_value(item)) for item in value]
    return [(name, encode_value(value))]


def is_file_path(source: Any) -> bool:
    """Returns True if the given upload source names a local file rather than
    being a stream."""
    return isinstance(source, (str, os.PathLike))


def open_file(
    source: FileSource, opened: Optional[List[BinaryIO]] = None
) -> BinaryIO:
    """Returns a binary read stream for the given upload source.

    Paths are opened for reading, streams are returned unchanged. Streams
    opened here are appended to opened, if given, so the caller can close
    them once the request completed. A missing file raises the OSError from
    open().
    """
    if not is_file_path(source):
        return source  # type: ignore[return-value]
    stream = open(os.fspath(source), "rb")
    if opened is not None:
        opened.append(stream)
    return stream


def pack_files(
    files: Mapping[str, FileSource], opened: Optional[List[BinaryIO]] = None
) -> Dict[str, BinaryIO]:
    """Converts a mapping of project paths to local files or streams into
    multipart form fields named ``files[<project path>]``.

    :param files: Mapping of paths in the Crowdin project to local file paths
        or binary streams.
    :param opened: (Optional) List receiving the streams opened here.
    :return: Dictionary of form field names to binary streams.
    """
    return {
        f"files[{crowdin_path}]": open_file(source, opened)
        for crowdin_path, source in files.items()
    }
