"""Dot-delimited path access into nested card payloads.

Paths address nested mappings only (``"address.postalCode"``); list items are
treated as leaves. Reads and deletes never raise for missing intermediate
nodes, writes create them.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cardrec.domain.model import FieldPath, JsonValue

PATH_SEPARATOR = "."
DATA_PREFIX = "data"


class InvalidPathError(ValueError):
    """Raised when a path is empty or contains empty segments."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Invalid field path: {path!r}")


def split_path(path: FieldPath) -> tuple[str, ...]:
    segments = tuple(path.split(PATH_SEPARATOR)) if path else ()
    if not segments or any(not segment for segment in segments):
        raise InvalidPathError(path)
    return segments


def strip_data_prefix(path: FieldPath) -> FieldPath:
    """Drop a leading ``data.`` segment so envelope-relative paths address the payload."""

    head, separator, rest = path.partition(PATH_SEPARATOR)
    if head == DATA_PREFIX and separator and rest:
        return rest
    return path


def get_path(tree: Mapping[str, JsonValue], path: FieldPath) -> JsonValue:
    """Return the value at ``path`` or ``None`` when any segment is missing."""

    node: object = tree
    for segment in split_path(path):
        if not isinstance(node, Mapping) or segment not in node:
            return None
        node = node[segment]
    return node  # type: ignore[return-value]


def has_path(tree: Mapping[str, JsonValue], path: FieldPath) -> bool:
    """Return whether ``path`` exists, even if it holds an explicit ``None``."""

    node: object = tree
    for segment in split_path(path):
        if not isinstance(node, Mapping) or segment not in node:
            return False
        node = node[segment]
    return True


def can_set_path(tree: Mapping[str, JsonValue], path: FieldPath) -> bool:
    """Return whether ``set_path`` can write ``path`` without replacing a value.

    Every existing intermediate node must be a mapping or ``None``.
    """

    *parents, _ = split_path(path)
    node: object = tree
    for segment in parents:
        if node is None:
            return True
        if not isinstance(node, Mapping):
            return False
        node = node.get(segment)
    return node is None or isinstance(node, Mapping)


def set_path(tree: MutableMapping[str, JsonValue], path: FieldPath, value: JsonValue) -> None:
    """Write ``value`` at ``path``, creating or replacing intermediate mappings."""

    *parents, leaf = split_path(path)
    node: MutableMapping[str, JsonValue] = tree
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            node[segment] = child
        node = child
    node[leaf] = value


def delete_path(tree: MutableMapping[str, JsonValue], path: FieldPath) -> bool:
    """Remove the value at ``path``; returns ``False`` if nothing was there."""

    *parents, leaf = split_path(path)
    node: object = tree
    for segment in parents:
        if not isinstance(node, Mapping) or segment not in node:
            return False
        node = node[segment]
    if not isinstance(node, MutableMapping) or leaf not in node:
        return False
    del node[leaf]
    return True
