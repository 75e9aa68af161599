from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from .paths import is_index_segment

logger = logging.getLogger(__name__)


class _Missing:
    """Sentinel for 'no value here'. JSON null is a real value (None)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


# Deep inserts never pad an array beyond this index.
MAX_INSERT_INDEX = 10 ** 7


def existing_index(segment: str, length: int) -> Optional[int]:
    """Slot number for `segment` when it is below `length`, else None.

    The digit count is checked first so huge segments never reach int().
    """
    if not is_index_segment(segment):
        return None
    digits = segment.lstrip('0') or '0'
    if len(digits) > len(str(length)):
        return None
    idx = int(digits)
    return idx if idx < length else None


def is_container(node: Any) -> bool:
    return isinstance(node, (dict, list))


def resolve(root: Any, path: Sequence[str]) -> Any:
    """Walk `path` from `root`; returns MISSING when any step fails.

    Numeric segments index arrays, everything else looks up object keys.
    Never raises for any JSON value.
    """
    node = root
    for segment in path:
        if isinstance(node, list):
            idx = existing_index(segment, len(node))
            if idx is None:
                return MISSING
            node = node[idx]
        elif isinstance(node, dict):
            if segment not in node:
                return MISSING
            node = node[segment]
        else:
            return MISSING
    return node


def options_at(node: Any) -> List[str]:
    """Navigable child identifiers: object keys in order, or '0'..'n-1'."""
    if isinstance(node, dict):
        return list(node.keys())
    if isinstance(node, list):
        return [str(i) for i in range(len(node))]
    return []


def node_type(node: Any) -> str:
    if node is MISSING:
        return 'undefined'
    if node is None:
        return 'null'
    if isinstance(node, dict):
        return 'object'
    if isinstance(node, list):
        return 'array'
    if isinstance(node, bool):
        return 'boolean'
    if isinstance(node, (int, float)):
        return 'number'
    return 'string'


def _new_container(next_segment: str):
    return [] if is_index_segment(next_segment) else {}


def _assign(container: Any, segment: str, value: Any) -> bool:
    if isinstance(container, list):
        if not is_index_segment(segment):
            logger.debug("Dropping key %r on an array; JSON cannot hold it.", segment)
            return False
        idx = existing_index(segment, MAX_INSERT_INDEX + 1)
        if idx is None:
            logger.debug("Dropping out-of-range index %.20s on an array.", segment)
            return False
        if idx >= len(container):
            container.extend([None] * (idx + 1 - len(container)))
        container[idx] = value
        return True
    container[segment] = value
    return True


def _child(container: Any, segment: str) -> Any:
    if isinstance(container, list):
        idx = existing_index(segment, len(container))
        return MISSING if idx is None else container[idx]
    return container.get(segment, MISSING)


def set_value_by_path(target: Any, path: Sequence[str], value: Any):
    """Deep-insert `value` at `path`, creating containers on the way.

    A missing (or primitive) intermediate becomes a list when the following
    segment is numeric and a dict otherwise. The last segment overwrites.
    """
    if not path:
        return value
    if not is_container(target):
        return value

    current = target
    for i, segment in enumerate(path[:-1]):
        nxt = _child(current, segment)
        if not is_container(nxt):
            nxt = _new_container(path[i + 1])
            if not _assign(current, segment, nxt):
                return target
        current = nxt
    _assign(current, path[-1], value)
    return target
