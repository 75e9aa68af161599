"""Drill-down cursor over a JSON document.

The cursor is a path from the root plus what sits there. Transitions never
mutate a state; each returns a new `CascadeState` with the node and its
child options already resolved, ready for the next selector level.
"""
from __future__ import annotations

from typing import Any, List, NamedTuple, Sequence, Tuple

from .accessors import MISSING, node_type, options_at, resolve
from .paths import format_path


class InvalidSegmentError(ValueError):
    pass


class CascadeState(NamedTuple):
    path: Tuple[str, ...]
    node: Any
    options: List[str]

    @property
    def is_leaf(self) -> bool:
        return not self.options

    def describe(self) -> str:
        return (
            f"Path: {format_path(self.path)} | Type: {node_type(self.node)} "
            f"| Options here: {len(self.options)}"
        )


def cascade_root(data: Any) -> Any:
    """Only containers can be drilled; anything else behaves like {}."""
    return data if isinstance(data, (dict, list)) else {}


def _state(root: Any, path: Sequence[str]) -> CascadeState:
    node = resolve(root, path)
    return CascadeState(tuple(path), node, options_at(node))


def start(root: Any) -> CascadeState:
    return _state(root, ())


def set_path(root: Any, path: Sequence[str]) -> CascadeState:
    return _state(root, tuple(str(seg) for seg in path))


def descend(root: Any, state: CascadeState, segment: str) -> CascadeState:
    if segment not in state.options:
        raise InvalidSegmentError(
            f"{segment!r} is not a child of {format_path(state.path)}"
        )
    return _state(root, state.path + (segment,))


def ascend(root: Any, state: CascadeState) -> CascadeState:
    if not state.path:
        return state
    return _state(root, state.path[:-1])


def choose_at_level(root: Any, state: CascadeState, level: int, segment: str) -> CascadeState:
    """Pick `segment` in selector `level`; everything deeper is dropped.

    An empty segment (the placeholder choice) truncates to `level`.
    """
    level = max(0, min(int(level), len(state.path)))
    prefix = state.path[:level]
    base = _state(root, prefix)
    if not segment:
        return base
    return descend(root, base, segment)


def levels(root: Any, state: CascadeState) -> List[Tuple[Any, List[str]]]:
    """One (node, options) pair per selector: the root, then each step."""
    out: List[Tuple[Any, List[str]]] = [(root, options_at(root))]
    for i in range(len(state.path)):
        node = resolve(root, state.path[: i + 1])
        out.append((node, options_at(node)))
    return out


def is_resolved(state: CascadeState) -> bool:
    return state.node is not MISSING
