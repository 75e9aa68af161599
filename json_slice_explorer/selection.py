from __future__ import annotations

from typing import List, Optional, Sequence

from .paths import join_path, path_key

Path = List[str]


def add_path(selected: Optional[Sequence[Sequence[str]]], path: Sequence[str]) -> List[Path]:
    """Append `path` unless it is the root or already selected."""
    current = [list(p) for p in (selected or [])]
    if not path:
        return current
    key = path_key(path)
    if any(path_key(p) == key for p in current):
        return current
    current.append(list(path))
    return current


def remove_path(selected: Optional[Sequence[Sequence[str]]], index: int) -> List[Path]:
    current = [list(p) for p in (selected or [])]
    if index is None or index < 0 or index >= len(current):
        return current
    return current[:index] + current[index + 1:]


def clear_paths() -> List[Path]:
    return []


def with_current_path(selected: Optional[Sequence[Sequence[str]]], current_path: Optional[Sequence[str]]) -> List[Path]:
    """Selection plus the cursor path, for preview and submit."""
    return add_path(selected, current_path or [])


def selection_labels(selected: Optional[Sequence[Sequence[str]]]) -> List[str]:
    return [join_path(p) for p in (selected or [])]
