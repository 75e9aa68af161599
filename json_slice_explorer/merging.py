from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .accessors import MISSING, resolve, set_value_by_path
from .paths import coerce_path
from .selection import with_current_path

CategoryTable = Mapping[str, Sequence[Sequence[str]]]


def build_from_paths(root: Any, paths: Iterable[Sequence[str]]) -> Dict[str, Any]:
    """Rebuild a fresh document holding only the selected paths.

    Paths that do not resolve are skipped. Inserted values are copies, so
    a later, deeper path never writes through into `root`.
    """
    out: Dict[str, Any] = {}
    for path in paths:
        path = coerce_path(path)
        if not path:
            continue
        value = resolve(root, path)
        if value is MISSING:
            continue
        set_value_by_path(out, path, deepcopy(value))
    return out


def merge_siblings(nodes: Iterable[Any]) -> Any:
    """Combine several nodes that belong under one key.

    Arrays are concatenated in order, objects are shallow-merged with later
    keys winning, and anything mixed comes back as the plain list of nodes.
    """
    existing = [n for n in nodes if n is not MISSING]
    if not existing:
        return MISSING
    if all(isinstance(n, list) for n in existing):
        merged: List[Any] = []
        for n in existing:
            merged.extend(n)
        return merged
    if all(isinstance(n, dict) for n in existing):
        combined: Dict[str, Any] = {}
        for n in existing:
            combined.update(n)
        return combined
    return existing


def category_key(name: str) -> str:
    return name.lower()


def merge_category(root: Any, category: str, table: CategoryTable) -> Any:
    path_list = table.get(category) or []
    nodes = [resolve(root, coerce_path(p)) for p in path_list]
    return merge_siblings(nodes)


def submit_category(root: Any, category: str, table: CategoryTable) -> Dict[str, Any]:
    """Just one category, keyed the way the full submit keys it."""
    if not category:
        return {}
    merged = merge_category(root, category, table)
    if merged is MISSING:
        return {}
    return {category_key(category): deepcopy(merged)}


def build_submission(
    root: Any,
    paths: Iterable[Sequence[str]],
    categories: Iterable[str],
    table: CategoryTable,
    current_path: Optional[Sequence[str]] = None,
) -> Dict[str, Any]:
    """Selected paths plus every chosen category under its lower-cased name."""
    selected = [coerce_path(p) for p in paths]
    if current_path:
        selected = with_current_path(selected, coerce_path(current_path))

    base = build_from_paths(root, selected)
    for cat in categories or []:
        merged = merge_category(root, cat, table)
        if merged is not MISSING:
            base[category_key(cat)] = deepcopy(merged)
    return base
