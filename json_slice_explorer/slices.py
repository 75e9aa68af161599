from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from .paths import join_path, path_key
from .search import count_matches, matches_primitive

SCOPE_ALL = 'all'


class Slice(NamedTuple):
    path: Tuple[str, ...]
    value: Any


def extract_slices(root: Any, query: str) -> Iterator[Slice]:
    """Yield the smallest useful context around every hit, once per path.

    - key hit on a container: the container itself
    - key hit on a primitive: the object that holds the key
    - value hit inside an array: that array element
    - value hit inside an object: the object
    - value hit at the root: the root primitive
    First occurrence wins when two hits reduce to the same path.
    """
    term = (query or '').strip().lower()
    if not term:
        return
    seen = set()
    for found in _slice_walk(root, term, (), None, ()):
        key = path_key(found.path)
        if key in seen:
            continue
        seen.add(key)
        yield found


def _slice_walk(node: Any, term: str, path: Tuple[str, ...], parent: Any, parent_path: Tuple[str, ...]) -> Iterator[Slice]:
    if isinstance(node, list):
        for idx, item in enumerate(node):
            yield from _slice_walk(item, term, path + (str(idx),), node, path)
    elif isinstance(node, dict):
        for key, value in node.items():
            child_path = path + (key,)
            if term in str(key).lower():
                if isinstance(value, (dict, list)):
                    yield Slice(child_path, value)
                else:
                    yield Slice(path, node)
            yield from _slice_walk(value, term, child_path, node, path)
    elif matches_primitive(node, term):
        if isinstance(parent, dict):
            yield Slice(parent_path, parent)
        else:
            # Array element (path already ends with its index) or bare root.
            yield Slice(path, node)


def serialize_slice(found: Slice) -> Dict[str, Any]:
    return {'path': join_path(found.path), 'value': found.value}


def scoped_datasets(datasets: Iterable[Dict[str, Any]], scope: Optional[str]) -> List[Dict[str, Any]]:
    """Datasets named by `scope`; the all-datasets sentinels apply only when no dataset carries that name."""
    datasets = list(datasets)
    named = [ds for ds in datasets if scope and scope in (ds.get('name'), ds.get('file'))]
    if named or scope not in (None, '', SCOPE_ALL, 'ALL'):
        return named
    return datasets


def search_datasets(datasets: Iterable[Dict[str, Any]], query: str, scope: Optional[str] = SCOPE_ALL) -> Dict[str, Any]:
    """Search every dataset in scope and shape the response.

    When the total number of hits across the scope is exactly one, the
    dataset holding it is returned whole (mode 'full'); otherwise each
    dataset with hits carries its slice list (mode 'slices').
    """
    q = (query or '').strip()
    if not q:
        return {'ok': True, 'query': q, 'count': 0, 'datasets': []}

    counted: List[Tuple[Dict[str, Any], int]] = []
    for ds in scoped_datasets(datasets, scope):
        hits = count_matches(ds.get('raw'), q)
        if hits:
            counted.append((ds, hits))

    total = sum(hits for _, hits in counted)
    results: List[Dict[str, Any]] = []
    for ds, _ in counted:
        entry = {'name': ds.get('name'), 'file': ds.get('file')}
        if total == 1:
            entry['mode'] = 'full'
            entry['raw'] = ds.get('raw')
        else:
            entry['mode'] = 'slices'
            entry['slices'] = [serialize_slice(s) for s in extract_slices(ds.get('raw'), q)]
        results.append(entry)

    return {'ok': True, 'query': q, 'count': total, 'datasets': results}
