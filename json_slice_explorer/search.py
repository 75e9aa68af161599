from __future__ import annotations

from typing import Any, Iterator, List, NamedTuple, Tuple

from .paths import primitive_text

MATCHED_ON_KEY = 'key'
MATCHED_ON_VALUE = 'value'


class Match(NamedTuple):
    path: Tuple[str, ...]
    value: Any
    matched_on: str


def _term(query: str) -> str:
    return (query or '').strip().lower()


def matches_primitive(value: Any, term: str) -> bool:
    if value is None or isinstance(value, (dict, list)):
        return False
    return term in primitive_text(value).lower()


def deep_search(root: Any, query: str) -> Iterator[Match]:
    """Depth-first, pre-order walk yielding every key and value hit.

    Key hits point at the key's value; value hits point at the primitive.
    Objects and arrays never match as a whole. Matching is a
    case-insensitive substring test.
    """
    term = _term(query)
    if not term:
        return
    yield from _walk(root, term, ())


def _walk(node: Any, term: str, path: Tuple[str, ...]) -> Iterator[Match]:
    if isinstance(node, list):
        for idx, item in enumerate(node):
            yield from _walk(item, term, path + (str(idx),))
    elif isinstance(node, dict):
        for key, value in node.items():
            child_path = path + (key,)
            if term in str(key).lower():
                yield Match(child_path, value, MATCHED_ON_KEY)
            yield from _walk(value, term, child_path)
    elif matches_primitive(node, term):
        yield Match(path, node, MATCHED_ON_VALUE)


def contains_deep(root: Any, query: str) -> bool:
    """Cheap existence test; stops at the first hit."""
    return next(deep_search(root, query), None) is not None


def count_matches(root: Any, query: str) -> int:
    return sum(1 for _ in deep_search(root, query))


def collect_matches(root: Any, query: str) -> List[Match]:
    return list(deep_search(root, query))
