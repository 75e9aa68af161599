from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any, Iterable, List, Sequence

INDEX_SEGMENT = re.compile(r'[0-9]+')
KEY_SEPARATOR = '\u0000'
ROOT_LABEL = '<root>'


def is_index_segment(segment: Any) -> bool:
    """True when a segment addresses an array slot (all ASCII digits)."""
    return isinstance(segment, str) and INDEX_SEGMENT.fullmatch(segment) is not None


def path_key(path: Iterable[str]) -> str:
    """Dedup key for a path. NUL never appears inside a JSON key we accept."""
    return KEY_SEPARATOR.join(str(seg) for seg in path)


def escape_path_segment(segment: str) -> str:
    """Escape a single key segment for dot-path representation.

    - Dots are escaped as '\\.' so keys like 'gpt-3.5-turbo' remain one segment.
    - Backslashes are escaped as '\\\\' to preserve round-tripping.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('\\', '\\\\').replace('.', '\\.')


def unescape_path_segment(segment: str) -> str:
    if segment is None:
        return ''
    out: List[str] = []
    i = 0
    while i < len(segment):
        ch = segment[i]
        if ch == '\\' and i + 1 < len(segment):
            out.append(segment[i + 1])
            i += 2
        else:
            out.append(ch)
            i += 1
    return ''.join(out)


def join_path(path: Sequence[str]) -> str:
    """Serialize a path for the wire: 'users.1.name'. Root is ''."""
    return '.'.join(escape_path_segment(seg) for seg in path)


def split_path(path: str) -> List[str]:
    """Split a dot path on unescaped '.' and unescape each segment."""
    if path is None:
        return []
    if not isinstance(path, str):
        path = str(path)

    parts: List[str] = []
    buf: List[str] = []
    escaping = False

    for ch in path:
        if escaping:
            # Keep the escape pair so unescape_path_segment can process it.
            buf.append('\\')
            buf.append(ch)
            escaping = False
            continue

        if ch == '\\':
            escaping = True
            continue
        if ch == '.':
            parts.append(unescape_path_segment(''.join(buf)))
            buf = []
            continue
        buf.append(ch)

    if escaping:
        # Trailing backslash; treat as literal.
        buf.append('\\')

    parts.append(unescape_path_segment(''.join(buf)))
    return [p for p in parts if p != '']


def coerce_path(path: Any) -> List[str]:
    """Accept either a segment list or a dot string and return segments."""
    if path is None:
        return []
    if isinstance(path, str):
        return split_path(path)
    return [str(seg) for seg in path]


def format_path(path: Sequence[str]) -> str:
    return join_path(path) if path else ROOT_LABEL


def float_text(value: float) -> str:
    """Number-to-string the way JavaScript's String(number) spells it.

    Plain decimals for 1e-6 <= |x| < 1e21, otherwise exponent form with no
    zero padding in the exponent ('1e-7', '1.5e+21').
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    magnitude = abs(value)
    if value.is_integer() and magnitude < 1e21:
        return str(int(value))
    text = repr(value)
    if 'e' not in text:
        return text
    if 1e-6 <= magnitude < 1e21:
        return format(Decimal(text), 'f')
    mantissa, exponent = text.split('e')
    sign = '-' if exponent.startswith('-') else '+'
    return f"{mantissa}e{sign}{exponent.lstrip('+-').lstrip('0') or '0'}"


def primitive_text(value: Any) -> str:
    """String form of a primitive, spelled the way JSON/JavaScript spell it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return float_text(value)
    return str(value)
