from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

_BLOCK_COMMENT = re.compile(r'/\*[\s\S]*?\*/')
_LINE_COMMENT = re.compile(r'(^|[^:])//.*$', re.MULTILINE)
_TRAILING_COMMA = re.compile(r',\s*([}\]])')


def strip_comments_and_trailing_commas(text: str) -> str:
    text = _BLOCK_COMMENT.sub('', text)
    text = _LINE_COMMENT.sub(r'\1', text)
    return _TRAILING_COMMA.sub(r'\1', text)


def parse_tolerant(text: str) -> Any:
    """Parse JSON that may carry a BOM, comments or trailing commas.

    Falls back to NDJSON (one value per line) when the cleaned text is not
    a single document; re-raises the original error otherwise.
    """
    if text.startswith('\ufeff'):
        text = text[1:]
    cleaned = strip_comments_and_trailing_commas(text.strip())
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        lines = [ln.strip() for ln in cleaned.splitlines()]
        lines = [ln for ln in lines if ln and not ln.startswith('//')]
        if len(lines) > 1:
            return [json.loads(ln) for ln in lines]
        raise


def dataset_name(file_name: str) -> str:
    stem, ext = os.path.splitext(file_name)
    return stem if ext.lower() == '.json' else file_name


def read_dataset(path: str, file_name: Optional[str] = None) -> Dict[str, Any]:
    """Read one JSON file into a {name, file, raw} dataset entry.

    `file_name` overrides the label taken from `path` (uploads arrive under
    a temp path but keep the user's file name).
    """
    file_name = file_name or os.path.basename(path)
    with open(path, 'r', encoding='utf-8') as f:
        raw = parse_tolerant(f.read())
    return {'name': dataset_name(file_name), 'file': file_name, 'raw': raw}


def load_datasets(data_dir: str) -> List[Dict[str, Any]]:
    """Load every *.json file in `data_dir` as {name, file, raw}, sorted by name.

    A missing directory gives an empty list; unreadable or broken files are
    skipped with a warning.
    """
    if not os.path.isdir(data_dir):
        logger.warning("Data directory not found at: %s", data_dir)
        return []

    files = sorted(f for f in os.listdir(data_dir) if f.lower().endswith('.json'))
    out: List[Dict[str, Any]] = []
    for file_name in files:
        try:
            out.append(read_dataset(os.path.join(data_dir, file_name)))
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s", file_name, e)
        except json.JSONDecodeError as e:
            logger.warning("Skipping bad JSON %s: %s", file_name, e)

    return sorted(out, key=lambda d: d['name'].lower())
