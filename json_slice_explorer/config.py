from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, Union

from pydantic import RootModel, ValidationError, field_validator

from .paths import coerce_path

DATA_DIR_ENV = 'JSON_EXPLORER_DATA_DIR'
CATEGORIES_ENV = 'JSON_EXPLORER_CATEGORIES'
LOG_LEVEL_ENV = 'JSON_EXPLORER_LOG_LEVEL'

DEFAULT_DATA_DIR = 'data'
DEFAULT_LOG_LEVEL = 'INFO'

# Category -> every place that category lives in the known dataset layouts.
DEFAULT_CATEGORY_PATHS: Dict[str, List[List[str]]] = {
    'Conversations': [
        ['augmentation', 'apps', '0', 'app_state', 'conversations'],
        ['augmentation', 'apps', '1', 'app_state', 'conversations'],
        ['apps', '4', 'app_state', 'conversations'],
        ['apps', '5', 'app_state', 'conversations'],
    ],
    'Email': [
        ['augmentation', 'apps', '2', 'app_state', 'folders'],
        ['apps', '6', 'app_state', 'folders'],
    ],
    'Products': [
        ['augmentation', 'apps', '4', 'app_state', 'products'],
        ['apps', '11', 'app_state', 'products'],
    ],
    'Files': [
        ['apps', '1', 'app_state', 'files'],
    ],
    'Apartments': [
        ['augmentation', 'apps', '3', 'app_state', 'apartments'],
        ['apps', '8', 'app_state', 'apartments'],
    ],
    'Calendar': [
        ['apps', '7', 'app_state', 'events'],
    ],
    'City': [
        ['apps', '9', 'app_state', 'crime_data'],
    ],
    'Contacts': [
        ['apps', '2', 'app_state', 'contacts'],
        ['apps', '3', 'app_state', 'contacts'],
    ],
}


def get_data_dir() -> str:
    return os.environ.get(DATA_DIR_ENV) or DEFAULT_DATA_DIR


def get_log_level() -> str:
    return (os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()


class CategoryTableModel(RootModel[Dict[str, List[Union[str, List[str]]]]]):
    """Category name -> every path that category lives at (segment list or dot string)."""

    @field_validator('root')
    @classmethod
    def split_dot_paths(cls, v: Dict[str, List[Union[str, List[str]]]]) -> Dict[str, List[List[str]]]:
        out: Dict[str, List[List[str]]] = {}
        for name, paths in v.items():
            normalized = []
            for p in paths:
                segments = coerce_path(p)
                if not segments:
                    raise ValueError(f"category '{name}' has an empty path")
                normalized.append(segments)
            out[name] = normalized
        return out


def describe_validation_error(exc: ValidationError) -> str:
    problems = []
    for err in exc.errors():
        where = '.'.join(str(part) for part in err.get('loc', ())) or 'table'
        problems.append(f"{where}: {err.get('msg')}")
    return "Invalid category table: " + "; ".join(problems)


def normalize_category_table(table: Any) -> Dict[str, List[List[str]]]:
    """Validate a {category: [path, ...]} mapping; paths may be lists or dot strings."""
    try:
        return CategoryTableModel.model_validate(table).root
    except ValidationError as e:
        raise ValueError(describe_validation_error(e)) from e


def load_category_table(path: Optional[str] = None) -> Dict[str, List[List[str]]]:
    """Category table from `path` (or $JSON_EXPLORER_CATEGORIES), else the defaults."""
    path = path or os.environ.get(CATEGORIES_ENV)
    if not path:
        return {k: [list(p) for p in v] for k, v in DEFAULT_CATEGORY_PATHS.items()}
    with open(path, 'r', encoding='utf-8') as f:
        return normalize_category_table(json.load(f))
