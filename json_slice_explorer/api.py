"""Boundary adapters: tagged {"ok": ...} payloads, never exceptions."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from .io_utils import load_datasets
from .merging import CategoryTable, build_submission
from .slices import SCOPE_ALL, search_datasets

logger = logging.getLogger(__name__)


def failure(error: Any) -> Dict[str, Any]:
    return {'ok': False, 'error': str(error)}


def list_payload(data_dir: str) -> Dict[str, Any]:
    try:
        datasets = load_datasets(data_dir)
    except Exception as e:
        logger.error("Listing datasets in %s failed: %s", data_dir, e)
        return failure(e)
    return {
        'ok': True,
        'datasets': [{'name': d['name'], 'file': d['file'], 'raw': d['raw']} for d in datasets],
    }


def search_payload(data_dir: str, query: str, scope: Optional[str] = SCOPE_ALL) -> Dict[str, Any]:
    q = (query or '').strip()
    if not q:
        return {'ok': True, 'query': q, 'count': 0, 'datasets': []}
    try:
        datasets = load_datasets(data_dir)
        return search_datasets(datasets, q, scope)
    except Exception as e:
        logger.error("Search for %r failed: %s", q, e)
        return failure(e)


def find_dataset(datasets: List[Dict[str, Any]], file_name: str) -> Optional[Dict[str, Any]]:
    for ds in datasets or []:
        if ds.get('file') == file_name:
            return ds
    return None


def submit_payload(
    datasets: List[Dict[str, Any]],
    request: Mapping[str, Any],
    table: CategoryTable,
) -> Dict[str, Any]:
    """Build the composite document for {datasetFile, paths, categories}."""
    request = request or {}
    dataset_file = request.get('datasetFile')
    ds = find_dataset(datasets, dataset_file)
    if ds is None:
        return failure(f"Unknown dataset: {dataset_file}")
    try:
        result = build_submission(
            ds['raw'],
            request.get('paths') or [],
            request.get('categories') or [],
            table,
            request.get('currentPath'),
        )
    except Exception as e:
        logger.error("Submit for %s failed: %s", dataset_file, e)
        return failure(e)
    return {'ok': True, 'result': result}
