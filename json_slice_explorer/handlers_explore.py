from __future__ import annotations

import json
import os
import tempfile
from typing import Any, Dict, List, Optional

import gradio as gr

from .accessors import MISSING
from .api import find_dataset, list_payload, submit_payload
from .cascade import InvalidSegmentError, ascend, cascade_root, choose_at_level, set_path
from .config import get_data_dir
from .io_utils import read_dataset
from .merging import build_from_paths, submit_category
from .selection import add_path, clear_paths, remove_path, selection_labels, with_current_path


def current_raw(datasets, file_name):
    ds = find_dataset(datasets or [], file_name)
    return None if ds is None else ds.get('raw')


def _cursor_root(datasets, file_name):
    return cascade_root(current_raw(datasets, file_name))


def load_datasets_handler(data_dir: Optional[str] = None):
    data_dir = data_dir or get_data_dir()
    payload = list_payload(data_dir)
    if not payload['ok']:
        return (
            [],
            gr.update(choices=[], value=None),
            f"Error: {payload['error']}",
            gr.update(choices=["ALL"], value="ALL"),
        )

    datasets = payload['datasets']
    files = [d['file'] for d in datasets]
    if not files:
        message = f"No JSON files found in {data_dir}"
    else:
        message = f"Loaded {len(files)} dataset(s) from {data_dir}."
    return (
        datasets,
        gr.update(choices=files, value=files[0] if files else None),
        message,
        gr.update(choices=["ALL"] + [d['name'] for d in datasets], value="ALL"),
    )


def handle_dataset_upload(file_obj, datasets):
    """Add an uploaded file to the dataset list (replacing one with the same file name)."""
    datasets = list(datasets or [])
    if file_obj is None:
        return datasets, gr.update(), "No file uploaded.", gr.update()

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    try:
        uploaded = read_dataset(path, getattr(file_obj, 'orig_name', None))
    except Exception as e:
        return datasets, gr.update(), f"Error parsing JSON: {str(e)}", gr.update()

    datasets = [d for d in datasets if d.get('file') != uploaded['file']] + [uploaded]
    datasets.sort(key=lambda d: d['name'].lower())
    return (
        datasets,
        gr.update(choices=[d['file'] for d in datasets], value=uploaded['file']),
        f"Uploaded {uploaded['file']}.",
        gr.update(choices=["ALL"] + [d['name'] for d in datasets], value="ALL"),
    )


def handle_dataset_change(datasets, file_name):
    """Switching dataset drops the cursor, the selections and the categories."""
    return [], clear_paths(), [], "", None, None, None, ""


def handle_level_change(level: int, segment, datasets, file_name, cursor_path):
    root = _cursor_root(datasets, file_name)
    state = set_path(root, cursor_path or [])
    try:
        return list(choose_at_level(root, state, level, segment or "").path)
    except InvalidSegmentError:
        # Stale dropdown from a previous render; keep the cursor where it is.
        return list(state.path)


def handle_back(datasets, file_name, cursor_path):
    root = _cursor_root(datasets, file_name)
    return list(ascend(root, set_path(root, cursor_path or [])).path)


def compute_preview(raw, selected_paths, cursor_path, include_current):
    if raw is None:
        return None
    candidate = [list(p) for p in (selected_paths or [])]
    if include_current:
        candidate = with_current_path(candidate, cursor_path)
    if not candidate:
        return None
    return build_from_paths(raw, candidate)


def handle_cursor_change(datasets, file_name, cursor_path, selected_paths, include_current):
    root = _cursor_root(datasets, file_name)
    state = set_path(root, cursor_path or [])
    node = None if state.node is MISSING else state.node
    preview = compute_preview(current_raw(datasets, file_name), selected_paths, cursor_path, include_current)
    return state.describe(), node, preview


def handle_add_selection(cursor_path, selected_paths):
    return add_path(selected_paths, cursor_path or [])


def selection_choices(selected_paths) -> List[Any]:
    return [(f"{i + 1}: {label}", i) for i, label in enumerate(selection_labels(selected_paths))]


def handle_selection_change(datasets, file_name, selected_paths, cursor_path, include_current):
    choices = selection_choices(selected_paths)
    preview = compute_preview(current_raw(datasets, file_name), selected_paths, cursor_path, include_current)
    return (
        gr.update(choices=choices, value=None),
        f"Selected paths: {len(choices)}",
        preview,
    )


def handle_remove_selection(selected_paths, index):
    if index is None:
        return [list(p) for p in (selected_paths or [])]
    return remove_path(selected_paths, int(index))


def handle_clear_selection():
    return clear_paths()


def categories_text(categories) -> str:
    if not categories:
        return ""
    return f"Added categories ({len(categories)}): " + ", ".join(categories)


def handle_add_category(choice, categories):
    categories = list(categories or [])
    if choice and choice not in categories:
        categories.append(choice)
    return categories, categories_text(categories)


def handle_clear_categories():
    return [], ""


def handle_submit_category(datasets, file_name, choice, table):
    raw = current_raw(datasets, file_name)
    if raw is None or not choice:
        return None
    return submit_category(raw, choice, table or {})


def handle_view_full(datasets, file_name):
    return current_raw(datasets, file_name)


def write_output_file(result: Dict[str, Any], file_name: Optional[str], default_name: str) -> str:
    # Only the final name component is used; the file always lands in the temp dir.
    output_name = os.path.basename((file_name or "").strip().replace('\\', '/'))
    if not output_name or output_name in ('.', '..'):
        output_name = os.path.basename(default_name or "") or "result"
    if not output_name.lower().endswith('.json'):
        output_name += '.json'

    path = os.path.join(tempfile.gettempdir(), output_name)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
    return path


def handle_submit(datasets, file_name, selected_paths, cursor_path, include_current, categories, table, output_filename):
    if not file_name:
        return None, None, "No dataset selected."

    request = {
        'datasetFile': file_name,
        'paths': selected_paths or [],
        'categories': categories or [],
        'currentPath': (cursor_path or []) if include_current else None,
    }
    payload = submit_payload(datasets or [], request, table or {})
    if not payload['ok']:
        return None, None, f"Error: {payload['error']}"

    result = payload['result']
    ds = find_dataset(datasets, file_name)
    try:
        path = write_output_file(result, output_filename, ds['name'] if ds else "result")
    except OSError as e:
        return result, None, f"Error writing output file: {str(e)}"
    return result, path, f"Built output with {len(result)} top-level key(s)."
