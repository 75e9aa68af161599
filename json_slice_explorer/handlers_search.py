from __future__ import annotations

from .slices import search_datasets

NOTHING_FOUND = "❌ Nothing found… check the spelling or widen the scope."


def summarize_search(response) -> str:
    datasets = response.get('datasets') or []
    if not datasets:
        return NOTHING_FOUND
    count = response.get('count', 0)
    noun = "match" if count == 1 else "matches"
    if len(datasets) == 1 and datasets[0].get('mode') == 'full':
        return f"Found {count} {noun} in {datasets[0]['name']}; showing the whole dataset."
    return f"Found {count} {noun} across {len(datasets)} dataset(s)."


def handle_search(datasets, query, scope):
    """Run a search over the loaded datasets; returns (results, status)."""
    try:
        response = search_datasets(datasets or [], query, scope)
    except Exception as e:
        return None, f"Error: {str(e)}"
    if not response['datasets']:
        return None, NOTHING_FOUND
    return response, summarize_search(response)


def handle_reset_search():
    return "", "ALL", None, ""
