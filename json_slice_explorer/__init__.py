"""Core logic for the interactive JSON slice explorer.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- resolve key/index paths inside arbitrary JSON values
- deep-search documents and cut search hits into minimal slices
- rebuild a composite document from selected paths and categories
- track the cascading drill-down cursor
"""
