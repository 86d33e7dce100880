"""Core logic for the Data Viewer.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- read CSV, JSON and NDJSON inputs into rows
- flatten nested JSON rows into dot-path columns
- derive the table view (search, visible columns, pagination)
"""
