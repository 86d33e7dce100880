from __future__ import annotations

import logging
from typing import Any, List, Optional

import gradio as gr
import pandas as pd

from .errors import DataViewerError
from .ingestion import Dataset, load_from_file, load_from_pasted_text
from .schema_utils import count_text
from .view_state import (
    LoadSequencer,
    ViewState,
    filtered_rows,
    has_next_page,
    has_previous_page,
    initial_state,
    load_dataset,
    next_page,
    page_count,
    previous_page,
    render_page,
    set_items_per_page,
    set_search_term,
    set_visible_columns,
    toggle_flatten,
)

logger = logging.getLogger(__name__)

VIEW_OUTPUT_COUNT = 10

load_sequencer = LoadSequencer()


def build_page_table(state: ViewState) -> pd.DataFrame:
    return pd.DataFrame(render_page(state), columns=list(state.visible_columns))


def page_label_text(state: ViewState) -> str:
    if not state.has_data:
        return ""
    pages = page_count(state)
    if pages == 0:
        return "No matching rows."
    return f"Page {state.current_page} of {pages}"


def loaded_message(dataset: Dataset, state: ViewState) -> str:
    return f"Successfully loaded {dataset.source_name}. Found {len(state.rows)} rows and {len(state.columns)} columns."


def render_view(state: ViewState, status: Optional[str] = None):
    """Outputs shared by every event, in the order `app.py` wires them.

    A status of None leaves the status box untouched.
    """
    return (
        state,
        gr.update(visible=state.has_data),
        build_page_table(state),
        gr.update(choices=list(state.columns), value=list(state.visible_columns)),
        gr.update(visible=state.is_json, value=state.flatten),
        page_label_text(state),
        gr.update(interactive=has_previous_page(state)),
        gr.update(interactive=has_next_page(state)),
        count_text(len(filtered_rows(state)), len(state.rows)),
        gr.update() if status is None else gr.update(value=status),
    )


def unchanged_view():
    """No-op updates for every view output, the session state included."""
    return tuple(gr.update() for _ in range(VIEW_OUTPUT_COUNT))


def session_key(request: Optional[gr.Request]):
    return getattr(request, 'session_hash', None)


def _apply_load(state: ViewState, loader, source: Any, request: Optional[gr.Request] = None):
    session = session_key(request)
    ticket = load_sequencer.begin(session)
    try:
        dataset = loader(source)
    except DataViewerError as e:
        if not load_sequencer.is_current(session, ticket):
            return unchanged_view()
        logger.warning("Load rejected: %s", e)
        return render_view(state, str(e))

    if not load_sequencer.is_current(session, ticket):
        logger.info("Ignoring stale load of %s; a newer load started", dataset.source_name)
        return unchanged_view()

    state = load_dataset(state, dataset)
    return render_view(state, loaded_message(dataset, state))


def handle_file_upload(state: Optional[ViewState], file_obj, request: gr.Request = None):
    """Upload and drag-and-drop both arrive here."""
    state = state or initial_state()
    if file_obj is None:
        return render_view(state)
    return _apply_load(state, load_from_file, file_obj, request)


def handle_paste(state: Optional[ViewState], text: Optional[str], request: gr.Request = None):
    state = state or initial_state()
    if not text or not text.strip():
        return render_view(state)
    return _apply_load(state, load_from_pasted_text, text, request)


def handle_flatten_toggle(state: Optional[ViewState], enabled: bool):
    state = state or initial_state()
    return render_view(toggle_flatten(state, enabled))


def handle_column_selection(state: Optional[ViewState], selected: Optional[List[str]]):
    state = state or initial_state()
    return render_view(set_visible_columns(state, selected or []))


def handle_search(state: Optional[ViewState], term: Optional[str]):
    state = state or initial_state()
    return render_view(set_search_term(state, term))


def handle_items_per_page(state: Optional[ViewState], value):
    state = state or initial_state()
    return render_view(set_items_per_page(state, value))


def handle_page_step(step: int, state: Optional[ViewState]):
    state = state or initial_state()
    if step > 0:
        return render_view(next_page(state))
    return render_view(previous_page(state))
