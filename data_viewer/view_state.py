from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .flattening import DEFAULT_MAX_DEPTH, flatten_rows
from .ingestion import Dataset
from .schema_utils import infer_columns
from .values import render_cell, stringify_value

logger = logging.getLogger(__name__)

ITEMS_PER_PAGE_CHOICES = (10, 25, 50, 100)
DEFAULT_ITEMS_PER_PAGE = 25


@dataclass(frozen=True)
class ViewState:
    """Everything the table view shows, replaced wholesale by each event.

    `rows`, `columns` and `visible_columns` are derived from `dataset` and
    `flatten` and are always rebuilt together.
    """

    dataset: Optional[Dataset] = None
    flatten: bool = False
    rows: Tuple[Dict[str, Any], ...] = ()
    columns: Tuple[str, ...] = ()
    visible_columns: Tuple[str, ...] = ()
    search_term: str = ''
    current_page: int = 1
    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    max_flatten_depth: int = DEFAULT_MAX_DEPTH

    @property
    def has_data(self) -> bool:
        return bool(self.rows)

    @property
    def is_json(self) -> bool:
        return self.dataset is not None and self.dataset.data_format.is_json


# --- Derived computations ---

def filter_rows(rows: Iterable[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    """Keep rows where any value contains `term`, ignoring case.

    All of a row's values are searched, not only the visible columns.
    """
    rows = list(rows)
    if not term:
        return rows
    needle = term.lower()
    return [row for row in rows if any(needle in stringify_value(v).lower() for v in row.values())]


def total_pages(count: int, per_page: int) -> int:
    if count <= 0:
        return 0
    return math.ceil(count / per_page)


def paginate(rows: Sequence[Dict[str, Any]], page: int, per_page: int) -> List[Dict[str, Any]]:
    start = (page - 1) * per_page
    return list(rows[start:start + per_page])


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def filtered_rows(state: ViewState) -> List[Dict[str, Any]]:
    return filter_rows(state.rows, state.search_term)


def page_count(state: ViewState) -> int:
    return total_pages(len(filtered_rows(state)), state.items_per_page)


def page_rows(state: ViewState) -> List[Dict[str, Any]]:
    return paginate(filtered_rows(state), state.current_page, state.items_per_page)


def has_previous_page(state: ViewState) -> bool:
    return state.current_page > 1


def has_next_page(state: ViewState) -> bool:
    return state.current_page < page_count(state)


def shows_raw_json(state: ViewState) -> bool:
    return state.is_json and not state.flatten


def render_page(state: ViewState) -> List[List[str]]:
    """Cell text for the current page, restricted to the visible columns."""
    raw_json = shows_raw_json(state)
    return [
        [render_cell(row.get(col), raw_json) for col in state.visible_columns]
        for row in page_rows(state)
    ]


# --- Reducers ---

def _with_clamped_page(state: ViewState) -> ViewState:
    page = clamp_page(state.current_page, page_count(state))
    if page == state.current_page:
        return state
    return replace(state, current_page=page)


def _rebuild(state: ViewState) -> ViewState:
    """Recompute rows, columns and visible columns from the raw dataset."""
    if state.dataset is None:
        return replace(state, rows=(), columns=(), visible_columns=())
    rows = flatten_rows(
        state.dataset.rows,
        enabled=state.flatten and state.dataset.data_format.is_json,
        max_depth=state.max_flatten_depth,
    )
    columns = tuple(infer_columns(rows))
    return replace(state, rows=tuple(rows), columns=columns, visible_columns=columns)


def initial_state(items_per_page: int = DEFAULT_ITEMS_PER_PAGE, max_flatten_depth: int = DEFAULT_MAX_DEPTH) -> ViewState:
    if items_per_page not in ITEMS_PER_PAGE_CHOICES:
        raise ValueError(f"items_per_page must be one of {ITEMS_PER_PAGE_CHOICES}, got {items_per_page}")
    return ViewState(items_per_page=items_per_page, max_flatten_depth=max_flatten_depth)


def load_dataset(state: ViewState, dataset: Dataset) -> ViewState:
    """Replace the dataset; rows, columns and visible columns are rebuilt and the page resets."""
    new_state = _rebuild(replace(state, dataset=dataset, current_page=1))
    return _with_clamped_page(new_state)


def toggle_flatten(state: ViewState, enabled: bool) -> ViewState:
    return _with_clamped_page(_rebuild(replace(state, flatten=bool(enabled))))


def set_visible_columns(state: ViewState, columns: Iterable[str]) -> ViewState:
    wanted = set(columns or [])
    visible = tuple(col for col in state.columns if col in wanted)
    return replace(state, visible_columns=visible)


def toggle_column(state: ViewState, column: str, visible: bool) -> ViewState:
    current = set(state.visible_columns)
    if visible:
        current.add(column)
    else:
        current.discard(column)
    return set_visible_columns(state, current)


def set_search_term(state: ViewState, term: Optional[str]) -> ViewState:
    return _with_clamped_page(replace(state, search_term=term or ''))


def set_items_per_page(state: ViewState, items_per_page: int) -> ViewState:
    items_per_page = int(items_per_page)
    if items_per_page not in ITEMS_PER_PAGE_CHOICES:
        raise ValueError(f"items_per_page must be one of {ITEMS_PER_PAGE_CHOICES}, got {items_per_page}")
    return _with_clamped_page(replace(state, items_per_page=items_per_page))


def go_to_page(state: ViewState, page: int) -> ViewState:
    return _with_clamped_page(replace(state, current_page=int(page)))


def next_page(state: ViewState) -> ViewState:
    if not has_next_page(state):
        return state
    return go_to_page(state, state.current_page + 1)


def previous_page(state: ViewState) -> ViewState:
    if not has_previous_page(state):
        return state
    return go_to_page(state, state.current_page - 1)


class LoadSequencer:
    """Issues load tickets per session so only the newest load is applied.

    Loads for one session may overlap (an upload still reading while a paste
    arrives). Gradio hands each event its own copy of the session state, so
    the latest ticket has to live outside that state.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest: Dict[Any, int] = {}

    def begin(self, session: Any = None) -> int:
        with self._lock:
            ticket = self._latest.get(session, 0) + 1
            self._latest[session] = ticket
            return ticket

    def is_current(self, session: Any, ticket: int) -> bool:
        with self._lock:
            return self._latest.get(session) == ticket
