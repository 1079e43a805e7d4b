from __future__ import annotations

import math
from dataclasses import dataclass

PAGE_SIZE_OPTIONS = (5, 10, 20, 50)
DEFAULT_PAGE_SIZE = 10


@dataclass
class PaginationState:
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE


def snap_page_size(requested: int) -> int:
    """Closest allowed page size; ties resolve to the smaller option."""
    return min(PAGE_SIZE_OPTIONS, key=lambda option: (abs(option - requested), option))


def page_count_for(total_rows: int, page_size: int) -> int:
    return max(1, math.ceil(max(0, total_rows) / max(1, page_size)))


def next_page(state: PaginationState, page_count: int) -> PaginationState:
    if state.page_index >= page_count - 1:
        return state
    state.page_index += 1
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page_index = max(0, state.page_index - 1)
    return state


def clamp_page(state: PaginationState, page_count: int) -> PaginationState:
    state.page_index = min(max(0, state.page_index), max(0, page_count - 1))
    return state


def resize_page(state: PaginationState, requested: int) -> PaginationState:
    first_row = state.page_index * state.page_size
    state.page_size = snap_page_size(requested)
    state.page_index = first_row // state.page_size
    return state
