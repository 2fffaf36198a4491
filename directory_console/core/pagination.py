"""Page slicing, navigation and the page-number window."""
from __future__ import annotations
import logging
import math
from dataclasses import dataclass, replace
from typing import Any, List, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
PAGE_SIZES = (10, 25, 50, 100)
MAX_VISIBLE_PAGES = 5
ELLIPSIS = "..."


@dataclass(frozen=True)
class PageState:
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_items: int = 0

    def __post_init__(self):
        if self.page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {self.page_size}")
        if self.current_page < 1:
            raise ValueError(f"current_page must be at least 1, got {self.current_page}")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.page_size)

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def first_index(self) -> int:
        """0-based index of the first item on the current page."""
        return (self.current_page - 1) * self.page_size

    def as_dict(self) -> dict:
        return {
            "current_page": self.current_page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }


@dataclass(frozen=True)
class PageWindow:
    """Page numbers to show around the current page.

    ``start``..``end`` is the contiguous window. ``show_first_page`` and
    ``show_last_page`` mark the extra first/last page buttons, and the
    ellipsis flags mark gaps between them and the window.
    """
    start: int
    end: int
    total_pages: int
    show_first_page: bool
    leading_ellipsis: bool
    trailing_ellipsis: bool
    show_last_page: bool

    @property
    def pages(self) -> List[int]:
        return list(range(self.start, self.end + 1))

    def items(self) -> List[Union[int, str]]:
        """Flatten the window into buttons, e.g. ``[1, "...", 4, 5, 6, "...", 12]``."""
        items: List[Union[int, str]] = []
        if self.show_first_page:
            items.append(1)
            if self.leading_ellipsis:
                items.append(ELLIPSIS)
        items.extend(self.pages)
        if self.show_last_page:
            if self.trailing_ellipsis:
                items.append(ELLIPSIS)
            items.append(self.total_pages)
        return items


def page_window(current_page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES) -> PageWindow:
    """Compute the window of page numbers centered on ``current_page``."""
    if max_visible < 1:
        raise ValueError("max_visible must be at least 1")
    if total_pages < 1:
        return PageWindow(1, 0, 0, False, False, False, False)

    end = min(total_pages, max(1, current_page - max_visible // 2) + max_visible - 1)
    start = max(1, end - max_visible + 1)
    return PageWindow(
        start=start,
        end=end,
        total_pages=total_pages,
        show_first_page=start > 1,
        leading_ellipsis=start > 2,
        trailing_ellipsis=end < total_pages - 1,
        show_last_page=end < total_pages,
    )


def normalize_page(state: PageState) -> PageState:
    """Return to page 1 when the current page no longer exists."""
    total_pages = state.total_pages
    if state.current_page > total_pages and total_pages > 0:
        return replace(state, current_page=1)
    return state


def paginate(sequence: Sequence[Any], state: PageState) -> Tuple[List[Any], PageState]:
    """Slice one page out of ``sequence``.

    The returned state carries the sequence length and, when the requested
    page is past the end, is reset to page 1.
    """
    new_state = normalize_page(replace(state, total_items=len(sequence)))
    start = new_state.first_index
    return list(sequence[start:start + new_state.page_size]), new_state


class Paginator:
    """Stateful pager over the latest derived view."""

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_sizes: Sequence[int] = PAGE_SIZES,
        max_visible_pages: int = MAX_VISIBLE_PAGES,
    ):
        if page_size not in page_sizes:
            raise ValueError(f"Page size {page_size} is not one of {list(page_sizes)}")
        self.default_page_size = page_size
        self.page_sizes = tuple(page_sizes)
        self.max_visible_pages = max_visible_pages
        self._data: List[Any] = []
        self._state = PageState(page_size=page_size)

    def update_data(self, data: Sequence[Any]) -> None:
        """Replace the paged sequence, keeping the page unless it fell off the end."""
        self._data = list(data)
        self._state = normalize_page(replace(self._state, total_items=len(self._data)))

    def get_total_pages(self) -> int:
        return self._state.total_pages

    def get_current_page_data(self) -> List[Any]:
        items, _ = paginate(self._data, self._state)
        return items

    def go_to_page(self, page: int) -> int:
        """Move to ``page`` clamped to ``[1, total_pages]``."""
        target = max(1, min(int(page), self._state.total_pages))
        self._state = replace(self._state, current_page=target)
        return target

    def next_page(self) -> int:
        return self.go_to_page(self._state.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self._state.current_page - 1)

    def first_page(self) -> int:
        return self.go_to_page(1)

    def last_page(self) -> int:
        return self.go_to_page(self._state.total_pages)

    def change_page_size(self, new_size: int) -> int:
        """Switch page size while keeping the first visible item on screen.

        Returns:
            The new current page
        """
        new_size = int(new_size)
        if new_size not in self.page_sizes:
            raise ValueError(f"Page size {new_size} is not one of {list(self.page_sizes)}")
        first_index = self._state.first_index
        self._state = replace(
            self._state,
            page_size=new_size,
            current_page=first_index // new_size + 1,
        )
        logger.debug(f"Page size changed to {new_size}; now on page {self._state.current_page}")
        return self._state.current_page

    def get_current_state(self) -> PageState:
        return self._state

    def get_page_range(self) -> PageWindow:
        return page_window(self._state.current_page, self._state.total_pages, self.max_visible_pages)

    def get_summary(self) -> dict:
        """Describe the visible slice ("showing 11-20 of 42")."""
        state = self._state
        end_item = min(state.current_page * state.page_size, state.total_items)
        start_item = state.first_index + 1 if end_item > state.first_index else 0
        return {
            "current_page": state.current_page,
            "total_pages": state.total_pages,
            "start_item": start_item,
            "end_item": end_item,
            "total_items": state.total_items,
            "page_size": state.page_size,
        }

    def reset(self) -> None:
        self._data = []
        self._state = PageState(page_size=self.default_page_size)
