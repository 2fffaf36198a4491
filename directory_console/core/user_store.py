"""In-memory user collection kept in sync with the directory API.

The store owns two lists:

- the canonical set, the users as last confirmed by the API;
- the working set, what search/filter/sort run over.

Both hold the same identities after every completed mutation. Local state
changes only after the API call succeeded; a failed call leaves both sets and
the derived view untouched and propagates the error.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from .api.users import UsersApi
from .query import DEFAULT_SORT, SortSpec, active_filters, derive_view, normalize_query
from .user_transformer import UserTransformer

logger = logging.getLogger(__name__)

ViewListener = Callable[[List[Dict[str, Any]]], None]


def _as_id(user_id: Any) -> Optional[int]:
    try:
        return int(user_id)
    except (TypeError, ValueError):
        return None


class UserStore:
    """Record store with search, filter and sort state."""

    def __init__(self, api: UsersApi, default_sort: SortSpec = DEFAULT_SORT):
        """Initialize the store.

        Args:
            api: Users resource service
            default_sort: Sort applied after load and on reset
        """
        self.api = api
        self.default_sort = default_sort
        self._canonical: List[Dict[str, Any]] = []
        self._working: List[Dict[str, Any]] = []
        self._view: List[Dict[str, Any]] = []
        self._filters: Dict[str, str] = {}
        self._search = ""
        self._sort = default_sort
        self._listeners: List[ViewListener] = []

    # ─────────────────────────────────────────────────────────────────────
    # Derived view
    # ─────────────────────────────────────────────────────────────────────

    def subscribe(self, listener: ViewListener) -> None:
        """Call ``listener`` with a copy of the derived view after every change."""
        self._listeners.append(listener)

    def _refresh(self) -> List[Dict[str, Any]]:
        self._view = derive_view(self._working, self._filters, self._search, self._sort)
        for listener in self._listeners:
            listener(list(self._view))
        return list(self._view)

    # ─────────────────────────────────────────────────────────────────────
    # CRUD
    # ─────────────────────────────────────────────────────────────────────

    def load_all(self) -> List[Dict[str, Any]]:
        """Fetch every user and rebuild both sets."""
        users = list(self.api.get_users())
        self._canonical = list(users)
        self._working = list(users)
        self._refresh()
        logger.info(f"Loaded {len(users)} user(s)")
        return list(users)

    def create(self, form_data: Mapping[str, Any]) -> Dict[str, Any]:
        """Create a user from form data and add it to both sets.

        The API does not persist creations and may hand out an id that is
        already taken locally; such ids are replaced by an optimistic one.
        """
        payload = UserTransformer.form_to_api(form_data)
        new_user = self.api.create_user(payload)
        if self.get_by_id(new_user["id"]) is not None:
            new_user = {**new_user, "id": self.api.next_fallback_id()}

        self._working.append(new_user)
        self._canonical.append(new_user)
        self._refresh()
        logger.info(f"User '{new_user.get('username')}' created (id={new_user['id']})")
        return new_user

    def update(self, user_id: Any, form_data: Mapping[str, Any]) -> Dict[str, Any]:
        """Replace a user in both sets. An id missing from a set leaves that set alone."""
        payload = UserTransformer.form_to_api(form_data)
        updated = self.api.update_user(user_id, payload)
        target = updated["id"]

        self._working = [updated if _as_id(user.get("id")) == target else user for user in self._working]
        self._canonical = [updated if _as_id(user.get("id")) == target else user for user in self._canonical]
        self._refresh()
        logger.info(f"User {target} updated")
        return updated

    def delete(self, user_id: Any) -> bool:
        """Delete a user and drop it from both sets."""
        result = self.api.delete_user(user_id)
        target = result["id"]

        self._working = [user for user in self._working if _as_id(user.get("id")) != target]
        self._canonical = [user for user in self._canonical if _as_id(user.get("id")) != target]
        self._refresh()
        logger.info(f"User {target} deleted")
        return True

    def get_by_id(self, user_id: Any) -> Optional[Dict[str, Any]]:
        """Exact integer id lookup in the working set."""
        target = _as_id(user_id)
        if target is None:
            return None
        return next((user for user in self._working if _as_id(user.get("id")) == target), None)

    def get_all(self) -> List[Dict[str, Any]]:
        """Copy of the canonical set."""
        return list(self._canonical)

    def get_filtered_view(self) -> List[Dict[str, Any]]:
        return list(self._view)

    def get_statistics(self) -> Dict[str, int]:
        return {
            "total": len(self._canonical),
            "filtered": len(self._view),
            "showing": len(self._view),
        }

    # ─────────────────────────────────────────────────────────────────────
    # Search, filters, sorting
    # ─────────────────────────────────────────────────────────────────────

    def apply_search(self, query: Optional[str]) -> List[Dict[str, Any]]:
        self._search = normalize_query(query)
        return self._refresh()

    def apply_filters(self, filters: Optional[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        self._filters = {key: str(value or "").strip() for key, value in (filters or {}).items()}
        return self._refresh()

    def clear_filters(self) -> List[Dict[str, Any]]:
        """Drop every filter criterion and the search query."""
        self._filters = {}
        self._search = ""
        return self._refresh()

    def sort(self, field: str, order: Optional[str] = None) -> List[Dict[str, Any]]:
        """Sort by ``field``; ``order`` defaults to the current direction."""
        self._sort = SortSpec(field, order or self._sort.order)
        return self._refresh()

    def toggle_sort_order(self) -> str:
        """Flip ascending/descending and return the new order."""
        self._sort = self._sort.toggled()
        self._refresh()
        return self._sort.order

    def get_current_sort(self) -> SortSpec:
        return self._sort

    def get_current_filters(self) -> Dict[str, str]:
        return dict(self._filters)

    def get_search_query(self) -> str:
        return self._search

    def has_active_filters(self) -> bool:
        return bool(active_filters(self._filters)) or bool(self._search)

    def get_filter_statistics(self) -> Dict[str, Any]:
        stats = self.get_statistics()
        return {
            "total_users": stats["total"],
            "filtered_users": stats["filtered"],
            "filters_active": self.has_active_filters(),
            "active_filter_count": len(active_filters(self._filters)),
            "search_active": bool(self._search),
        }

    def reset(self) -> List[Dict[str, Any]]:
        """Restore the working set from the canonical set and clear all criteria."""
        self._working = list(self._canonical)
        self._filters = {}
        self._search = ""
        self._sort = self.default_sort
        return self._refresh()
