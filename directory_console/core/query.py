"""Search, filter and sort over an in-memory user list.

Everything here is a pure function of its arguments. The store keeps the
current criteria and calls :func:`derive_view` whenever data or criteria
change.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .user_transformer import get_department, split_full_name

ASC = "asc"
DESC = "desc"
SORT_ORDERS = (ASC, DESC)

FILTER_FIELDS = ("firstName", "lastName", "email", "department")
STRING_SORT_FIELDS = ("name", "email", "username")


@dataclass(frozen=True)
class SortSpec:
    field: str = "id"
    order: str = ASC

    def __post_init__(self):
        if self.order not in SORT_ORDERS:
            raise ValueError(f"Sort order must be one of {SORT_ORDERS} (got {self.order!r})")

    def toggled(self) -> "SortSpec":
        return replace(self, order=DESC if self.order == ASC else ASC)


DEFAULT_SORT = SortSpec()


def normalize_query(query: Optional[str]) -> str:
    return (query or "").strip().lower()


def _text(value: Any) -> str:
    return str(value or "").lower()


def matches_search(user: Mapping[str, Any], query: str) -> bool:
    """True if any of name, username, email or department contains ``query``."""
    needle = normalize_query(query)
    if not needle:
        return True
    fields = (user.get("name"), user.get("username"), user.get("email"), get_department(user))
    return any(needle in _text(field) for field in fields)


def _filter_target(user: Mapping[str, Any], key: str) -> Optional[str]:
    if key == "firstName":
        return split_full_name(user.get("name"))[0]
    if key == "lastName":
        return split_full_name(user.get("name"))[1]
    if key == "email":
        return user.get("email") or ""
    if key == "department":
        return get_department(user)
    return None


def active_filters(filters: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Drop blank criteria and normalize the rest."""
    return {
        key: str(value).strip().lower()
        for key, value in (filters or {}).items()
        if value is not None and str(value).strip()
    }


def matches_filters(user: Mapping[str, Any], filters: Optional[Mapping[str, Any]]) -> bool:
    """True if every non-empty criterion matches its field. Unknown keys never constrain."""
    for key, needle in active_filters(filters).items():
        target = _filter_target(user, key)
        if target is None:
            continue
        if needle not in target.lower():
            return False
    return True


def _sort_key(user: Mapping[str, Any], field: str):
    if field == "id":
        value = user.get("id")
        try:
            return (0, float(value))
        except (TypeError, ValueError):
            return (1, _text(value))
    if field in STRING_SORT_FIELDS:
        return (1, _text(user.get(field)))

    value = user.get(field)
    # Mixed types must stay comparable: numbers, then strings, then blanks
    if isinstance(value, bool):
        return (0, int(value))
    if isinstance(value, (int, float)):
        return (0, value)
    if value is None or value == "":
        return (2, "")
    return (1, str(value).lower())


def sort_users(users: Iterable[Mapping[str, Any]], sort: SortSpec = DEFAULT_SORT) -> List[Mapping[str, Any]]:
    """Stable sort; equal keys keep their input order in both directions."""
    return sorted(users, key=lambda user: _sort_key(user, sort.field), reverse=sort.order == DESC)


def derive_view(
    users: Iterable[Mapping[str, Any]],
    filters: Optional[Mapping[str, Any]] = None,
    search: Optional[str] = None,
    sort: SortSpec = DEFAULT_SORT,
) -> List[Mapping[str, Any]]:
    """Search, then filter, then sort.

    Both predicates are pure, so applying the filters first yields the same
    result.
    """
    view = [user for user in users if matches_search(user, search or "")]
    if active_filters(filters):
        view = [user for user in view if matches_filters(user, filters)]
    return sort_users(view, sort)
