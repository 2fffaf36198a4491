"""Form data ↔ API user transformations.

This module converts between the flat form representation edited by the
console and the nested user representation served by the directory API.

Usage:
    # Form → API
    api_user = UserTransformer.form_to_api(form_data)

    # API → Form
    form_data = UserTransformer.api_to_form(api_user)
"""
from __future__ import annotations
from typing import Any, Dict, Tuple

DEFAULT_DEPARTMENT = "Not specified"

FORM_FIELDS = ("firstName", "lastName", "username", "email", "phone", "website", "department")


def split_full_name(full_name: str | None) -> Tuple[str, str]:
    """Split a display name on its first space into (first name, last name).

    >>> split_full_name("Mary Ann Smith")
    ('Mary', 'Ann Smith')
    """
    if not full_name:
        return "", ""
    first, _, last = full_name.partition(" ")
    return first, last


def get_department(user: Dict[str, Any]) -> str:
    """Return the department stored as the nested organization name, or ""."""
    company = user.get("company") or {}
    if not isinstance(company, dict):
        return ""
    return company.get("name") or ""


def _clean(form_data: Dict[str, Any], key: str) -> str:
    return str(form_data.get(key) or "").strip()


class UserTransformer:
    """Bidirectional transformer for form/API user representations."""

    @staticmethod
    def form_to_api(form_data: Dict[str, Any]) -> Dict[str, Any]:
        """Convert console form data into the API user shape.

        Args:
            form_data: Flat form fields (firstName, lastName, username, ...)

        Returns:
            User representation without an id

        Example:
            >>> api_user = UserTransformer.form_to_api({
            ...     "firstName": "Ada", "lastName": "Lovelace",
            ...     "username": "ada", "email": "ada@example.com",
            ... })
            >>> api_user["name"], api_user["company"]["name"]
            ('Ada Lovelace', 'Not specified')
        """
        full_name = f"{_clean(form_data, 'firstName')} {_clean(form_data, 'lastName')}".strip()
        return {
            "name": full_name,
            "username": _clean(form_data, "username"),
            "email": _clean(form_data, "email"),
            "phone": _clean(form_data, "phone"),
            "website": _clean(form_data, "website"),
            "company": {
                "name": _clean(form_data, "department") or DEFAULT_DEPARTMENT,
            },
            # The API schema requires an address block the console never edits
            "address": {
                "street": "",
                "suite": "",
                "city": "",
                "zipcode": "",
                "geo": {
                    "lat": "0",
                    "lng": "0",
                },
            },
        }

    @staticmethod
    def api_to_form(user: Dict[str, Any]) -> Dict[str, str]:
        """Convert an API user into editable form fields."""
        first_name, last_name = split_full_name(user.get("name"))
        return {
            "firstName": first_name,
            "lastName": last_name,
            "username": user.get("username") or "",
            "email": user.get("email") or "",
            "phone": user.get("phone") or "",
            "website": user.get("website") or "",
            "department": get_department(user),
        }
