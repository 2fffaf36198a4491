"""Input validation for user form data.

Violations are returned as data, never raised: each check yields a list of
human-readable messages, and a form is valid when no field has any.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..config.settings import ValidationRules
from .messages import VALIDATION, format_message
from .user_transformer import FORM_FIELDS

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")
URL_PATTERN = re.compile(r"^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})[/\w .-]*/?$")

REQUIRED_FIELDS = ("firstName", "lastName", "username", "email")
OPTIONAL_FIELDS = ("phone", "website", "department")


@dataclass
class ValidationResult:
    """Field name → ordered violations. Empty means valid."""
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def first_errors(self) -> Dict[str, str]:
        """First violation per field, the one a form displays."""
        return {name: messages[0] for name, messages in self.errors.items()}


def _length_violations(value: str, minimum: Optional[int], maximum: Optional[int]) -> List[str]:
    violations = []
    if minimum is not None and len(value) < minimum:
        violations.append(format_message(VALIDATION.MIN_LENGTH, min=minimum))
    if maximum is not None and len(value) > maximum:
        violations.append(format_message(VALIDATION.MAX_LENGTH, max=maximum))
    return violations


def _same_id(left: Any, right: Any) -> bool:
    try:
        return int(left) == int(right)
    except (TypeError, ValueError):
        return left == right


def exclude_user(users: Iterable[Mapping[str, Any]], exclude_id: Any = None) -> List[Mapping[str, Any]]:
    """Drop the record being edited so it never collides with itself."""
    if exclude_id is None:
        return list(users)
    return [user for user in users if not _same_id(user.get("id"), exclude_id)]


class UserValidator:
    """Validate user form fields against static rules and existing users.

    Usage:
        validator = UserValidator()
        result = validator.validate_form(form_data, store.get_all(), exclude_id=3)
        if not result.is_valid:
            show(result.first_errors())
    """

    def __init__(self, rules: Optional[ValidationRules] = None):
        self.rules = rules or ValidationRules()

    def validate_field(self, name: str, value: Any, existing_users: Iterable[Mapping[str, Any]] = ()) -> List[str]:
        """Return every violation for one field. Unknown fields have no rules."""
        text = str(value or "").strip()

        if name in REQUIRED_FIELDS and not text:
            return [VALIDATION.REQUIRED_FIELD]
        if name in OPTIONAL_FIELDS and not text:
            return []

        if name in ("firstName", "lastName"):
            return self.validate_name(text)
        if name == "username":
            return self.validate_username(text, existing_users)
        if name == "email":
            return self.validate_email(text, existing_users)
        if name == "phone":
            return self.validate_phone(text)
        if name == "website":
            return self.validate_website(text)
        if name == "department":
            return self.validate_department(text)
        return []

    def validate_name(self, value: str) -> List[str]:
        return _length_violations(value, self.rules.min_name_length, self.rules.max_name_length)

    def validate_username(self, value: str, existing_users: Iterable[Mapping[str, Any]] = ()) -> List[str]:
        violations = _length_violations(value, self.rules.min_name_length, self.rules.max_name_length)
        wanted = value.lower()
        if any(str(user.get("username") or "").lower() == wanted for user in existing_users):
            violations.append(VALIDATION.DUPLICATE_USERNAME)
        return violations

    def validate_email(self, value: str, existing_users: Iterable[Mapping[str, Any]] = ()) -> List[str]:
        violations = []
        if not EMAIL_PATTERN.match(value):
            violations.append(VALIDATION.INVALID_EMAIL)
        violations.extend(_length_violations(value, None, self.rules.max_email_length))
        wanted = value.lower()
        if any(str(user.get("email") or "").lower() == wanted for user in existing_users):
            violations.append(VALIDATION.DUPLICATE_EMAIL)
        return violations

    def validate_phone(self, value: str) -> List[str]:
        violations = []
        if not PHONE_PATTERN.match(value):
            violations.append(VALIDATION.INVALID_PHONE)
        violations.extend(_length_violations(value, None, self.rules.max_phone_length))
        return violations

    def validate_website(self, value: str) -> List[str]:
        violations = []
        if not URL_PATTERN.match(value):
            violations.append(VALIDATION.INVALID_URL)
        violations.extend(_length_violations(value, None, self.rules.max_website_length))
        return violations

    def validate_department(self, value: str) -> List[str]:
        return _length_violations(value, None, self.rules.max_department_length)

    def validate_form(
        self,
        form_data: Mapping[str, Any],
        existing_users: Iterable[Mapping[str, Any]] = (),
        exclude_id: Any = None,
    ) -> ValidationResult:
        """Run every field rule and collect violations keyed by field name.

        Required fields missing from ``form_data`` count as blank.
        """
        candidates = exclude_user(existing_users, exclude_id)
        names = list(FORM_FIELDS) + [name for name in form_data if name not in FORM_FIELDS]

        errors: Dict[str, List[str]] = {}
        for name in names:
            if name not in form_data and name not in REQUIRED_FIELDS:
                continue
            violations = self.validate_field(name, form_data.get(name), candidates)
            if violations:
                errors[name] = violations
        return ValidationResult(errors)
