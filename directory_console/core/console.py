"""
Console Service Layer — Directory CRUD Orchestration

This module wires the record store, the paginator and the validator into the
flows a console front-end drives: load (with retry), submit a create/edit
form, delete, search/filter/sort, and page through the result.

Architecture:
    front-end ──> console.py ──┬──> user_store.py ──> api.users ──> directory API
                               ├──> pagination.py
                               └──> validators.py

Features:
    - One instance of each collaborator per console, passed explicitly
    - Validation gates every mutation; invalid forms never reach the network
    - The paginator follows the store's derived view automatically
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..config.settings import AppConfig, load_settings
from .api.client import ApiClient
from .api.exceptions import UserNotFoundError
from .api.users import UsersApi
from .messages import ERRORS, SUCCESS
from .pagination import PageState, PageWindow, Paginator
from .query import SortSpec
from .user_store import UserStore
from .user_transformer import UserTransformer
from .validators import UserValidator, ValidationResult, exclude_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of a form submission.

    ``user`` is set when the mutation went through; otherwise ``validation``
    holds the violations that blocked it. ``notice`` is the text to show.
    """
    validation: ValidationResult
    user: Optional[Dict[str, Any]] = None
    notice: str = ERRORS.VALIDATION_ERROR

    @property
    def ok(self) -> bool:
        return self.user is not None


class DirectoryConsole:
    """Console facade over the directory core.

    Usage:
        console = DirectoryConsole()
        console.load()
        result = console.submit({"firstName": "Ada", ...})
        if not result.ok:
            show(result.validation.first_errors())
    """

    def __init__(self, settings: Optional[AppConfig] = None, api: Optional[UsersApi] = None):
        """Build the collaborators.

        Args:
            settings: Application settings (loaded from the environment if omitted)
            api: Users service (built from ``settings`` if omitted)
        """
        self.settings = settings or load_settings()
        if api is None:
            api = UsersApi(
                ApiClient.from_settings(self.settings),
                users_endpoint=self.settings.users_endpoint,
                user_by_id_endpoint=self.settings.user_by_id_endpoint,
            )
        self.store = UserStore(
            api,
            default_sort=SortSpec(self.settings.default_sort_field, self.settings.default_sort_order),
        )
        self.paginator = Paginator(
            page_size=self.settings.default_page_size,
            page_sizes=self.settings.page_sizes,
            max_visible_pages=self.settings.max_visible_pages,
        )
        self.validator = UserValidator(self.settings.validation)
        self.store.subscribe(self.paginator.update_data)

    # ─────────────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────────────

    def load(self) -> List[Dict[str, Any]]:
        """Load every user. Errors propagate so the caller can offer a retry."""
        return self.store.load_all()

    def retry_load(self) -> List[Dict[str, Any]]:
        logger.info("Retrying user load")
        return self.load()

    # ─────────────────────────────────────────────────────────────────────
    # Forms
    # ─────────────────────────────────────────────────────────────────────

    def validate(self, form_data: Mapping[str, Any], exclude_id: Any = None) -> ValidationResult:
        return self.validator.validate_form(form_data, self.store.get_all(), exclude_id=exclude_id)

    def validate_field(self, name: str, value: Any, exclude_id: Any = None) -> List[str]:
        """Check a single field while the user types."""
        others = exclude_user(self.store.get_all(), exclude_id)
        return self.validator.validate_field(name, value, others)

    def edit_form(self, user_id: Any) -> Dict[str, str]:
        """Form data for editing an existing user.

        Raises:
            UserNotFoundError: If no user has this id
        """
        return UserTransformer.api_to_form(self._require(user_id))

    def submit(self, form_data: Mapping[str, Any], user_id: Any = None) -> SubmitResult:
        """Validate and then create (``user_id`` is None) or update a user.

        Raises:
            UserNotFoundError: If ``user_id`` does not name a loaded user
            CreateError / UpdateError: If the API call failed
        """
        if user_id is not None:
            self._require(user_id)

        validation = self.validate(form_data, exclude_id=user_id)
        if not validation.is_valid:
            logger.info(f"Submission blocked by validation on {sorted(validation.errors)}")
            return SubmitResult(validation=validation)

        if user_id is None:
            user = self.store.create(form_data)
            notice = SUCCESS.USER_CREATED
        else:
            user = self.store.update(user_id, form_data)
            notice = SUCCESS.USER_UPDATED
        return SubmitResult(validation=validation, user=user, notice=notice)

    def delete(self, user_id: Any) -> bool:
        """Delete a loaded user.

        Raises:
            UserNotFoundError: If no user has this id
            DeleteError: If the API call failed
        """
        self._require(user_id)
        return self.store.delete(user_id)

    def _require(self, user_id: Any) -> Dict[str, Any]:
        user = self.store.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    # ─────────────────────────────────────────────────────────────────────
    # View
    # ─────────────────────────────────────────────────────────────────────

    def search(self, text: str) -> List[Dict[str, Any]]:
        return self.store.apply_search(text)

    def apply_filters(self, criteria: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return self.store.apply_filters(criteria)

    def clear_filters(self) -> List[Dict[str, Any]]:
        return self.store.clear_filters()

    def sort(self, field: str, order: Optional[str] = None) -> List[Dict[str, Any]]:
        return self.store.sort(field, order)

    def toggle_sort_order(self) -> str:
        return self.store.toggle_sort_order()

    def current_page(self) -> List[Dict[str, Any]]:
        return self.paginator.get_current_page_data()

    def page_state(self) -> PageState:
        return self.paginator.get_current_state()

    def page_range(self) -> PageWindow:
        return self.paginator.get_page_range()
