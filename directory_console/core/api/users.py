"""User resource operations on the directory API."""
from __future__ import annotations
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from .client import ApiClient
from .exceptions import ApiError, CreateError, DeleteError, UpdateError

logger = logging.getLogger(__name__)

USERS_ENDPOINT = "/users"
USER_BY_ID_ENDPOINT = "/users/{id}"


class UsersApi:
    """Service for the ``/users`` resource.

    Reads propagate the classified transport error; mutations re-raise it as
    CreateError, UpdateError or DeleteError.
    """

    def __init__(
        self,
        client: ApiClient,
        users_endpoint: str = USERS_ENDPOINT,
        user_by_id_endpoint: str = USER_BY_ID_ENDPOINT,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the users service.

        Args:
            client: Directory API client
            users_endpoint: Collection path
            user_by_id_endpoint: Item path template containing ``{id}``
            clock: Wall clock used for optimistic ids
        """
        self.client = client
        self.users_endpoint = users_endpoint
        self.user_by_id_endpoint = user_by_id_endpoint
        self._clock = clock
        self._last_fallback_id = 0

    def _user_path(self, user_id) -> str:
        return self.user_by_id_endpoint.replace("{id}", str(user_id))

    def next_fallback_id(self) -> int:
        """Return an optimistic id: current time in ms, strictly increasing."""
        candidate = int(self._clock() * 1000)
        if candidate <= self._last_fallback_id:
            candidate = self._last_fallback_id + 1
        self._last_fallback_id = candidate
        return candidate

    def get_users(self) -> List[Dict[str, Any]]:
        """Return every user in the directory."""
        try:
            return self.client.get(self.users_endpoint) or []
        except ApiError as exc:
            logger.error(f"Error fetching users: {exc}")
            raise

    def get_user_by_id(self, user_id) -> Optional[Dict[str, Any]]:
        """Return a single user representation."""
        try:
            return self.client.get(self._user_path(user_id))
        except ApiError as exc:
            logger.error(f"Error fetching user {user_id}: {exc}")
            raise

    def create_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a user.

        The backing API only simulates creation, so its answer is used for the
        id alone; the submitted data is what gets stored locally. When the
        answer carries no integer id an optimistic one is synthesized.

        Raises:
            CreateError: On any transport failure
        """
        try:
            response = self.client.post(self.users_endpoint, user_data)
        except ApiError as exc:
            logger.error(f"Error creating user: {exc}")
            raise CreateError() from exc

        server_id = response.get("id") if isinstance(response, dict) else None
        try:
            user_id = int(server_id) if server_id else None
        except (TypeError, ValueError):
            logger.warning(f"Ignoring non-numeric id {server_id!r} returned for created user")
            user_id = None
        if user_id is None:
            user_id = self.next_fallback_id()
        return {**user_data, "id": user_id}

    def update_user(self, user_id, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """Replace a user and return the submitted data under its integer id.

        Raises:
            UpdateError: On any transport failure
        """
        try:
            self.client.put(self._user_path(user_id), user_data)
        except ApiError as exc:
            logger.error(f"Error updating user {user_id}: {exc}")
            raise UpdateError(user_id=user_id) from exc
        return {**user_data, "id": int(user_id)}

    def delete_user(self, user_id) -> Dict[str, Any]:
        """Delete a user.

        Raises:
            DeleteError: On any transport failure
        """
        try:
            self.client.delete(self._user_path(user_id))
        except ApiError as exc:
            logger.error(f"Error deleting user {user_id}: {exc}")
            raise DeleteError(user_id=user_id) from exc
        return {"success": True, "id": int(user_id)}
