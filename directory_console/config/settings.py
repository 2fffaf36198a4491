"""Settings loader backed by environment variables."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://jsonplaceholder.typicode.com"
DEFAULT_PAGE_SIZES = [10, 25, 50, 100]


@dataclass(frozen=True)
class ValidationRules:
    """Length bounds applied by the form validator."""
    min_name_length: int = 2
    max_name_length: int = 50
    max_email_length: int = 100
    max_phone_length: int = 20
    max_website_length: int = 200
    max_department_length: int = 50


@dataclass
class AppConfig:
    """Application configuration container."""
    # Backing API
    api_base_url: str = DEFAULT_API_BASE_URL
    users_endpoint: str = "/users"
    user_by_id_endpoint: str = "/users/{id}"
    request_timeout: float = 10.0
    retry_attempts: int = 3
    retry_delay_ms: int = 1000

    # Pagination
    default_page_size: int = 10
    page_sizes: list[int] = field(default_factory=lambda: list(DEFAULT_PAGE_SIZES))
    max_visible_pages: int = 5

    # Sorting
    default_sort_field: str = "id"
    default_sort_order: str = "asc"

    # Validation
    validation: ValidationRules = field(default_factory=ValidationRules)

    @property
    def retry_delay(self) -> float:
        """Base retry delay in seconds."""
        return self.retry_delay_ms / 1000.0


def _get_int(var_name: str, default: int, minimum: Optional[int] = None) -> int:
    """Read an integer environment variable, falling back to ``default``."""
    raw = os.environ.get(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"Environment variable {var_name} must be an integer (got {raw!r})")
    if minimum is not None and value < minimum:
        raise ValueError(f"Environment variable {var_name} must be >= {minimum} (got {value})")
    return value


def _get_float(var_name: str, default: float) -> float:
    raw = os.environ.get(var_name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw.strip())
    except ValueError:
        raise ValueError(f"Environment variable {var_name} must be a number (got {raw!r})")
    if value <= 0:
        raise ValueError(f"Environment variable {var_name} must be positive (got {value})")
    return value


def _get_int_list(var_name: str, default: list[int]) -> list[int]:
    raw = os.environ.get(var_name, "")
    items = [item.strip() for item in raw.split(",") if item.strip()]
    if not items:
        return list(default)
    try:
        values = sorted({int(item) for item in items})
    except ValueError:
        raise ValueError(f"Environment variable {var_name} must be a comma-separated list of integers (got {raw!r})")
    if any(value < 1 for value in values):
        raise ValueError(f"Environment variable {var_name} must only contain positive sizes (got {raw!r})")
    return values


def load_settings() -> AppConfig:
    """Load application settings from the environment."""
    api_base_url = os.environ.get("DIRECTORY_API_BASE_URL", "").strip() or DEFAULT_API_BASE_URL

    page_sizes = _get_int_list("DIRECTORY_PAGE_SIZES", DEFAULT_PAGE_SIZES)
    default_page_size = _get_int("DIRECTORY_PAGE_SIZE", 10, minimum=1)
    if default_page_size not in page_sizes:
        raise ValueError(
            f"DIRECTORY_PAGE_SIZE={default_page_size} is not one of the allowed page sizes {page_sizes}"
        )

    min_name_length = _get_int("DIRECTORY_MIN_NAME_LENGTH", 2, minimum=0)
    max_name_length = _get_int("DIRECTORY_MAX_NAME_LENGTH", 50, minimum=1)
    if min_name_length > max_name_length:
        raise ValueError("DIRECTORY_MIN_NAME_LENGTH cannot exceed DIRECTORY_MAX_NAME_LENGTH")

    config = AppConfig(
        api_base_url=api_base_url.rstrip("/"),
        request_timeout=_get_float("DIRECTORY_API_TIMEOUT", 10.0),
        retry_attempts=_get_int("DIRECTORY_API_RETRY_ATTEMPTS", 3, minimum=1),
        retry_delay_ms=_get_int("DIRECTORY_API_RETRY_DELAY_MS", 1000, minimum=0),
        default_page_size=default_page_size,
        page_sizes=page_sizes,
        max_visible_pages=_get_int("DIRECTORY_MAX_VISIBLE_PAGES", 5, minimum=1),
        validation=ValidationRules(
            min_name_length=min_name_length,
            max_name_length=max_name_length,
        ),
    )

    logger.info(
        f"[settings] api={config.api_base_url}; timeout={config.request_timeout}s; "
        f"retries={config.retry_attempts}; page_size={config.default_page_size}"
    )
    return config
