"""User-facing message catalogue.

Texts are grouped the way the console shows them: transport/mutation errors,
success notices, and per-field validation violations. Templates use ``{name}``
placeholders filled by :func:`format_message`.
"""
from __future__ import annotations


class ERRORS:
    NETWORK_ERROR = "Network error occurred. Please check your internet connection."
    SERVER_ERROR = "Server error occurred. Please try again later."
    TIMEOUT_ERROR = "Request timed out. Please try again."
    UNKNOWN_ERROR = "An unknown error occurred. Please try again."
    USER_NOT_FOUND = "User not found."
    VALIDATION_ERROR = "Please fix the validation errors and try again."
    DELETE_ERROR = "Failed to delete user. Please try again."
    CREATE_ERROR = "Failed to create user. Please try again."
    UPDATE_ERROR = "Failed to update user. Please try again."


class SUCCESS:
    USER_CREATED = "User created successfully!"
    USER_UPDATED = "User updated successfully!"


class VALIDATION:
    REQUIRED_FIELD = "This field is required."
    INVALID_EMAIL = "Please enter a valid email address."
    INVALID_PHONE = "Please enter a valid phone number."
    INVALID_URL = "Please enter a valid website URL."
    MIN_LENGTH = "Must be at least {min} characters long."
    MAX_LENGTH = "Must be no more than {max} characters long."
    DUPLICATE_USERNAME = "Username already exists."
    DUPLICATE_EMAIL = "Email already exists."


def format_message(template: str, **replacements) -> str:
    """Fill ``{key}`` placeholders in a message template.

    Unknown placeholders are left untouched so a partially filled template
    still reads sensibly.

    >>> format_message(VALIDATION.MIN_LENGTH, min=2)
    'Must be at least 2 characters long.'
    """
    message = template
    for key, value in replacements.items():
        message = message.replace("{" + key + "}", str(value))
    return message
