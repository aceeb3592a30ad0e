"""
User-facing error messages.

System Law violations are shown verbatim; storage failures and anything
unexpected are mapped to fixed, safe text that never exposes internals
(file paths, SQL, stack traces).

Usage:
    from execution_os.core.error_messages import describe_error

    try:
        engine.save_task(task)
    except Exception as e:
        logger.error(f"Save failed: {e}", exc_info=True)
        show_alert(describe_error(e))
"""

import logging
import re
from typing import Optional

from ..domain.errors import (
    AttachmentTooLarge,
    StorageError,
    StorageErrorKind,
    ValidationError,
)

logger = logging.getLogger(__name__)

_DEFAULT_MESSAGE = "Something went wrong. Please try again."

_STORAGE_MESSAGES = {
    StorageErrorKind.QUOTA_EXCEEDED: (
        "Storage Limit Exceeded. Delete some files or projects to make space."
    ),
    StorageErrorKind.WRITE_DENIED: (
        "Data Save Failed. Ensure you have storage permissions enabled."
    ),
}

# Order matters: more specific types first.
_TYPE_MAP: dict[type, str] = {
    PermissionError: _STORAGE_MESSAGES[StorageErrorKind.WRITE_DENIED],
    FileNotFoundError: "A required file could not be found. Please try again.",
    ValueError: "The data could not be processed. Please check it and try again.",
}

_KEYWORD_PATTERNS: list[tuple[re.Pattern, str]] = [
    (
        re.compile(r"quota|disk is full|no space", re.IGNORECASE),
        _STORAGE_MESSAGES[StorageErrorKind.QUOTA_EXCEEDED],
    ),
    (
        re.compile(r"database|sqlite|operational.?error|locked", re.IGNORECASE),
        "A temporary data issue occurred. Please try again in a moment.",
    ),
]


def describe_error(
    exc: Optional[BaseException],
    *,
    context: Optional[str] = None,
) -> str:
    """Return a message for *exc* that is safe to show to the user.

    Args:
        exc: The caught exception (or None).
        context: Optional description of the operation that failed (e.g.
            ``"saving your task"``); prefixes the message when given.
    """
    message = _DEFAULT_MESSAGE if exc is None else _resolve_message(exc)
    if context:
        return f"Sorry, there was an error {context}. {message}"
    return message


def _resolve_message(exc: BaseException) -> str:
    if isinstance(exc, (ValidationError, AttachmentTooLarge)):
        return str(exc)

    if isinstance(exc, StorageError):
        return _STORAGE_MESSAGES[exc.kind]

    for exc_type, msg in _TYPE_MAP.items():
        if isinstance(exc, exc_type):
            return msg

    raw = str(exc)
    for pattern, msg in _KEYWORD_PATTERNS:
        if pattern.search(raw):
            return msg

    return _DEFAULT_MESSAGE
