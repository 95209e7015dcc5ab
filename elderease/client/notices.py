"""
User-facing messages.

Pages show these instead of raw error text.
"""

import logging

from elderease.core.exceptions import ElderEaseError

logger = logging.getLogger(__name__)

PROGRESS_NOT_SAVED = "We couldn't save your progress right now. You can keep going; we'll try again on your next step."
BOOKMARK_NOT_SAVED = "We couldn't update your saved tutorials. Please try again in a moment."

_GENERIC = ElderEaseError.default_message


def user_message(exc: BaseException) -> str:
    """A short, non-technical message for any error."""
    if isinstance(exc, ElderEaseError):
        return exc.message
    logger.error(f"Unexpected error shown to user as generic message: {exc!r}")
    return _GENERIC
