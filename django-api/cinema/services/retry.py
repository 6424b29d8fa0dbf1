"""Bounded retry for operations that hit transient store conflicts."""

import logging
from collections.abc import Callable
from typing import TypeVar

from cinema.domain.errors import ConflictError
from cinema.stores.interfaces import StoreConflictError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ATTEMPTS = 3


def retry_on_conflict(
    operation: Callable[[], T], *, attempts: int = DEFAULT_ATTEMPTS, name: str = "operation"
) -> T:
    """Run ``operation``, re-running it on StoreConflictError.

    Domain errors propagate immediately. After ``attempts`` conflicts a
    ConflictError is raised.
    """
    attempt = 1
    while True:
        try:
            return operation()
        except StoreConflictError as exc:
            if attempt >= attempts:
                logger.error("%s gave up after %d conflicts: %s", name, attempt, exc)
                raise ConflictError() from exc
            logger.warning("%s conflicted (attempt %d/%d): %s", name, attempt, attempts, exc)
            attempt += 1
