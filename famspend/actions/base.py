from __future__ import annotations

import inspect
import logging
from typing import Any, Awaitable, Callable, TypeVar

from pydantic import ValidationError

from ..core.errors import FamspendError, ValidationFailure
from .notify import Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


def require_text(value: str | None, label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationFailure(f"{label} cannot be empty.")
    return text


class Dispatcher:
    """Runs one logical mutation: backend call(s), then notify, then refetch.

    Failures are notified and re-raised so the caller can keep its form open.
    """

    def __init__(self, notifier: Notifier, on_success: Callable[[], Any] | None = None) -> None:
        self._notifier = notifier
        self._on_success = on_success
        self._pending: set[str] = set()

    def is_pending(self, action: str) -> bool:
        return action in self._pending

    async def _run(self, action: str, operation: Callable[[], Awaitable[T]], *, success: str, failure: str) -> T:
        self._pending.add(action)
        try:
            try:
                result = await operation()
            except (FamspendError, ValidationError) as e:
                message = getattr(e, "message", None) or str(e) or failure
                logger.error(f"{action} failed: {message}")
                self._notifier.error(message)
                raise
            self._notifier.success(success)
            if self._on_success is not None:
                outcome = self._on_success()
                if inspect.isawaitable(outcome):
                    await outcome
            return result
        finally:
            self._pending.discard(action)
