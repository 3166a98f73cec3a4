import logging
from ..schemas.auth import Notification

logger = logging.getLogger(__name__)


class Notifier:
    """Transient user-facing messages (the toast area of a page)."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def success(self, message: str) -> None:
        logger.info(message)
        self.notifications.append(Notification(level="success", message=message))

    def error(self, message: str) -> None:
        logger.warning(message)
        self.notifications.append(Notification(level="error", message=message))

    def drain(self) -> list[Notification]:
        out, self.notifications = self.notifications, []
        return out
