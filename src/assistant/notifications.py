"""Fire-and-forget notification stream for the presentation layer."""

import logging
from collections.abc import Callable

from src.models.chat import Notification, NotificationSeverity

logger = logging.getLogger(__name__)

Subscriber = Callable[[Notification], None]

_LOG_LEVELS = {
    NotificationSeverity.SUCCESS: logging.INFO,
    NotificationSeverity.INFO: logging.INFO,
    NotificationSeverity.ERROR: logging.ERROR,
}


class NotificationBus:
    """Delivers each notification to the current subscribers and forgets it."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(
        self,
        message: str,
        severity: NotificationSeverity = NotificationSeverity.INFO,
    ) -> Notification:
        notification = Notification(message=message, severity=severity)
        logger.log(_LOG_LEVELS[severity], f"[{severity.value}] {message}")
        for callback in list(self._subscribers):
            try:
                callback(notification)
            except Exception:
                # A broken subscriber must not break the chat turn.
                logger.exception("Notification subscriber failed")
        return notification

    def success(self, message: str) -> Notification:
        return self.publish(message, NotificationSeverity.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.publish(message, NotificationSeverity.ERROR)

    def info(self, message: str) -> Notification:
        return self.publish(message, NotificationSeverity.INFO)
