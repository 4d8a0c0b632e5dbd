"""Transient user notifications (toasts)."""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Deque, List, Optional

from ccms_core_lib.i18n import t

logger = logging.getLogger(__name__)

MAX_NOTIFICATIONS = 20


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


NotificationListener = Callable[[Notification], None]


class Notifier:
    """Collects notifications for the host UI to display.

    Only the newest ``max_messages`` are kept; older toasts fall off.

    Usage:
        notifier = Notifier(preference.t)
        notifier.success("Case created successfully")
        notifier.messages[-1].title  # 'Success'
    """

    def __init__(
        self,
        translate: Callable[[str], str] = t,
        max_messages: int = MAX_NOTIFICATIONS,
    ):
        self._translate = translate
        self.messages: Deque[Notification] = deque(maxlen=max_messages)
        self._listeners: List[NotificationListener] = []

    @property
    def latest(self) -> Optional[Notification]:
        return self.messages[-1] if self.messages else None

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, notification: Notification) -> Notification:
        self.messages.append(notification)
        for listener in list(self._listeners):
            listener(notification)
        return notification

    def success(self, description: str, title: Optional[str] = None) -> Notification:
        return self.notify(
            Notification(title=title or self._translate("success"), description=description)
        )

    def error(self, description: str, title: Optional[str] = None) -> Notification:
        logger.info(f"Error notification: {description}")
        return self.notify(
            Notification(
                title=title or self._translate("error"),
                description=description,
                variant=NotificationVariant.DESTRUCTIVE,
            )
        )

    def dismiss(self, notification: Notification) -> bool:
        """Drop one toast. Returns False if it was already gone."""
        try:
            self.messages.remove(notification)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self.messages.clear()
