"""Status notifications.

Every library operation reports a short, human-readable message. Front
ends either subscribe to the channel or drain its backlog after a call.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .utils import ReadOnlyList

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    """Kind of notification."""

    BOOK_ADDED = "book_added"
    BOOK_REMOVED = "book_removed"
    BOOK_FOUND = "book_found"
    BOOK_NOT_FOUND = "book_not_found"
    LENT = "lent"  # Item handed to a member
    WAITLISTED = "waitlisted"  # Member queued for an item on loan
    RETURNED = "returned"  # Item back on the shelf
    LEND_COMPLETED = "lend_completed"
    RETURN_COMPLETED = "return_completed"
    MEMBER_ADDED = "member_added"
    MEMBER_REMOVED = "member_removed"
    MEMBER_FOUND = "member_found"
    MEMBER_NOT_FOUND = "member_not_found"


@dataclass(frozen=True)
class Notification:
    """A status message emitted by a library operation."""

    kind: NotificationKind
    message: str
    title: Optional[str] = None
    member_id: Optional[int] = None

    def __str__(self) -> str:
        return self.message


Subscriber = Callable[[Notification], None]


class NotificationChannel:
    """Collects notifications and forwards them to subscribers."""

    def __init__(self):
        self._backlog: list[Notification] = []
        self._subscribers: list[Subscriber] = []

    @property
    def history(self) -> ReadOnlyList[Notification]:
        """Notifications published since the last drain."""
        return ReadOnlyList(self._backlog)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for every published notification.

        Args:
            callback: Called with each notification

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, notification: Notification) -> None:
        """Record a notification and pass it to subscribers."""
        self._backlog.append(notification)
        for callback in list(self._subscribers):
            try:
                callback(notification)
            except Exception:
                logger.exception("Notification subscriber %r failed", callback)

    def drain(self) -> list[Notification]:
        """Return and clear the backlog."""
        drained = list(self._backlog)
        self._backlog.clear()
        return drained
