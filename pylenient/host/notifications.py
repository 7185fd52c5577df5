from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from pylenient.domain.models import Notification


class NotificationCenter(QObject):
    """
    The editor's notification list.

    Notifications never expire on their own; they stay listed (and visible)
    until dismissed by the user or by the code that raised them.
    """

    notification_added = pyqtSignal(object)  # Notification
    notification_dismissed = pyqtSignal(object)  # Notification

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._notifications: list[Notification] = []

    def add_error(
        self,
        message: str,
        *,
        detail: str = "",
        stack: str = "",
        dismissable: bool = True,
        source: str | None = None,
    ) -> Notification:
        notification = Notification(
            message=message,
            detail=detail,
            stack=stack,
            dismissable=dismissable,
            source=source,
            _on_dismiss=self._on_dismiss,
        )
        self._notifications.append(notification)
        self.notification_added.emit(notification)
        return notification

    def get_notifications(self) -> list[Notification]:
        return list(self._notifications)

    def visible(self) -> list[Notification]:
        return [n for n in self._notifications if not n.dismissed]

    def clear(self) -> None:
        for notification in self.visible():
            notification.dismiss()
        self._notifications.clear()

    def _on_dismiss(self, notification: Notification) -> None:
        self.notification_dismissed.emit(notification)

