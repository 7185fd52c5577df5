from __future__ import annotations

import logging
import traceback
from collections.abc import Callable
from functools import partial

from pylenient.domain.interfaces import INotificationCenter
from pylenient.domain.models import Notification
from pylenient.utils.constants import STALE_ON_SAVE

logger = logging.getLogger(__name__)


class FailurePolicy:
    """
    Turns conversion failures into editor notifications and clears the stale
    ones once a lenient save goes through.
    """

    def __init__(self, notifications: INotificationCenter) -> None:
        self._notifications = notifications

    def report(self, category: str, error: Exception, *, source: str | None = None) -> Notification:
        logger.warning("%s (%s): %s", category, source or "untitled", error)
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        return self._notifications.add_error(
            category,
            detail=str(error),
            stack=stack,
            dismissable=True,
            source=source,
        )

    def dismiss_stale(self, source: str | None = None) -> int:
        """
        Dismiss visible save/convert errors. With `source`, only those raised
        for that document (or for no document in particular).
        """
        dismissed = 0
        for notification in self._notifications.get_notifications():
            if notification.dismissed or notification.get_message() not in STALE_ON_SAVE:
                continue
            if source is not None and notification.source not in (None, source):
                continue
            notification.dismiss()
            dismissed += 1
        return dismissed

    def error_reporter(self, category: str, source: str | None = None) -> Callable[[Exception], None]:
        return partial(self._report_error, category, source)

    def success_reporter(self, source: str | None = None) -> Callable[[], None]:
        return partial(self.dismiss_stale, source)

    def _report_error(self, category: str, source: str | None, error: Exception) -> None:
        self.report(category, error, source=source)
