from __future__ import annotations

from collections.abc import Callable

from pylenient.domain.interfaces import IDisposable, IEditorDocument, INotificationCenter
from pylenient.host.workspace import Workspace
from pylenient.plugins.api import IAppAPI


class WorkspaceAppAPI(IAppAPI):
    """Exposes the workspace to plugins through the stable IAppAPI surface."""

    def __init__(self, *, workspace: Workspace) -> None:
        self._ws = workspace

    def observe_documents(self, callback: Callable[[IEditorDocument], None]) -> IDisposable:
        return self._ws.observe_documents(callback)

    @property
    def notifications(self) -> INotificationCenter:
        return self._ws.notifications

    def is_unloading(self) -> bool:
        return self._ws.unloading
