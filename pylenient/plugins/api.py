from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pylenient.domain.interfaces import IDisposable, IEditorDocument, INotificationCenter

# -----------------------------------------------------------------------------
# Plugin API versioning
# -----------------------------------------------------------------------------
# Bump MAJOR when you introduce breaking changes to these contracts.
PLUGIN_API_VERSION = "1.0"

# -----------------------------------------------------------------------------
# Core metadata
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class PluginMeta:
    """
    Metadata describing a plugin.

    Notes:
      - `id` must be globally unique and stable over time. Use reverse-DNS or
        a clear namespace: "org.pylenient.lenient".
    """

    id: str
    name: str
    version: str
    description: str = ""
    author: str = ""
    license: str = ""
    requires_plugin_api: str = f"=={PLUGIN_API_VERSION.split('.')[0]}.*"


# -----------------------------------------------------------------------------
# Host -> Plugin stable API (no Qt types)
# -----------------------------------------------------------------------------


class IAppAPI(Protocol):
    """
    Stable capabilities exposed to plugins.

    IMPORTANT:
      - No Qt types should appear here.
      - Keep this interface narrow and additive.
    """

    def observe_documents(self, callback: Callable[[IEditorDocument], None]) -> IDisposable:
        """Call `callback` for every present and future document."""
        ...

    @property
    def notifications(self) -> INotificationCenter: ...

    def is_unloading(self) -> bool:
        """True while the whole editor shuts down (documents are about to vanish)."""
        ...


# -----------------------------------------------------------------------------
# Plugin contract
# -----------------------------------------------------------------------------


@runtime_checkable
class IPlugin(Protocol):
    """
    Main plugin contract.

    Lifecycle:
      - activate(api) is called when the plugin is enabled (or on app startup)
      - deactivate() is called when the plugin is disabled and on shutdown
    """

    meta: PluginMeta

    def activate(self, api: IAppAPI) -> None: ...

    def deactivate(self) -> None: ...


class BasePlugin:
    """
    Optional convenience base class that implements no-op lifecycle hooks.
    """

    meta: PluginMeta

    def activate(self, api: IAppAPI) -> None:  # pragma: no cover
        self._api = api  # type: ignore[attr-defined]

    def deactivate(self) -> None:  # pragma: no cover
        pass
