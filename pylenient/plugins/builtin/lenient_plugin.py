from __future__ import annotations

import logging

from pylenient import __version__
from pylenient.domain.interfaces import IConverterProvider, IDisposable
from pylenient.lenient.controller import LenientController
from pylenient.lenient.failure_policy import FailurePolicy
from pylenient.plugins.api import BasePlugin, IAppAPI, PluginMeta
from pylenient.services.config.lenient_config import LenientConfig
from pylenient.services.converters.registry import default_registry

logger = logging.getLogger(__name__)


class LenientPlugin(BasePlugin):
    """
    Shows JS/JSON documents in the lenient dialect while their grammar says so.

    activate() starts following every present and future document;
    deactivate() turns lenient documents back to canonical unless the editor
    itself is unloading.
    """

    meta = PluginMeta(
        id="org.pylenient.lenient",
        name="Lenient Mode",
        version=__version__,
        description="Edit JavaScript and JSON files in a concise lenient dialect.",
        author="PyLenient",
        license="Apache-2.0",
    )

    def __init__(
        self,
        *,
        config: LenientConfig | None = None,
        converters: IConverterProvider | None = None,
    ) -> None:
        self._config = config or LenientConfig()
        self._converters = converters or default_registry(json_indent=self._config.json_indent)
        self._api: IAppAPI | None = None
        self._controller: LenientController | None = None
        self._subscription: IDisposable | None = None

    @property
    def controller(self) -> LenientController | None:
        return self._controller

    def activate(self, api: IAppAPI) -> None:
        if self._controller is not None:
            return
        self._api = api
        self._controller = LenientController(
            converters=self._converters,
            policy=FailurePolicy(api.notifications),
            scope_languages=self._config.scope_languages(),
            reload_on_switch=self._config.reload_on_switch,
        )
        self._subscription = api.observe_documents(self._controller.observe)
        logger.debug("Lenient plugin activated for scopes %s", sorted(self._config.scope_languages()))

    def deactivate(self) -> None:
        if self._controller is None:
            return
        if self._subscription is not None:
            self._subscription.dispose()
        unloading = self._api.is_unloading() if self._api is not None else False
        self._controller.deactivate(unloading=unloading)
        self._controller = None
        self._subscription = None
        self._api = None
