from __future__ import annotations

from pathlib import Path

from pylenient.domain.interfaces import IConverterProvider
from pylenient.host.app_api import WorkspaceAppAPI
from pylenient.host.workspace import Workspace
from pylenient.plugins.builtin.lenient_plugin import LenientPlugin
from pylenient.services.config.lenient_config import LenientConfig, build_lenient_config
from pylenient.services.converters.registry import default_registry


class Container:
    """
    Lightweight DI container:
      - Wires default services if not provided
      - Owns the workspace, its plugin API adapter and the lenient plugin
    """

    def __init__(
        self,
        config: LenientConfig | None = None,
        converters: IConverterProvider | None = None,
        workspace: Workspace | None = None,
    ) -> None:
        self.config: LenientConfig = config or LenientConfig()
        self.converters: IConverterProvider = converters or default_registry(
            json_indent=self.config.json_indent
        )
        self.workspace: Workspace = workspace or Workspace()
        self.app_api = WorkspaceAppAPI(workspace=self.workspace)
        self.lenient_plugin = LenientPlugin(config=self.config, converters=self.converters)

    @staticmethod
    def default(
        *,
        explicit_ini: Path | None = None,
        project_root: Path | None = None,
    ) -> Container:
        """Build a container from the INI configuration on disk."""
        return Container(config=build_lenient_config(explicit_ini=explicit_ini, project_root=project_root))

    # ---------- lifecycle ----------

    def activate_plugins(self) -> None:
        self.lenient_plugin.activate(self.app_api)

    def deactivate_plugins(self) -> None:
        """Plugin switched off while the editor keeps running."""
        self.lenient_plugin.deactivate()

    def shutdown(self) -> None:
        """Editor exit: documents are about to vanish, so they are left as they are."""
        self.workspace.unloading = True
        self.lenient_plugin.deactivate()
        self.workspace.shutdown()
