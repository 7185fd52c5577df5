"""Plugin contracts and the built-in lenient plugin."""

from .api import PLUGIN_API_VERSION, BasePlugin, IAppAPI, IPlugin, PluginMeta

__all__ = ["PLUGIN_API_VERSION", "BasePlugin", "IAppAPI", "IPlugin", "PluginMeta"]
