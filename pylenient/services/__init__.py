"""Concrete services: configuration and the converter provider."""

from .config import IniConfigService, LenientConfig, build_lenient_config
from .converters import ConverterRegistry, default_registry

__all__ = ["ConverterRegistry", "IniConfigService", "LenientConfig", "build_lenient_config", "default_registry"]
